"""
URL mappings for the intake API.

Paths match the ones the intake frontend and admin dashboard call.
Trailing slashes are deliberately omitted.
"""
from django.urls import path, include

from .auth_views import login_view
from .views import health
from .views.intake import submit_intake_view
from .views.submissions import (
    export_submissions_csv,
    list_submissions,
    submission_detail,
    update_submission_status,
)


urlpatterns = [
    # Prometheus exposes /metrics
    path('', include('django_prometheus.urls')),
    path('api/health', health.health, name='health'),
    # Public intake
    path('api/intake/submit', submit_intake_view, name='intake_submit'),
    # Authentication
    path('api/admin/login', login_view, name='login_view'),
    # Admin submissions
    path('api/admin/submissions', list_submissions, name='submission_list'),
    path('api/admin/submissions/export/csv', export_submissions_csv, name='submission_export_csv'),
    path('api/admin/submissions/<uuid:submission_id>', submission_detail, name='submission_detail'),
    path('api/admin/submissions/<uuid:submission_id>/status', update_submission_status, name='submission_status'),
]
