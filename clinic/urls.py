"""
URL configuration for the patient intake backend.

The `urlpatterns` list routes URLs to views.  This module includes
the Django admin and the API routes provided by the intake app.
OpenAPI documentation is exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Patient Intake API",
    default_version='v1',
    description="Public intake submission and the admin submissions dashboard.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Django admin site (user management happens here)
    path('admin/', admin.site.urls),
    # Include API routes from the intake app
    path('', include('intake.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]

handler404 = 'intake.views.health.route_not_found'
handler500 = 'intake.views.health.server_error'
