"""
Admin submissions dashboard.

List with filters, search, sorting and pagination; CSV export with the
same filters; detail view; status changes.  Every endpoint requires a
bearer token whose role grants the matching capability, and every call
is recorded in the activity log.
"""
from __future__ import annotations

from django.conf import settings
from django.http import StreamingHttpResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intake.permissions import CanExportSubmissions, CanUpdateStatus, CanViewSubmissions
from intake.serializers.admin import (
    StatusUpdateSerializer,
    SubmissionDetailSerializer,
    SubmissionListQuerySerializer,
    SubmissionSerializer,
)
from intake.services.audit import log_activity
from intake.services.submissions import (
    filter_submissions,
    get_submission,
    iter_csv_lines,
    paginate_submissions,
    set_submission_status,
)


def _filtered_queryset(request):
    q = SubmissionListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    qs = filter_submissions(
        status=vd.get('status'),
        search=vd['search'],
        sort=vd['sort'],
        order=vd['order'],
    )
    return qs, vd


@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewSubmissions])
def list_submissions(request):
    """Query params: page, limit, status, search, sort, order."""
    qs, vd = _filtered_queryset(request)
    items, pagination = paginate_submissions(qs, page=vd['page'], limit=vd['limit'])

    log_activity(request.user, 'view_submissions_list', {
        'page': vd['page'],
        'status': vd.get('status'),
        'search': vd['search'] or None,
    })

    return Response({
        'ok': True,
        'submissions': SubmissionSerializer(items, many=True).data,
        'pagination': pagination,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, CanExportSubmissions])
def export_submissions_csv(request):
    """Stream every submission matching the list filters as CSV."""
    qs, vd = _filtered_queryset(request)
    row_count = qs.count()

    log_activity(request.user, 'export_csv', {
        'status': vd.get('status'),
        'search': vd['search'] or None,
        'rowCount': row_count,
    })

    resp = StreamingHttpResponse(iter_csv_lines(qs), content_type='text/csv')
    resp['Content-Disposition'] = f'attachment; filename={settings.INTAKE.export_filename}'
    return resp


@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewSubmissions])
def submission_detail(request, submission_id):
    submission = get_submission(submission_id)
    log_activity(request.user, 'view_submission', {'submissionId': str(submission_id)})
    return Response(SubmissionDetailSerializer(submission).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, CanUpdateStatus])
def update_submission_status(request, submission_id):
    s = StatusUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    new_status = s.validated_data['status']

    submission, previous = set_submission_status(submission_id, new_status)

    log_activity(request.user, 'update_status', {
        'submissionId': str(submission_id),
        'previousStatus': previous,
        'newStatus': new_status,
    })

    return Response({
        'ok': True,
        'message': 'Status updated',
        'submission': SubmissionSerializer(submission).data,
    })
