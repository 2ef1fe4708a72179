import logging

from django.db import connections
from django.http import JsonResponse
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from intake.exceptions import error_body

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    now = timezone.now().isoformat()
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except Exception:
        logger.exception('health check could not reach the database')
        return Response({'status': 'error', 'timestamp': now, 'db': False}, status=500)
    return Response({'status': 'ok', 'timestamp': now, 'db': bool(row and row[0] == 1)})


def route_not_found(request, exception=None):
    return JsonResponse(error_body('not_found', 'Route not found'), status=404)


def server_error(request):
    return JsonResponse(error_body('server_error', 'Internal server error'), status=500)
