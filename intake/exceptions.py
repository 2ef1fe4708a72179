"""
Unified error envelope for the API.

Every error response has the shape::

    {"ok": false, "error": "<message>", "code": "...", "details": ...}

``error`` is always a human-readable string, which is what the
dashboard and intake frontends display.  ``details`` carries the field
map for validation failures and ``retryAfter`` for throttling.
Authentication and authorization failures carry fixed, generic messages
so a client cannot tell which part of its credentials was wrong.
Anything that is not an ``APIException`` is logged with its traceback
and reported to the client as a bare 500.
"""
from __future__ import annotations

import logging
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    Throttled,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

logger = logging.getLogger('intake.api')

THROTTLE_MESSAGES = {
    'login': 'Too many login attempts, please try again later',
}
DEFAULT_THROTTLE_MESSAGE = 'Too many requests, please try again later'


class StorageError(APIException):
    """The database refused a write the request depends on."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'storage_error'


def error_body(code: str, message: Any, details: Any = None) -> dict:
    return {'ok': False, 'error': message, 'code': code, 'details': details}


def error_response(code: str, message: Any, http_status: int, details: Any = None, headers=None) -> Response:
    return Response(error_body(code, message, details), status=http_status, headers=headers)


def _code_for(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return 'validation_error'
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return 'not_authenticated'
    if isinstance(exc, PermissionDenied):
        return 'permission_denied'
    if isinstance(exc, Http404):
        return 'not_found'
    if isinstance(exc, APIException):
        return getattr(exc, 'default_code', 'api_error') or 'api_error'
    return 'api_error'


def _message_for(exc: Exception, request, data: Any) -> tuple[str, Any]:
    if isinstance(exc, ValidationError):
        return 'Validation failed', data
    if isinstance(exc, NotAuthenticated):
        return 'Authentication required', None
    if isinstance(exc, AuthenticationFailed):
        return 'Invalid or expired token', None
    if isinstance(exc, PermissionDenied):
        return 'Insufficient permissions', None
    if isinstance(exc, Throttled):
        scope = getattr(request, 'throttled_scope', None)
        return THROTTLE_MESSAGES.get(scope, DEFAULT_THROTTLE_MESSAGE), {'retryAfter': exc.wait}
    if isinstance(data, dict) and 'detail' in data:
        return str(data['detail']), None
    return 'Request failed', data


_FORWARDED_HEADERS = ('WWW-Authenticate', 'Retry-After')


def api_exception_handler(exc, context):
    request = context.get('request')
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', getattr(request, 'path', '?'), exc_info=exc)
        set_rollback()
        return error_response('server_error', 'Internal server error', status.HTTP_500_INTERNAL_SERVER_ERROR)

    if resp.status_code >= 500:
        # Details of server-side failures stay in the log
        message = str(exc.detail) if isinstance(exc, StorageError) else 'Internal server error'
        return error_response(_code_for(exc), message, resp.status_code)

    headers = {k: resp.headers[k] for k in _FORWARDED_HEADERS if k in resp.headers}
    message, details = _message_for(exc, request, resp.data)
    return error_response(_code_for(exc), message, resp.status_code, details, headers=headers)
