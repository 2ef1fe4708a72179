"""
Admin login.

Email/password login for dashboard accounts.  A successful login
returns a signed bearer token (see ``intake.authentication``) and the
public part of the user record.  Failed attempts get one generic
answer whether the email is unknown or the password is wrong.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from intake.authentication import issue_access_token
from intake.exceptions import error_response
from intake.roles import Role
from intake.serializers.auth import LoginSerializer
from intake.services.audit import log_activity
from intake.throttling import ClientIPRateThrottle, LoginRateThrottle


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([ClientIPRateThrottle, LoginRateThrottle])
def login_view(request):
    """Exchange ``{email, password}`` for ``{token, user}``."""
    s = LoginSerializer(data=request.data)
    if not s.is_valid():
        return error_response('validation_error', 'Invalid credentials format', status.HTTP_400_BAD_REQUEST)
    email = s.validated_data['email']
    password = s.validated_data['password']

    user = authenticate(request, email=email, password=password)
    if user is None or user.role not in Role.values:
        log_activity(None, 'admin_login_failed', {'email': email, 'ip': request.META.get('REMOTE_ADDR')})
        return error_response('not_authenticated', 'Invalid email or password', status.HTTP_401_UNAUTHORIZED)

    log_activity(user, 'admin_login', {'email': user.email})

    return Response({
        'ok': True,
        'token': issue_access_token(user),
        'user': {
            'id': str(user.id),
            'email': user.email,
            'role': user.role,
        },
    }, status=200)
