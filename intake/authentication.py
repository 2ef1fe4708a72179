"""
Bearer token authentication for the admin API.

Tokens are signed JWTs issued by :func:`intake.auth_views.login_view`.
This subclass of simplejwt's ``JWTAuthentication`` collapses every
token problem (bad signature, expiry, unknown or inactive user) into a
single generic ``AuthenticationFailed`` so responses never reveal which
check failed.
"""
from __future__ import annotations

from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import AccessToken

GENERIC_FAILURE = 'Invalid or expired token'


class BearerTokenAuthentication(JWTAuthentication):
    """``Authorization: Bearer <token>`` authentication with generic failures."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, TokenError, exceptions.AuthenticationFailed):
            raise exceptions.AuthenticationFailed(GENERIC_FAILURE)


def issue_access_token(user) -> str:
    """Return a signed access token carrying the user's id, email and role."""
    token = AccessToken.for_user(user)
    token['email'] = user.email
    token['role'] = user.role
    return str(token)
