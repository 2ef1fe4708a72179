"""
Per-client-IP sliding window rate limits.

DRF's ``SimpleRateThrottle`` keeps a history of request timestamps in
the cache and drops those older than the window, which is a sliding
window.  The classes here key every request on the client address
(authenticated or not) and accept multi-unit periods such as
``200/15m``.
"""
from __future__ import annotations

import re

from rest_framework.throttling import SimpleRateThrottle

_RATE = re.compile(r'^\s*(\d+)\s*/\s*(\d*)\s*([smhd])\w*\s*$')
_UNIT_SECONDS = {'s': 1, 'm': 60, 'h': 3600, 'd': 86400}


def parse_rate(rate):
    """Return ``(num_requests, duration_seconds)`` for ``'<n>/<count><unit>'``."""
    if rate is None:
        return None, None
    match = _RATE.match(rate)
    if not match:
        raise ValueError(f'invalid throttle rate {rate!r}')
    num, count, unit = match.groups()
    return int(num), int(count or 1) * _UNIT_SECONDS[unit]


class ClientIPRateThrottle(SimpleRateThrottle):
    """General bucket applied to every API request."""
    scope = 'general'

    def parse_rate(self, rate):
        return parse_rate(rate)

    def get_cache_key(self, request, view):
        return self.cache_format % {'scope': self.scope, 'ident': self.get_ident(request)}

    def allow_request(self, request, view):
        allowed = super().allow_request(request, view)
        if not allowed:
            request.throttled_scope = self.scope
        return allowed


class LoginRateThrottle(ClientIPRateThrottle):
    """Tighter bucket for the login endpoint, applied on top of the general one."""
    scope = 'login'
