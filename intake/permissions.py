"""
Capability based permission classes for the admin API.
"""
from __future__ import annotations

from rest_framework.permissions import BasePermission

from .roles import Capability, role_has_capability


class HasCapability(BasePermission):
    """Allow access when the user's role grants ``required_capability``.

    Subclasses (or :func:`requires`) pin the capability.
    """
    required_capability: Capability | None = None

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        return self.required_capability is not None and role_has_capability(
            getattr(user, "role", None), self.required_capability
        )


def requires(capability: Capability) -> type[HasCapability]:
    """Build a permission class bound to ``capability``."""
    return type(f"Requires_{capability.name}", (HasCapability,), {"required_capability": capability})


CanViewSubmissions = requires(Capability.VIEW_SUBMISSIONS)
CanExportSubmissions = requires(Capability.EXPORT_SUBMISSIONS)
CanUpdateStatus = requires(Capability.UPDATE_STATUS)
