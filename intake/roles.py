"""
Staff roles and the capabilities they grant.

Role is a closed enumeration; access decisions go through
:func:`role_has_capability` instead of comparing role strings at each
call site.
"""
from __future__ import annotations

from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Administrator'
    STAFF = 'staff', 'Staff'


class Capability(models.TextChoices):
    VIEW_SUBMISSIONS = 'submissions.view', 'View submissions'
    EXPORT_SUBMISSIONS = 'submissions.export', 'Export submissions'
    UPDATE_STATUS = 'submissions.update_status', 'Update submission status'


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.STAFF: frozenset(Capability),
}


def role_has_capability(role, capability: Capability) -> bool:
    """Return True if ``role`` (a :class:`Role` or its value) grants ``capability``."""
    try:
        role = Role(role)
    except ValueError:
        return False
    return capability in ROLE_CAPABILITIES.get(role, frozenset())
