import dataclasses
from unittest import mock

import pytest
from django.db import DatabaseError
from django.urls import reverse

from intake.models import ActivityLog, ActivityLogError
from intake.roles import Capability, Role, role_has_capability
from intake.services import audit
from intake.tests.helpers import create_submission

pytestmark = pytest.mark.django_db


def test_both_roles_hold_every_capability():
    for role in (Role.ADMIN, Role.STAFF, 'admin', 'staff'):
        for cap in Capability:
            assert role_has_capability(role, cap)


def test_unknown_roles_hold_nothing():
    for role in ('patient', 'superuser', '', None):
        assert not role_has_capability(role, Capability.VIEW_SUBMISSIONS)


def test_log_activity_writes_entry(admin_user):
    audit.log_activity(admin_user, 'view_submission', {'submissionId': 'abc'})
    entry = ActivityLog.objects.get()
    assert entry.user == admin_user
    assert entry.action == 'view_submission'
    assert entry.metadata == {'submissionId': 'abc'}
    assert entry.created_at is not None


def test_anonymous_entry_has_no_user():
    audit.log_activity(None, 'admin_login_failed', {'email': 'x@example.com'})
    assert ActivityLog.objects.get().user is None


def test_audit_failure_does_not_break_the_request(admin_client):
    sub = create_submission()
    seen = []

    def receiver(sender, action, metadata, exc, **kwargs):
        seen.append((action, metadata, exc))

    audit.activity_log_failed.connect(receiver)
    try:
        with mock.patch.object(ActivityLog.objects, 'create', side_effect=DatabaseError('log table gone')):
            r = admin_client.patch(reverse('submission_status', args=[sub.id]), {'status': 'completed'}, format='json')
    finally:
        audit.activity_log_failed.disconnect(receiver)

    assert r.status_code == 200
    sub.refresh_from_db()
    assert sub.status == 'completed'
    assert ActivityLog.objects.count() == 0
    assert len(seen) == 1
    action, metadata, exc = seen[0]
    assert action == 'update_status'
    assert metadata['newStatus'] == 'completed'
    assert isinstance(exc, DatabaseError)


def test_async_mode_hands_off_to_executor(settings, monkeypatch, admin_user):
    settings.INTAKE = dataclasses.replace(settings.INTAKE, audit_async=True)
    submitted = []

    class FakeExecutor:
        def submit(self, fn, *args, **kwargs):
            submitted.append((fn, args, kwargs))

    monkeypatch.setattr(audit, '_get_executor', lambda workers: FakeExecutor())
    assert audit.log_activity(admin_user, 'export_csv', {'rowCount': 2}) is None

    assert ActivityLog.objects.count() == 0
    assert len(submitted) == 1
    fn, args, kwargs = submitted[0]
    assert fn is audit._dispatch
    assert args == (admin_user.pk, 'export_csv', {'rowCount': 2})
    assert kwargs == {'threaded': True}


def test_async_mode_after_shutdown_drops_entry(settings, monkeypatch, admin_user):
    settings.INTAKE = dataclasses.replace(settings.INTAKE, audit_async=True)

    class ClosedExecutor:
        def submit(self, fn, *args, **kwargs):
            raise RuntimeError('cannot schedule new futures after shutdown')

    monkeypatch.setattr(audit, '_get_executor', lambda workers: ClosedExecutor())
    audit.log_activity(admin_user, 'export_csv')
    assert ActivityLog.objects.count() == 0


def test_entries_are_immutable(admin_user):
    audit.log_activity(admin_user, 'view_submissions_list')
    entry = ActivityLog.objects.get()
    entry.action = 'something_else'
    with pytest.raises(ActivityLogError):
        entry.save()
    with pytest.raises(ActivityLogError):
        entry.delete()
    assert ActivityLog.objects.get().action == 'view_submissions_list'
