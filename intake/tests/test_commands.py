import pytest
from django.contrib.auth import authenticate
from django.core.management import call_command
from django.core.management.base import CommandError

from intake.models import IntakeSubmission, Patient, User

pytestmark = pytest.mark.django_db


def test_seed_demo_is_idempotent():
    call_command('seed_demo')
    call_command('seed_demo')
    assert User.objects.count() == 1
    assert Patient.objects.count() == 2
    assert IntakeSubmission.objects.count() == 2
    assert sorted(IntakeSubmission.objects.values_list('status', flat=True)) == ['new', 'reviewed']
    user = authenticate(email='admin@demo.com', password='DemoPass123!')
    assert user is not None and user.role == 'admin'


def test_ensure_admin_user_creates_then_resets():
    call_command('ensure_admin_user', email='Staff@Clinic.test', password='first-pass1', role='staff')
    user = User.objects.get(email='staff@clinic.test')
    assert user.role == 'staff'
    assert user.check_password('first-pass1')

    call_command('ensure_admin_user', email='staff@clinic.test', password='second-pass2', role='admin')
    user.refresh_from_db()
    assert User.objects.count() == 1
    assert user.role == 'admin'
    assert user.check_password('second-pass2')


def test_ensure_admin_user_rejects_blank_email():
    with pytest.raises(CommandError):
        call_command('ensure_admin_user', email='  ', password='x', role='admin')
