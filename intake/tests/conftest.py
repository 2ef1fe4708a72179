import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from intake.models import User
from intake.tests.helpers import auth_client


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    # throttle history lives in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(email="admin@clinic.test", password="S3cure!pass", role="admin")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(email="staff@clinic.test", password="S3cure!pass", role="staff")


@pytest.fixture
def admin_client(admin_user):
    return auth_client(admin_user)
