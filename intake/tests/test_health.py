from unittest import mock

import pytest
from django.db import OperationalError
from django.urls import reverse

pytestmark = pytest.mark.django_db


def test_health_ok(api_client):
    r = api_client.get(reverse('health'))
    assert r.status_code == 200
    body = r.json()
    assert body['status'] == 'ok'
    assert body['db'] is True
    assert body['timestamp']


def test_health_reports_database_outage(api_client):
    with mock.patch('intake.views.health.connections') as conns:
        conns.__getitem__.return_value.cursor.side_effect = OperationalError('down')
        r = api_client.get(reverse('health'))
    assert r.status_code == 500
    assert r.json()['status'] == 'error'
    assert r.json()['db'] is False


def test_unknown_route_is_json_404(api_client):
    r = api_client.get('/api/does-not-exist')
    assert r.status_code == 404
    assert r.json() == {'ok': False, 'error': 'Route not found', 'code': 'not_found', 'details': None}


def test_error_message_is_a_plain_string(api_client):
    r = api_client.get('/api/admin/submissions')
    body = r.json()
    assert r.status_code == 401
    assert body['error'] == 'Authentication required'
    assert body['code'] == 'not_authenticated'
