"""Tests for the door status API."""
import json
import os
from unittest.mock import patch
import pytest
from chicken_door.models.door_status import DoorStatus
from chicken_door.storage import StatusStoreError

MANUAL = {'executed': 1, 'up': 1, 'over_ride': 1, 'over_ride_day': 150}


class TestAuthentication:
    """Test the access key check on both endpoints."""

    @pytest.mark.parametrize('headers', [{}, {'x-access-key': ''}, {'x-access-key': 'wrong'}])
    def test_get_rejected(self, client, headers):
        response = client.get('/get_door_status', headers=headers)
        assert response.status_code == 401
        assert response.get_json()['success'] is False

    @pytest.mark.parametrize('headers', [{}, {'x-access-key': 'cluck-cluck-secreT'}])
    def test_put_rejected_without_touching_state(self, client, headers, file_store):
        response = client.put('/update_door_status', json=MANUAL, headers=headers)
        assert response.status_code == 401
        assert file_store.read_status() == DoorStatus.default()


class TestGetDoorStatus:
    """Test reading the door status."""

    def test_get_status(self, client, auth_headers):
        response = client.get('/get_door_status', headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json() == {'executed': 1, 'up': 0, 'over_ride': 0, 'over_ride_day': 0}

    def test_missing_status_file(self, client, auth_headers, status_file):
        os.remove(status_file)
        response = client.get('/get_door_status', headers=auth_headers)
        assert response.status_code == 503
        assert response.get_json()['success'] is False

    def test_corrupt_status_file(self, client, auth_headers, status_file):
        with open(status_file, 'w') as handle:
            handle.write('not json')
        response = client.get('/get_door_status', headers=auth_headers)
        assert response.status_code == 503


class TestUpdateDoorStatus:
    """Test replacing the door status."""

    def test_put_echoes_and_stores(self, client, auth_headers, status_file):
        response = client.put('/update_door_status', json=MANUAL, headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json() == MANUAL
        with open(status_file) as handle:
            assert json.load(handle) == MANUAL

    def test_put_then_get(self, client, auth_headers):
        client.put('/update_door_status', json=MANUAL, headers=auth_headers)
        response = client.get('/get_door_status', headers=auth_headers)
        assert response.get_json() == MANUAL

    def test_execution_confirmation(self, client, auth_headers):
        """The door reports a finished motion by setting executed back to 1."""
        confirmed = {'executed': 1, 'up': 1, 'over_ride': 0, 'over_ride_day': 100}
        response = client.put('/update_door_status', json=confirmed, headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json() == confirmed

    @pytest.mark.parametrize('body', [
        {'executed': 1, 'up': 1, 'over_ride': 0},
        {'executed': 2, 'up': 1, 'over_ride': 0, 'over_ride_day': 1},
        {'executed': '1', 'up': 1, 'over_ride': 0, 'over_ride_day': 1},
        {'executed': 1, 'up': 1, 'over_ride': 0, 'over_ride_day': 400},
        [1, 1, 0, 1],
    ])
    def test_invalid_body(self, client, auth_headers, body, file_store):
        response = client.put('/update_door_status', json=body, headers=auth_headers)
        assert response.status_code == 422
        assert response.get_json()['success'] is False
        assert file_store.read_status() == DoorStatus.default()

    def test_non_json_body(self, client, auth_headers):
        response = client.put('/update_door_status', data='up please', headers=auth_headers)
        assert response.status_code == 422

    def test_write_failure(self, client, auth_headers, gateway):
        with patch.object(gateway.store, 'replace_status', side_effect=StatusStoreError('disk full')):
            response = client.put('/update_door_status', json=MANUAL, headers=auth_headers)
        assert response.status_code == 503


class TestMisc:
    """Test the unauthenticated endpoints."""

    def test_home(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert b'Chicken' in response.data

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'healthy'

    def test_cors_headers(self, client, auth_headers):
        response = client.get('/get_door_status', headers={**auth_headers, 'Origin': 'http://coop.local'})
        # newer flask-cors releases echo the request origin instead of '*'
        assert response.headers.get('Access-Control-Allow-Origin') in ('*', 'http://coop.local')
