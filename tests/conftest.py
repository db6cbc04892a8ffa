"""Shared pytest fixtures for testing."""
import json
import os
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
import pytest
from chicken_door.config.config import Settings
from chicken_door.decision_engine import DoorDecisionEngine
from chicken_door.models.door_status import DoorStatus
from chicken_door.models.sun_couplet import SunCouplet
from chicken_door.scheduler.reconciliation_loop import ReconciliationLoop
from chicken_door.services import Almanac, StatusGateway
from chicken_door.storage import JsonFileStatusStore

ACCESS_KEY = 'cluck-cluck-secret'
SUNRISE = 21600.0  # 06:00
SUNSET = 64800.0  # 18:00


def at_day_position(ordinal: int, now_seconds: int, year: int = 2023) -> datetime:
    """UTC datetime falling on ordinal at now_seconds past midnight."""
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start + timedelta(days=ordinal - 1, seconds=now_seconds)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    path = tempfile.mkdtemp()
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def schedule_file(temp_dir):
    """Schedule with the same 06:00 sunrise and 18:00 sunset every day of a leap year."""
    path = os.path.join(temp_dir, 'schedule.json')
    with open(path, 'w') as handle:
        json.dump([{'sunrise': SUNRISE, 'sunset': SUNSET}] * 366, handle)
    return path


@pytest.fixture
def status_file(temp_dir):
    """Status file holding the default record."""
    path = os.path.join(temp_dir, 'door_status.json')
    with open(path, 'w') as handle:
        json.dump(DoorStatus.default().to_dict(), handle)
    return path


@pytest.fixture
def almanac():
    return Almanac([SunCouplet(sunrise=SUNRISE, sunset=SUNSET)] * 366)


@pytest.fixture
def file_store(status_file):
    return JsonFileStatusStore(status_file)


@pytest.fixture
def gateway(file_store):
    return StatusGateway(file_store, ACCESS_KEY, lock_timeout_seconds=1.0)


@pytest.fixture
def settings(schedule_file, status_file, temp_dir):
    return Settings(
        interval_seconds=60,
        access_key=ACCESS_KEY,
        schedule_file=schedule_file,
        status_file=status_file,
        log_dir=os.path.join(temp_dir, 'logs'),
    )


@pytest.fixture
def make_loop(gateway, almanac):
    """Factory for a loop whose clock is pinned to (ordinal, now_seconds)."""
    def _make(ordinal: int, now_seconds: int, interval_seconds: float = 60):
        return ReconciliationLoop(
            gateway, almanac, DoorDecisionEngine(),
            interval_seconds=interval_seconds,
            clock=lambda: at_day_position(ordinal, now_seconds),
        )
    return _make


@pytest.fixture
def app(gateway):
    """Create Flask app for testing."""
    from main import create_app
    flask_app = create_app(gateway)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {'x-access-key': ACCESS_KEY}
