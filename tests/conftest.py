"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fixtures.generate_appointments import generate_appointments  # noqa: E402


@pytest.fixture
def sample_record():
    """Sample appointment record as sent by the clinic API."""
    return {
        "id": "appt-1",
        "clientId": "client-1",
        "client": {"id": "client-1", "name": "Maria Souza"},
        "serviceId": "service-1",
        "scheduledDate": "2024-01-03",
        "startTime": "09:00",
        "endTime": "10:30",
        "status": "CONFIRMED",
        "appointmentType": "CONSULTATION",
    }


@pytest.fixture
def sample_records(sample_record):
    """Small week of records, one per interesting case."""
    return [
        sample_record,
        {
            **sample_record,
            "id": "appt-2",
            "client": None,
            "clientId": "client-2",
            "scheduledDate": "2024-01-03",
            "startTime": "14:00",
            "endTime": None,
            "status": "SCHEDULED",
            "appointmentType": "TREATMENT",
        },
        {
            **sample_record,
            "id": "appt-3",
            "scheduledDate": "2024-01-05",
            "startTime": "06:00",
            "endTime": "07:00",
            "status": "CONFIRMED",
            "appointmentType": "UNKNOWN_TYPE",
        },
        {
            **sample_record,
            "id": "appt-4",
            "scheduledDate": "2024-01-10",
            "startTime": "11:00",
            "endTime": "11:30",
            "status": "confirmed",
        },
    ]


@pytest.fixture
def week_anchor():
    return date(2024, 1, 1)


@pytest.fixture
def generated_records(week_anchor):
    """Faker-generated week of appointments."""
    return generate_appointments(week_anchor, count=40)


@pytest.fixture
def request_log_db(tmp_path, monkeypatch):
    """Request log database in a temp dir, wired into api.logging."""
    from scripts.init_db import create_database

    db_path = tmp_path / "clinic-calendar.db"
    create_database(db_path)
    monkeypatch.setattr("api.logging.DB_PATH", db_path)
    return db_path
