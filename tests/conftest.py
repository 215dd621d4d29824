"""Shared fixtures for EggLabel tests."""

from datetime import date, datetime

import pytest

from egglabel.models import Record
from egglabel.store import RecordStore


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 10, 30)


@pytest.fixture
def sample_records(now):
    """Three decoded records, oldest first."""
    return [
        Record.create("1-RU-12345", date(2025, 1, 10), now=datetime(2025, 1, 10, 8, 0)),
        Record.create("0DE001", None, now=datetime(2025, 1, 12, 9, 0)),
        Record.create("C0-2-FR-77", date(2024, 12, 1), now=now),
    ]


@pytest.fixture
def store(sample_records):
    return RecordStore(sample_records)
