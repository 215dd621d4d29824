"""Tests for ReminderScheduler."""

from datetime import date, datetime

import pytest

from egglabel.config import load_config
from egglabel.db import HistoryDB
from egglabel.models import Record
from egglabel.reminders import Reminder
from egglabel.store import RecordStore


@pytest.fixture
def scheduler_cls():
    pytest.importorskip("apscheduler")
    from egglabel.scheduler import ReminderScheduler

    return ReminderScheduler


def _reminder(identifier: str, fire_at: datetime) -> Reminder:
    return Reminder(identifier, fire_at, "Egg Expiry Reminder", f"Your eggs from {identifier} expire tomorrow!")


def test_scheduler_initial_state(scheduler_cls):
    scheduler = scheduler_cls(load_config())
    assert scheduler.running is False
    assert scheduler.get_jobs() == []


def test_setup_jobs_registers_refresh(scheduler_cls):
    scheduler = scheduler_cls(load_config())
    scheduler.setup_jobs()
    job_ids = {j["id"] for j in scheduler.get_jobs()}
    assert job_ids == {"refresh_reminders"}


def test_invalid_cron_raises(scheduler_cls):
    config = load_config()
    config.reminders.refresh_schedule = "every day"
    scheduler = scheduler_cls(config)
    with pytest.raises(ValueError, match="cron"):
        scheduler.setup_jobs()


def test_sync_schedules_future_reminders(scheduler_cls):
    scheduler = scheduler_cls(load_config())
    now = datetime(2099, 1, 1, 12, 0)
    count = scheduler.sync(
        [
            _reminder("a", datetime(2099, 1, 5, 9, 0)),
            _reminder("b", datetime(2098, 12, 31, 9, 0)),  # already passed
            _reminder("c", datetime(2099, 2, 1, 9, 0)),
        ],
        now,
    )
    assert count == 2
    assert {j["id"] for j in scheduler.get_jobs()} == {"a", "c"}


def test_sync_replaces_previous_reminders(scheduler_cls):
    scheduler = scheduler_cls(load_config())
    scheduler.setup_jobs()
    now = datetime(2099, 1, 1)
    scheduler.sync([_reminder("a", datetime(2099, 1, 5, 9, 0))], now)
    scheduler.sync([_reminder("b", datetime(2099, 1, 6, 9, 0))], now)

    job_ids = {j["id"] for j in scheduler.get_jobs()}
    assert job_ids == {"refresh_reminders", "b"}


def test_refresh_reads_saved_history(scheduler_cls, tmp_path):
    config = load_config()
    config.database.path = str(tmp_path / "history.db")
    fresh = Record.create("1DE42", date(2099, 1, 1))
    expired = Record.create("1DE43", date(2000, 1, 1))
    with HistoryDB(config.database.path) as db:
        db.save_store(RecordStore([fresh, expired]))

    scheduler = scheduler_cls(config)
    count = scheduler.refresh(now=datetime(2099, 1, 2))

    assert count == 1
    assert {j["id"] for j in scheduler.get_jobs()} == {fresh.identifier}


def test_custom_deliver_is_used(scheduler_cls):
    delivered = []
    scheduler = scheduler_cls(load_config(), deliver=delivered.append)
    scheduler.sync([_reminder("a", datetime(2099, 1, 5, 9, 0))], datetime(2099, 1, 1))
    job = scheduler._scheduler.get_job("a")
    job.func(*job.args)
    assert delivered[0].identifier == "a"
