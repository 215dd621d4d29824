"""Expiry reminder planning."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .models import Record

REMINDER_TITLE = "Egg Expiry Reminder"


@dataclass(frozen=True)
class Reminder:
    identifier: str
    fire_at: datetime
    title: str
    message: str


def _message(factory: str, lookahead_days: int) -> str:
    if lookahead_days == 1:
        when = "tomorrow"
    elif lookahead_days == 0:
        when = "today"
    else:
        when = f"in {lookahead_days} days"
    return f"Your eggs from {factory} expire {when}!"


def plan(
    records: Iterable[Record],
    now: date | datetime,
    lookahead_days: int = 1,
    at: time = time(9, 0),
) -> list[Reminder]:
    """Build one reminder per record that has not expired yet.

    Each reminder fires ``lookahead_days`` before the expiry date at time of
    day ``at`` and reuses the record identifier, so a fresh plan can replace
    previously scheduled reminders one for one.

    Fire times are calendar-day based: with the defaults a record expiring
    on the 10th fires at 09:00 on the 9th, whatever time of day it was
    packed or checked, so the reminder can land less than 24 hours before
    expiry.
    """
    today = now.date() if isinstance(now, datetime) else now
    reminders: list[Reminder] = []
    for record in records:
        if record.expiry_date is None or record.expiry_date <= today:
            continue
        fire_day = record.expiry_date - timedelta(days=lookahead_days)
        reminders.append(
            Reminder(
                identifier=record.identifier,
                fire_at=datetime.combine(fire_day, at),
                title=REMINDER_TITLE,
                message=_message(record.factory, lookahead_days),
            )
        )
    return reminders
