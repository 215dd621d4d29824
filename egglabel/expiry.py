"""Expiry date arithmetic and freshness classification."""

from __future__ import annotations

from datetime import date, datetime, timedelta

SHELF_LIFE_DAYS = 28

# Days remaining above which an egg counts as fresh
SOON_THRESHOLD_DAYS = 7

FRESH = "fresh"
SOON = "soon"
EXPIRED = "expired"


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_expiry(packing_date: date | datetime) -> date:
    """Return the expiry date, ``SHELF_LIFE_DAYS`` calendar days after packing."""
    return _as_date(packing_date) + timedelta(days=SHELF_LIFE_DAYS)


def days_remaining(expiry: date | datetime, now: date | datetime) -> int:
    """Whole calendar days from ``now`` until ``expiry`` (negative once past)."""
    return (_as_date(expiry) - _as_date(now)).days


def expiry_state(expiry: date | datetime, now: date | datetime) -> str:
    """Classify an expiry date as fresh, soon or expired relative to ``now``."""
    days = days_remaining(expiry, now)
    if days > SOON_THRESHOLD_DAYS:
        return FRESH
    if days > 0:
        return SOON
    return EXPIRED
