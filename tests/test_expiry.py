"""Tests for expiry arithmetic and freshness states."""

from datetime import date, datetime, timedelta

import pytest

from egglabel.expiry import (
    EXPIRED,
    FRESH,
    SHELF_LIFE_DAYS,
    SOON,
    compute_expiry,
    days_remaining,
    expiry_state,
)


@pytest.mark.parametrize(
    "packing, expected",
    [
        (date(2025, 1, 10), date(2025, 2, 7)),
        (date(2024, 2, 10), date(2024, 3, 9)),  # leap year
        (date(2025, 2, 10), date(2025, 3, 10)),
        (date(2025, 12, 20), date(2026, 1, 17)),
        (date(2025, 3, 20), date(2025, 4, 17)),  # across DST change
    ],
)
def test_compute_expiry(packing, expected):
    assert compute_expiry(packing) == expected
    assert compute_expiry(packing) - packing == timedelta(days=SHELF_LIFE_DAYS)


def test_compute_expiry_accepts_datetime():
    assert compute_expiry(datetime(2025, 1, 10, 23, 30)) == date(2025, 2, 7)


def test_compute_expiry_no_range_check():
    assert compute_expiry(date(1900, 1, 1)) == date(1900, 1, 29)


def test_expiry_state_scenarios():
    now = datetime(2025, 1, 10, 12, 0)
    assert expiry_state(now + timedelta(days=10), now) == FRESH
    assert expiry_state(now + timedelta(days=3), now) == SOON
    assert expiry_state(now - timedelta(days=1), now) == EXPIRED


@pytest.mark.parametrize(
    "days, state",
    [(8, FRESH), (7, SOON), (1, SOON), (0, EXPIRED), (-5, EXPIRED)],
)
def test_expiry_state_boundaries(days, state):
    today = date(2025, 6, 1)
    assert expiry_state(today + timedelta(days=days), today) == state


def test_days_remaining_uses_calendar_days():
    """Time of day does not shorten the count."""
    now = datetime(2025, 1, 10, 23, 59)
    assert days_remaining(date(2025, 1, 11), now) == 1
    assert days_remaining(date(2025, 1, 9), now) == -1
