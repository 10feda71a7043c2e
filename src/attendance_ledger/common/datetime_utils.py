from __future__ import annotations

from datetime import date, datetime, time, timedelta


def to_date_key(value: date) -> int:
    """date(2025, 1, 1) -> 20250101."""
    return int(value.strftime("%Y%m%d"))


def to_time_slot(value: time) -> int:
    """time(9, 30) -> 930."""
    return value.hour * 100 + value.minute


def date_key_days_from(today: date, offset_days: int) -> int:
    """Date key `offset_days` away from today (negative for the past)."""
    return to_date_key(today + timedelta(days=offset_days))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
