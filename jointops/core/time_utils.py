from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (aware)."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to an aware UTC datetime.

    - None -> None
    - naive datetimes are interpreted as UTC (SQLite drops tzinfo on read)
    - aware datetimes are converted to UTC
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def horizon(start: datetime, days: int) -> datetime:
    return ensure_utc(start) + timedelta(days=days)


def in_window(moment: datetime, start: datetime, end: Optional[datetime]) -> bool:
    """True when ``start <= moment < end`` (an absent end is open-ended)."""
    moment = ensure_utc(moment)
    if ensure_utc(start) > moment:
        return False
    return end is None or ensure_utc(end) > moment
