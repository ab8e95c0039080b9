"""Conversions between ORM instances and the plain dict rows the services see."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import inspect

from jointops.core.time_utils import ensure_utc
from jointops.db.base import Base

Row = dict[str, Any]


def bind_value(value: Any) -> Any:
    # SQLite stores the wall-clock digits only, so everything goes in as UTC
    if isinstance(value, datetime):
        return ensure_utc(value)
    return value


def to_row(instance: Base) -> Row:
    """Flatten an ORM instance into a plain column dict (datetimes tagged UTC)."""
    row: Row = {}
    for attr in inspect(instance).mapper.column_attrs:
        value = getattr(instance, attr.key)
        row[attr.key] = ensure_utc(value) if isinstance(value, datetime) else value
    return row
