"""Quantity and currency helpers shared by the ledger and reconciliation services."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from jointops.core.exceptions import ConfigError, ValidationError


def sum_field(rows: Iterable[Mapping[str, Any]], field: str) -> float:
    """Sum ``field`` across rows; missing or null values count as zero."""
    return float(sum(row.get(field) or 0 for row in rows))


def check_unit_price(unit_price: float) -> float:
    if unit_price is None or unit_price <= 0:
        raise ConfigError(f"Basis unit price must be positive, got {unit_price!r}")
    return float(unit_price)


def to_basis_units(amount: float, unit_price: float) -> float:
    """Convert a currency amount into basis units at ``unit_price``."""
    return float(amount or 0) / check_unit_price(unit_price)


def require_positive(value: Any, field: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    return number


def require_non_negative(value: Any, field: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{field} must not be negative")
    return number
