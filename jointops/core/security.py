"""Seller PIN hashing (bcrypt)."""

from __future__ import annotations

import re

import bcrypt

from jointops.core.exceptions import ValidationError

_PIN_RE = re.compile(r"^\d{4,8}$")


def validate_pin(pin: str) -> None:
    if not pin or not _PIN_RE.match(pin):
        raise ValidationError("PIN must be 4 to 8 digits")


def hash_pin(pin: str, rounds: int = 12) -> str:
    """Hash a seller PIN with bcrypt. The PIN is validated first."""
    validate_pin(pin)
    hashed = bcrypt.hashpw(pin.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")  # stored as string


def verify_pin(pin: str | None, pin_hash: str | None) -> bool:
    """Timing-safe check of ``pin`` against a stored bcrypt hash."""
    if not pin or not pin_hash:
        return False
    try:
        return bcrypt.checkpw(pin.encode("utf-8"), pin_hash.encode("utf-8"))
    except ValueError:
        # malformed hash in the store
        return False
