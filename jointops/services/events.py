"""Event service — scheduled customer events with their pricing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jointops.core.exceptions import ValidationError
from jointops.core.numeric import require_non_negative
from jointops.services.base import fetch_one
from jointops.store import Order, Row, RowFilter, Store

logger = logging.getLogger(__name__)

EVENT_STATUSES = ("planned", "confirmed", "done", "cancelled")

_FEES = ("delivery_fee", "opening_fee", "other_fee")


def event_total(pricing: Mapping[str, Any] | None) -> float | None:
    """``unit_qty * unit_price`` plus the fees; ``None`` when there is no pricing."""
    if not pricing:
        return None
    total = float(pricing.get("unit_qty") or 0) * float(pricing.get("unit_price") or 0)
    return total + sum(float(pricing.get(fee) or 0) for fee in _FEES)


class EventService:
    def __init__(self, store: Store):
        self._store = store

    async def create_event(self, event: Mapping[str, Any], pricing: Mapping[str, Any]) -> Row:
        status = event.get("status") or "planned"
        if status not in EVENT_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(EVENT_STATUSES)}")
        if not event.get("event_ts"):
            raise ValidationError("event_ts is required")
        await fetch_one(self._store, "joints", event.get("joint_id"), "Joint")

        clean_pricing = dict(pricing)
        for key in ("unit_qty", "unit_price", *_FEES):
            if clean_pricing.get(key) is not None:
                clean_pricing[key] = require_non_negative(clean_pricing[key], key)

        row = await self._store.call_procedure(
            "create_event_with_pricing",
            {"event": {**event, "status": status}, "pricing": clean_pricing},
        )
        row["total"] = event_total(row.get("pricing"))
        logger.info("Event %s scheduled at joint %s for %s", row["id"], row["joint_id"], row["event_ts"])
        return row

    async def list_events(self, joint_id: str | None = None) -> list[Row]:
        """All events soonest first, each with its pricing and total."""
        events = await self._store.list_rows(
            "events", RowFilter(eq={"joint_id": joint_id}), Order("event_ts", ascending=True)
        )
        pricing = {row["event_id"]: row for row in await self._store.list_rows("event_pricing")}
        out = []
        for row in events:
            row_pricing = pricing.get(row["id"])
            out.append({**row, "pricing": row_pricing, "total": event_total(row_pricing)})
        return out
