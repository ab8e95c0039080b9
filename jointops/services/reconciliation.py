"""Reconciliation engine — recent-window balances and the activity feed.

Balances are folded over the newest ``window`` rows of each stream, not the
full ledger:

    expected_stock = sum(delivery.qty) - sum(allocation.qty_basis)
    amount_owed    = sum(allocation.qty_basis) - sum(payment.amount) / unit_price

Both are "recent activity" figures with bounded query cost. They are not
running totals over the whole history and must not be presented as such.
``amount_owed`` is in basis units and is left unclamped: a negative value
means the seller has paid ahead of the allocations in the window.

A stream that cannot be read contributes nothing and is reported in
``Balances.failed_streams``; the dashboard renders with whatever remains.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from jointops.core.config import settings
from jointops.core.exceptions import StoreError, ValidationError
from jointops.core.numeric import check_unit_price, sum_field, to_basis_units
from jointops.core.time_utils import ensure_utc, horizon, utcnow
from jointops.store import Order, RangeClause, Row, RowFilter, Store

logger = logging.getLogger(__name__)

DELIVERY = "Delivery"
ALLOCATION = "Allocation"
PAYMENT = "Payment"

# (table, activity kind, value column); order is the feed tie-break
STREAMS = (
    ("deliveries", DELIVERY, "qty"),
    ("allocations", ALLOCATION, "qty_basis"),
    ("payments", PAYMENT, "amount"),
)


@dataclass(frozen=True)
class ActivityItem:
    kind: str
    id: str
    created_at: datetime
    joint_id: Optional[str]
    seller_id: Optional[str]
    value: float


@dataclass
class Balances:
    expected_stock: float
    amount_owed: float
    activity: list[ActivityItem]
    window: int
    failed_streams: list[str] = field(default_factory=list)


def expected_stock(deliveries: Sequence[Row], allocations: Sequence[Row]) -> float:
    return sum_field(deliveries, "qty") - sum_field(allocations, "qty_basis")


def amount_owed(allocations: Sequence[Row], payments: Sequence[Row], unit_price: float) -> float:
    paid = to_basis_units(sum_field(payments, "amount"), unit_price)
    return sum_field(allocations, "qty_basis") - paid


def merge_activity(
    deliveries: Sequence[Row],
    allocations: Sequence[Row],
    payments: Sequence[Row],
    limit: int,
) -> list[ActivityItem]:
    """Tag, merge and sort the three windows newest first, keeping ``limit`` items.

    Equal timestamps keep stream order: deliveries, allocations, payments.
    """
    items = []
    for rows, (_, kind, value_col) in zip((deliveries, allocations, payments), STREAMS):
        for row in rows:
            items.append(
                ActivityItem(
                    kind=kind,
                    id=row["id"],
                    created_at=ensure_utc(row["created_at"]),
                    joint_id=row.get("joint_id"),
                    seller_id=row.get("seller_id"),
                    value=float(row.get(value_col) or 0),
                )
            )
    # stable sort, ties keep stream order
    items = sorted(items, key=lambda item: item.created_at, reverse=True)
    return items[:limit]


class ReconciliationEngine:
    def __init__(
        self,
        store: Store,
        unit_price: float | None = None,
        recent_window: int | None = None,
        activity_limit: int | None = None,
        horizon_days: int | None = None,
    ):
        self._store = store
        self._unit_price = settings.basis_unit_price if unit_price is None else unit_price
        self._window = settings.recent_window if recent_window is None else recent_window
        self._activity_limit = (
            settings.activity_display_count if activity_limit is None else activity_limit
        )
        self._horizon_days = (
            settings.upcoming_horizon_days if horizon_days is None else horizon_days
        )

    async def compute_balances(
        self,
        joint_id: str | None = None,
        window: int | None = None,
        seller_id: str | None = None,
    ) -> Balances:
        """Windowed stock and owed balances plus the merged activity feed.

        ``seller_id`` narrows allocations and payments only; deliveries are
        not seller-specific.
        """
        unit_price = check_unit_price(self._unit_price)
        window = self._window if window is None else window
        if window < 1:
            raise ValidationError("window must be at least 1")

        failed: list[str] = []
        deliveries = await self._fetch_window("deliveries", {"joint_id": joint_id}, window, failed)
        allocations = await self._fetch_window(
            "allocations", {"joint_id": joint_id, "seller_id": seller_id}, window, failed
        )
        payments = await self._fetch_window(
            "payments", {"joint_id": joint_id, "seller_id": seller_id}, window, failed
        )

        return Balances(
            expected_stock=expected_stock(deliveries, allocations),
            amount_owed=amount_owed(allocations, payments, unit_price),
            activity=merge_activity(deliveries, allocations, payments, self._activity_limit),
            window=window,
            failed_streams=failed,
        )

    async def _fetch_window(
        self, table: str, eq: dict[str, Any], window: int, failed: list[str]
    ) -> list[Row]:
        try:
            return await self._store.list_rows(
                table, RowFilter(eq=eq), Order("created_at"), limit=window
            )
        except StoreError as exc:
            logger.warning("Stream '%s' unavailable, counting it as empty: %s", table, exc.message)
            failed.append(table)
            return []

    async def compute_upcoming(
        self, joint_id: str | None = None, horizon_days: int | None = None
    ) -> list[Row]:
        """Events scheduled within ``[now, now + horizon_days]``, soonest first."""
        days = self._horizon_days if horizon_days is None else horizon_days
        if days < 0:
            raise ValidationError("horizon_days must not be negative")

        start = utcnow()
        end = horizon(start, days)
        rows = await self._store.list_rows(
            "events",
            RowFilter(
                eq={"joint_id": joint_id},
                ranges=(
                    RangeClause("event_ts", "gte", start),
                    RangeClause("event_ts", "lte", end),
                ),
            ),
            Order("event_ts", ascending=True),
        )
        upcoming = [row for row in rows if start <= ensure_utc(row["event_ts"]) <= end]
        upcoming.sort(key=lambda row: ensure_utc(row["event_ts"]))
        return upcoming
