"""Assignment resolver — which sellers are authorized at which joints, and when.

An assignment row authorizes a seller at a joint over ``[start_at, end_at)``.
A seller should hold at most one *open* row (``active`` and no ``end_at``);
:meth:`AssignmentResolver.assign` closes the previous one before opening the
next. That close-then-insert is not atomic, so two concurrent assigns for the
same seller can leave two open rows. Reads therefore treat the table as a
filtered view and never as a uniqueness guarantee: bindings come back newest
``start_at`` first so the latest intent wins wherever only one is shown.

Rule: No SQLAlchemy / no FastAPI here. All reads and writes go through the Store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from jointops.core.exceptions import ValidationError
from jointops.core.time_utils import ensure_utc, in_window, utcnow
from jointops.services.base import fetch_one
from jointops.store import Order, RangeClause, Row, RowFilter, Store

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Binding:
    assignment_id: str
    seller_id: str
    seller_name: str
    joint_id: str
    joint_name: str
    start_at: datetime
    end_at: Optional[datetime]
    note: str
    active: bool = True


def _binding(row: Row, seller: Row | None, joint: Row | None) -> Binding:
    return Binding(
        assignment_id=row["id"],
        seller_id=row["seller_id"],
        seller_name=(seller or {}).get("name") or UNKNOWN,
        joint_id=row["joint_id"],
        joint_name=(joint or {}).get("name") or UNKNOWN,
        start_at=ensure_utc(row["start_at"]),
        end_at=ensure_utc(row.get("end_at")),
        note=row.get("note") or "",
        active=bool(row.get("active")),
    )


def _disabled(entity: Row | None) -> bool:
    # entities missing from the snapshot are not treated as disabled
    return entity is not None and entity.get("is_active") is False


def _closing_note(existing: str | None, reason: str) -> str:
    """``"morning shift | revoked: left"``; just the reason when there was no note."""
    closing = f"revoked: {reason}"
    return f"{existing} | {closing}" if existing else closing


def resolve_bindings(
    assignments: Iterable[Row],
    sellers: Iterable[Row],
    joints: Iterable[Row],
    joint_id: str | None = None,
    as_of: datetime | None = None,
    seller_id: str | None = None,
) -> list[Binding]:
    """Pure resolution over a snapshot of the three tables.

    Keeps rows that are active, whose window contains ``as_of`` and whose
    seller and joint are both enabled, optionally restricted to one joint
    and/or one seller. Sorted by ``start_at`` descending; ties keep input order.
    """
    as_of = ensure_utc(as_of) if as_of is not None else utcnow()
    sellers_by_id = {s["id"]: s for s in sellers}
    joints_by_id = {j["id"]: j for j in joints}

    bindings = []
    for row in assignments:
        if row.get("active") is not True:
            continue
        if joint_id and row["joint_id"] != joint_id:
            continue
        if seller_id and row["seller_id"] != seller_id:
            continue
        if not in_window(as_of, row["start_at"], row.get("end_at")):
            continue
        seller = sellers_by_id.get(row["seller_id"])
        joint = joints_by_id.get(row["joint_id"])
        if _disabled(seller) or _disabled(joint):
            continue
        bindings.append(_binding(row, seller, joint))

    bindings.sort(key=lambda b: b.start_at, reverse=True)
    return bindings


class AssignmentResolver:
    def __init__(self, store: Store):
        self._store = store

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def resolve_active(
        self, joint_id: str | None = None, as_of: datetime | None = None
    ) -> list[Binding]:
        """Sellers currently authorized at ``joint_id`` (or anywhere), newest first."""
        return await self._resolve(joint_id=joint_id, as_of=as_of)

    async def current_joint(
        self, seller_id: str, as_of: datetime | None = None
    ) -> Binding | None:
        """The binding a seller is operating under right now, if any."""
        await fetch_one(self._store, "sellers", seller_id, "Seller")
        bindings = await self._resolve(seller_id=seller_id, as_of=as_of)
        return bindings[0] if bindings else None

    async def history(
        self, seller_id: str | None = None, joint_id: str | None = None
    ) -> list[Binding]:
        """Every assignment row, open and closed, newest ``start_at`` first."""
        rows = await self._store.list_rows(
            "seller_assignments",
            RowFilter(eq={"seller_id": seller_id, "joint_id": joint_id}),
            Order("start_at"),
        )
        sellers, joints = await self._snapshot()
        sellers_by_id = {s["id"]: s for s in sellers}
        joints_by_id = {j["id"]: j for j in joints}
        return [
            _binding(row, sellers_by_id.get(row["seller_id"]), joints_by_id.get(row["joint_id"]))
            for row in rows
        ]

    async def _resolve(
        self,
        joint_id: str | None = None,
        seller_id: str | None = None,
        as_of: datetime | None = None,
    ) -> list[Binding]:
        as_of = ensure_utc(as_of) if as_of is not None else utcnow()
        rows = await self._store.list_rows(
            "seller_assignments",
            RowFilter(
                eq={"active": True, "joint_id": joint_id, "seller_id": seller_id},
                ranges=(
                    RangeClause("start_at", "lte", as_of),
                    RangeClause("end_at", "gt", as_of, or_null=True),
                ),
            ),
            Order("start_at"),
        )
        sellers, joints = await self._snapshot()
        return resolve_bindings(rows, sellers, joints, joint_id=joint_id, as_of=as_of, seller_id=seller_id)

    async def _snapshot(self) -> tuple[list[Row], list[Row]]:
        sellers = await self._store.list_rows("sellers")
        joints = await self._store.list_rows("joints")
        return sellers, joints

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def assign(self, seller_id: str, joint_id: str, note: str | None = None) -> Binding:
        """Close the seller's open assignment(s) and open a new one at ``joint_id``."""
        seller = await fetch_one(self._store, "sellers", seller_id, "Seller")
        joint = await fetch_one(self._store, "joints", joint_id, "Joint")
        if seller.get("is_active") is False:
            raise ValidationError(f"Seller '{seller_id}' is inactive")
        if joint.get("is_active") is False:
            raise ValidationError(f"Joint '{joint_id}' is inactive")

        now = utcnow()
        closed = await self._close_open(seller_id, now)
        row = await self._store.insert_row(
            "seller_assignments",
            {
                "seller_id": seller_id,
                "joint_id": joint_id,
                "active": True,
                "start_at": now,
                "end_at": None,
                "note": note or None,
            },
        )
        logger.info(
            "Assigned seller %s to joint %s (closed %d open assignment(s))",
            seller_id, joint_id, len(closed),
        )
        return _binding(row, seller, joint)

    async def revoke(self, seller_id: str, note: str | None = None) -> int:
        """Close the seller's open assignment(s) without opening a new one."""
        await fetch_one(self._store, "sellers", seller_id, "Seller")
        closed = await self._close_open(seller_id, utcnow(), note=note)
        logger.info("Revoked %d open assignment(s) for seller %s", len(closed), seller_id)
        return len(closed)

    async def _close_open(
        self, seller_id: str, now: datetime, note: str | None = None
    ) -> list[Row]:
        patch = {"active": False, "end_at": now}
        match = {"seller_id": seller_id, "active": True, "end_at": None}
        if not note:
            return await self._store.update_row("seller_assignments", match, patch)

        # each row keeps its own note, the reason is appended after it
        rows = await self._store.list_rows(
            "seller_assignments", RowFilter(eq={"seller_id": seller_id, "active": True})
        )
        closed: list[Row] = []
        for row in rows:
            if row.get("end_at") is not None:
                continue
            closed.extend(
                await self._store.update_row(
                    "seller_assignments",
                    {**match, "id": row["id"]},
                    {**patch, "note": _closing_note(row.get("note"), note)},
                )
            )
        return closed
