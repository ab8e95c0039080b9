"""Ledger service — append-only writes for the stock and money streams, plus reports.

Every write validates its quantity and references before touching the store
and raises on failure. Nothing here retries.
"""

from __future__ import annotations

import logging

from jointops.core.config import settings
from jointops.core.numeric import (
    check_unit_price,
    require_non_negative,
    require_positive,
    to_basis_units,
)
from jointops.services.base import fetch_one
from jointops.store import Order, Row, RowFilter, Store

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(self, store: Store, unit_price: float | None = None):
        self._store = store
        self._unit_price = settings.basis_unit_price if unit_price is None else unit_price

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def record_delivery(
        self,
        joint_id: str,
        qty: float,
        supplier_id: str | None = None,
        note: str | None = None,
    ) -> Row:
        qty = require_positive(qty, "qty")
        await fetch_one(self._store, "joints", joint_id, "Joint")
        if supplier_id:
            await fetch_one(self._store, "suppliers", supplier_id, "Supplier")

        row = await self._store.insert_row(
            "deliveries",
            {"joint_id": joint_id, "supplier_id": supplier_id or None, "qty": qty, "note": note or None},
        )
        logger.info("Delivery %s: %.2f units into joint %s", row["id"], qty, joint_id)
        return row

    async def record_allocation(
        self, joint_id: str, seller_id: str, qty_basis: float, note: str | None = None
    ) -> Row:
        qty_basis = require_positive(qty_basis, "qty_basis")
        await fetch_one(self._store, "joints", joint_id, "Joint")
        await fetch_one(self._store, "sellers", seller_id, "Seller")

        row = await self._store.insert_row(
            "allocations",
            {"joint_id": joint_id, "seller_id": seller_id, "qty_basis": qty_basis, "note": note or None},
        )
        logger.info(
            "Allocation %s: %.2f basis units from joint %s to seller %s",
            row["id"], qty_basis, joint_id, seller_id,
        )
        return row

    async def record_payment(
        self,
        joint_id: str,
        seller_id: str,
        amount: float,
        note: str | None = None,
        pin: str | None = None,
    ) -> Row:
        """Record money returned by a seller.

        With a PIN the payment goes through the ``confirm_payment_with_pin``
        procedure and is stored as seller-confirmed; without one it is stored
        unconfirmed.
        """
        amount = require_positive(amount, "amount")
        if pin:
            row = await self._store.call_procedure(
                "confirm_payment_with_pin",
                {
                    "joint_id": joint_id,
                    "seller_id": seller_id,
                    "amount": amount,
                    "note": note or None,
                    "pin": pin,
                },
            )
        else:
            await fetch_one(self._store, "joints", joint_id, "Joint")
            await fetch_one(self._store, "sellers", seller_id, "Seller")
            row = await self._store.insert_row(
                "payments",
                {
                    "joint_id": joint_id,
                    "seller_id": seller_id,
                    "amount": amount,
                    "note": note or None,
                    "confirmed_by_seller": False,
                },
            )
        logger.info(
            "Payment %s: %.2f from seller %s at joint %s (confirmed=%s)",
            row["id"], amount, seller_id, joint_id, row.get("confirmed_by_seller"),
        )
        return row

    async def record_audit(
        self,
        joint_id: str,
        counted_qty: float,
        seller_id: str | None = None,
        note: str | None = None,
    ) -> Row:
        counted_qty = require_non_negative(counted_qty, "counted_qty")
        await fetch_one(self._store, "joints", joint_id, "Joint")
        if seller_id:
            await fetch_one(self._store, "sellers", seller_id, "Seller")

        row = await self._store.insert_row(
            "audits",
            {
                "joint_id": joint_id,
                "seller_id": seller_id or None,
                "counted_qty": counted_qty,
                "note": note or None,
            },
        )
        logger.info("Audit %s: %.2f counted at joint %s", row["id"], counted_qty, joint_id)
        return row

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def list_payments(
        self, joint_id: str | None = None, seller_id: str | None = None
    ) -> list[Row]:
        """Payments newest first, each with its basis-unit equivalent."""
        unit_price = check_unit_price(self._unit_price)
        rows = await self._store.list_rows(
            "payments",
            RowFilter(eq={"joint_id": joint_id, "seller_id": seller_id}),
            Order("created_at"),
        )
        return [
            {**row, "basis_equivalent": to_basis_units(row.get("amount") or 0, unit_price)}
            for row in rows
        ]

    async def list_audits(
        self, joint_id: str | None = None, seller_id: str | None = None
    ) -> list[Row]:
        return await self._store.list_rows(
            "audits",
            RowFilter(eq={"joint_id": joint_id, "seller_id": seller_id}),
            Order("created_at"),
        )
