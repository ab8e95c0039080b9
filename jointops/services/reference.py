"""Reference data — joints, sellers and suppliers for pickers and filters."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jointops.core.config import settings
from jointops.core.security import hash_pin
from jointops.services.base import fetch_one
from jointops.store import Order, Row, Store

logger = logging.getLogger(__name__)


@dataclass
class ReferenceData:
    joints: list[Row]
    sellers: list[Row]
    suppliers: list[Row]


class ReferenceService:
    def __init__(self, store: Store, pin_hash_rounds: int | None = None):
        self._store = store
        self._rounds = settings.pin_hash_rounds if pin_hash_rounds is None else pin_hash_rounds

    async def fetch_reference_data(self) -> ReferenceData:
        by_name = Order("name", ascending=True)
        return ReferenceData(
            joints=await self._store.list_rows("joints", order=by_name),
            sellers=await self._store.list_rows("sellers", order=by_name),
            suppliers=await self._store.list_rows("suppliers", order=by_name),
        )

    async def set_seller_pin(self, seller_id: str, pin: str) -> None:
        await fetch_one(self._store, "sellers", seller_id, "Seller")
        await self._store.update_row(
            "sellers", {"id": seller_id}, {"pin_hash": hash_pin(pin, rounds=self._rounds)}
        )
        logger.info("PIN updated for seller %s", seller_id)
