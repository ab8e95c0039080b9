"""Lookups shared by every service."""

from __future__ import annotations

from jointops.core.exceptions import NotFoundError
from jointops.store import Row, RowFilter, Store


async def fetch_one(store: Store, table: str, entity_id: str | None, entity: str) -> Row:
    """Return the row with ``entity_id`` or raise :class:`NotFoundError`."""
    if not entity_id:
        raise NotFoundError(entity)
    rows = await store.list_rows(table, RowFilter(eq={"id": entity_id}), limit=1)
    if not rows:
        raise NotFoundError(entity, entity_id)
    return rows[0]
