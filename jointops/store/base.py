"""Store collaborator — the four row-level capabilities the services consume.

Services never touch SQLAlchemy directly; they go through a :class:`Store`.
:class:`SqlStore` is the production implementation over an async session
factory. Every failure below this line, SQLAlchemy or driver/network alike,
surfaces as :class:`StoreError`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jointops.core.exceptions import StoreError
from jointops.db.base import Base
from jointops.domain import (
    Allocation,
    Audit,
    Delivery,
    Event,
    EventPricing,
    Joint,
    Payment,
    Seller,
    SellerAssignment,
    Supplier,
)
from jointops.store.filters import Order, RowFilter
from jointops.store.procedures import PROCEDURES
from jointops.store.rows import Row, bind_value, to_row

logger = logging.getLogger(__name__)

TABLES: dict[str, type[Base]] = {
    model.__tablename__: model
    for model in (
        Joint,
        Supplier,
        Seller,
        SellerAssignment,
        Delivery,
        Allocation,
        Payment,
        Audit,
        Event,
        EventPricing,
    )
}

_RANGE_OPS = {
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
}


class Store(ABC):
    """Row-level access to the backing store."""

    @abstractmethod
    async def list_rows(
        self,
        table: str,
        filter: RowFilter | None = None,
        order: Order | None = None,
        limit: int | None = None,
    ) -> list[Row]: ...

    @abstractmethod
    async def insert_row(self, table: str, payload: Mapping[str, Any]) -> Row: ...

    @abstractmethod
    async def update_row(
        self, table: str, match: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> list[Row]: ...

    @abstractmethod
    async def call_procedure(self, name: str, args: Mapping[str, Any]) -> Any: ...


class SqlStore(Store):
    """Store backed by an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _model(self, table: str) -> type[Base]:
        model = TABLES.get(table)
        if model is None:
            raise StoreError(f"Unknown table '{table}'", table)
        return model

    def _column(self, model: type[Base], name: str):
        col = model.__table__.c.get(name)
        if col is None:
            raise StoreError(
                f"Unknown column '{name}' on '{model.__tablename__}'",
                model.__tablename__,
            )
        return col

    def _where(self, model: type[Base], filter: RowFilter | None) -> list:
        if filter is None:
            return []
        clauses = [
            self._column(model, name) == bind_value(value)
            for name, value in filter.active_eq().items()
        ]
        for rc in filter.ranges:
            op = _RANGE_OPS.get(rc.op)
            if op is None:
                raise StoreError(f"Unsupported range operator '{rc.op}'", model.__tablename__)
            col = self._column(model, rc.column)
            cond = op(col, bind_value(rc.value))
            if rc.or_null:
                cond = or_(cond, col.is_(None))
            clauses.append(cond)
        return clauses

    def _match(self, model: type[Base], match: Mapping[str, Any]) -> list:
        # unlike filters, a None match value means IS NULL
        clauses = []
        for name, value in match.items():
            col = self._column(model, name)
            clauses.append(col.is_(None) if value is None else col == bind_value(value))
        return clauses

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list_rows(
        self,
        table: str,
        filter: RowFilter | None = None,
        order: Order | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        model = self._model(table)
        q = select(model).where(*self._where(model, filter))
        if order is not None:
            col = self._column(model, order.column)
            q = q.order_by(col.asc() if order.ascending else col.desc())
        if limit is not None:
            q = q.limit(limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(q)
                return [to_row(obj) for obj in result.scalars().all()]
        except (SQLAlchemyError, OSError) as exc:
            logger.error("list_rows failed | table=%s | %s", table, exc)
            raise StoreError(f"Failed to read '{table}'", table) from exc

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def insert_row(self, table: str, payload: Mapping[str, Any]) -> Row:
        model = self._model(table)
        for name in payload:
            self._column(model, name)
        instance = model(**{k: bind_value(v) for k, v in payload.items()})

        try:
            async with self._session_factory() as session:
                session.add(instance)
                await session.flush()  # populate id / defaults
                row = to_row(instance)
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("insert_row failed | table=%s | %s", table, exc)
            raise StoreError(f"Failed to insert into '{table}'", table) from exc
        return row

    async def update_row(
        self, table: str, match: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> list[Row]:
        if not match:
            raise StoreError(f"Refusing to update '{table}' without match clauses", table)
        model = self._model(table)
        where = self._match(model, match)
        values = {self._column(model, k).key: bind_value(v) for k, v in patch.items()}

        try:
            async with self._session_factory() as session:
                # the patch may invalidate the match, so pin the ids first
                ids = (await session.execute(select(model.id).where(*where))).scalars().all()
                if not ids:
                    return []
                await session.execute(
                    update(model).where(model.id.in_(ids)).values(**values)
                )
                await session.commit()
                result = await session.execute(select(model).where(model.id.in_(ids)))
                return [to_row(obj) for obj in result.scalars().all()]
        except (SQLAlchemyError, OSError) as exc:
            logger.error("update_row failed | table=%s | %s", table, exc)
            raise StoreError(f"Failed to update '{table}'", table) from exc

    async def call_procedure(self, name: str, args: Mapping[str, Any]) -> Any:
        procedure = PROCEDURES.get(name)
        if procedure is None:
            raise StoreError(f"Unknown procedure '{name}'")

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await procedure(session, dict(args))
        except (SQLAlchemyError, OSError) as exc:
            logger.error("call_procedure failed | name=%s | %s", name, exc)
            raise StoreError(f"Procedure '{name}' failed") from exc
