"""Query descriptors accepted by :meth:`Store.list_rows` and :meth:`Store.update_row`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

RangeOp = Literal["lt", "lte", "gt", "gte"]


@dataclass(frozen=True)
class RangeClause:
    """``column <op> value``; with ``or_null`` the clause also matches NULL."""

    column: str
    op: RangeOp
    value: Any
    or_null: bool = False


@dataclass(frozen=True)
class RowFilter:
    """Equality clauses plus optional range clauses, all ANDed.

    Equality values of ``None`` or ``""`` are skipped (an unset form field
    means "no filter"); ``False`` and ``0`` are applied.
    """

    eq: dict[str, Any] = field(default_factory=dict)
    ranges: tuple[RangeClause, ...] = ()

    def active_eq(self) -> dict[str, Any]:
        return {k: v for k, v in self.eq.items() if v is not None and v != ""}


@dataclass(frozen=True)
class Order:
    column: str
    ascending: bool = False
