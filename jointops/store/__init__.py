"""Store package — the row-level collaborator every service talks to.

Files:
  filters.py     — RowFilter / RangeClause / Order query descriptors
  base.py        — Store interface and the SQLAlchemy-backed SqlStore
  procedures.py  — server-side procedures (PIN-gated payments, priced events)
  rows.py        — ORM instance <-> dict row conversion
"""

from jointops.db.base import get_session_factory
from jointops.store.base import TABLES, SqlStore, Store
from jointops.store.filters import Order, RangeClause, RowFilter
from jointops.store.rows import Row


def get_store() -> Store:
    """FastAPI dependency — a store over the process-wide session factory.

    The engine behind it is built once, lazily, by :mod:`jointops.db.base`.
    """
    return SqlStore(get_session_factory())


__all__ = [
    "TABLES",
    "Order",
    "RangeClause",
    "Row",
    "RowFilter",
    "SqlStore",
    "Store",
    "get_store",
]
