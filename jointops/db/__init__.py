"""Database package — async SQLAlchemy engine, session factory, Base."""
from jointops.db.base import (
    Base,
    build_engine,
    build_session_factory,
    create_all,
    dispose_engine,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "create_all",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
]
