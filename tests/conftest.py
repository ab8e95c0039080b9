"""
Pytest fixtures for the jointops test suite.

Service tests run each scenario inside a single event loop against a fresh
in-memory SQLite store. API tests drive the FastAPI app with TestClient;
its lifespan builds the schema on the process-wide in-memory engine and
disposes it on exit, so every client starts from an empty database.
"""

import asyncio
import os
from datetime import datetime, timedelta, timezone

# Must be set before jointops.core.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["APP_ENV"] = "development"
os.environ["PIN_HASH_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from jointops.core.exceptions import StoreError
from jointops.db.base import build_engine, build_session_factory, create_all
from jointops.store import SqlStore, get_store


def ago(**kwargs) -> datetime:
    return datetime.now(timezone.utc) - timedelta(**kwargs)


def ahead(**kwargs) -> datetime:
    return datetime.now(timezone.utc) + timedelta(**kwargs)


class FailingStore(SqlStore):
    """SqlStore whose reads of selected tables always fail."""

    def __init__(self, session_factory, failing_tables):
        super().__init__(session_factory)
        self.failing_tables = set(failing_tables)

    async def list_rows(self, table, filter=None, order=None, limit=None):
        if table in self.failing_tables:
            raise StoreError(f"Failed to read '{table}'", table)
        return await super().list_rows(table, filter, order, limit)


def _run(scenario, store_factory=SqlStore):
    async def main():
        engine = build_engine("sqlite+aiosqlite:///:memory:")
        await create_all(engine)
        store = store_factory(build_session_factory(engine))
        try:
            return await scenario(store)
        finally:
            await engine.dispose()

    return asyncio.run(main())


@pytest.fixture
def run_store():
    """Run ``async def scenario(store)`` against a fresh in-memory store."""
    return _run


@pytest.fixture
def run_failing_store():
    """Like run_store, but reads of the given tables raise StoreError."""

    def runner(scenario, *failing_tables):
        return _run(scenario, lambda factory: FailingStore(factory, failing_tables))

    return runner


async def _refuse_connection():
    raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")


@pytest.fixture
def run_unreachable_store():
    """Run ``async def scenario(store)`` against a store whose database refuses every connection."""

    def runner(scenario):
        async def main():
            engine = create_async_engine("sqlite+aiosqlite://", async_creator=_refuse_connection)
            try:
                return await scenario(SqlStore(build_session_factory(engine)))
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return runner


async def seed_basics(store):
    """Two joints and two sellers, all active. Returns their ids by name."""
    ids = {}
    for name in ("Osu", "Labadi"):
        row = await store.insert_row("joints", {"name": name, "is_active": True})
        ids[name] = row["id"]
    for name in ("Ama", "Kofi"):
        row = await store.insert_row("sellers", {"name": name, "is_active": True})
        ids[name] = row["id"]
    return ids


@pytest.fixture
def client():
    """TestClient over a fresh in-memory database."""
    from jointops.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded(client):
    """Seed joints/sellers inside the app's event loop; returns ids by name."""

    async def seed():
        return await seed_basics(get_store())

    return client.portal.call(seed)
