"""
SqlStore Tests

The store collaborator: equality/range filters, NULL handling, ordering,
limits, match-then-patch updates, and StoreError for anything unknown.
"""

import pytest

from jointops.core.exceptions import StoreError
from jointops.store import Order, RangeClause, RowFilter
from tests.conftest import ago, ahead


class TestListRows:
    def test_blank_equality_values_are_ignored(self, run_store):
        async def scenario(store):
            await store.insert_row("joints", {"name": "Osu", "is_active": True})
            await store.insert_row("joints", {"name": "Labadi", "is_active": False})
            return (
                await store.list_rows("joints", RowFilter(eq={"name": "", "id": None})),
                await store.list_rows("joints", RowFilter(eq={"is_active": False})),
            )

        unfiltered, inactive = run_store(scenario)
        assert len(unfiltered) == 2
        assert [r["name"] for r in inactive] == ["Labadi"]

    def test_range_or_null(self, run_store):
        async def scenario(store):
            for row_id, end_at in (("open", None), ("future", ahead(days=1)), ("past", ago(days=1))):
                await store.insert_row(
                    "seller_assignments",
                    {"id": row_id, "seller_id": "s", "joint_id": "j", "start_at": ago(days=2), "end_at": end_at},
                )
            rows = await store.list_rows(
                "seller_assignments",
                RowFilter(ranges=(RangeClause("end_at", "gt", ago(seconds=1), or_null=True),)),
            )
            return {r["id"] for r in rows}

        assert run_store(scenario) == {"open", "future"}

    def test_order_and_limit(self, run_store):
        async def scenario(store):
            for minutes in (3, 1, 2):
                await store.insert_row(
                    "deliveries", {"joint_id": "j", "qty": minutes, "created_at": ago(minutes=minutes)}
                )
            newest = await store.list_rows("deliveries", order=Order("created_at"), limit=2)
            oldest = await store.list_rows("deliveries", order=Order("created_at", ascending=True), limit=1)
            return newest, oldest

        newest, oldest = run_store(scenario)
        assert [r["qty"] for r in newest] == [1, 2]
        assert [r["qty"] for r in oldest] == [3]

    def test_datetimes_come_back_utc_aware(self, run_store):
        async def scenario(store):
            await store.insert_row("deliveries", {"joint_id": "j", "qty": 1})
            return (await store.list_rows("deliveries"))[0]["created_at"]

        created_at = run_store(scenario)
        assert created_at.tzinfo is not None
        assert created_at.utcoffset().total_seconds() == 0

    def test_unknown_table(self, run_store):
        async def scenario(store):
            await store.list_rows("coconuts")

        with pytest.raises(StoreError):
            run_store(scenario)

    def test_unknown_column(self, run_store):
        async def scenario(store):
            await store.list_rows("joints", RowFilter(eq={"colour": "red"}))

        with pytest.raises(StoreError):
            run_store(scenario)


class TestWrites:
    def test_update_returns_rows_even_when_patch_breaks_match(self, run_store):
        async def scenario(store):
            row = await store.insert_row(
                "seller_assignments",
                {"seller_id": "s", "joint_id": "j", "active": True, "start_at": ago(days=1)},
            )
            closed = await store.update_row(
                "seller_assignments",
                {"seller_id": "s", "active": True, "end_at": None},
                {"active": False, "end_at": ago(seconds=1)},
            )
            again = await store.update_row(
                "seller_assignments",
                {"seller_id": "s", "active": True, "end_at": None},
                {"active": False},
            )
            return row, closed, again

        row, closed, again = run_store(scenario)
        assert [r["id"] for r in closed] == [row["id"]]
        assert closed[0]["active"] is False
        assert closed[0]["end_at"] is not None
        assert again == []

    def test_update_requires_match(self, run_store):
        async def scenario(store):
            await store.update_row("joints", {}, {"is_active": False})

        with pytest.raises(StoreError):
            run_store(scenario)

    def test_insert_unknown_column(self, run_store):
        async def scenario(store):
            await store.insert_row("joints", {"name": "Osu", "colour": "red"})

        with pytest.raises(StoreError):
            run_store(scenario)

    def test_unknown_procedure(self, run_store):
        async def scenario(store):
            await store.call_procedure("drop_everything", {})

        with pytest.raises(StoreError):
            run_store(scenario)


class TestUnreachableDatabase:
    """Driver-level connection errors surface as StoreError, like SQLAlchemy ones."""

    def test_list_rows(self, run_unreachable_store):
        async def scenario(store):
            await store.list_rows("deliveries")

        with pytest.raises(StoreError):
            run_unreachable_store(scenario)

    def test_insert_row(self, run_unreachable_store):
        async def scenario(store):
            await store.insert_row("joints", {"name": "Osu", "is_active": True})

        with pytest.raises(StoreError):
            run_unreachable_store(scenario)

    def test_update_row(self, run_unreachable_store):
        async def scenario(store):
            await store.update_row("joints", {"id": "osu"}, {"is_active": False})

        with pytest.raises(StoreError):
            run_unreachable_store(scenario)

    def test_call_procedure(self, run_unreachable_store):
        async def scenario(store):
            await store.call_procedure(
                "confirm_payment_with_pin",
                {"joint_id": "osu", "seller_id": "ama", "amount": 10, "pin": "1234"},
            )

        with pytest.raises(StoreError):
            run_unreachable_store(scenario)
