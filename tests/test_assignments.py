"""
Assignment Resolver Tests

Covers the window predicate ``start_at <= as_of < end_at``, exclusion of
disabled sellers/joints, newest-first ordering (including the duplicate open
assignment a racing double-assign leaves behind), and reassignment.
"""

import asyncio

import pytest

from jointops.core.exceptions import NotFoundError, ValidationError
from jointops.services.assignments import AssignmentResolver, resolve_bindings
from jointops.store import RowFilter, SqlStore
from tests.conftest import ago, ahead, seed_basics


class RacingStore(SqlStore):
    """Holds every assign after its close step until two have closed.

    Store calls are serialized so the shared in-memory connection never sees
    interleaved transactions; only the close/insert ordering races.
    """

    def __init__(self, session_factory):
        super().__init__(session_factory)
        self._lock = asyncio.Lock()
        self._closes = 0
        self._both_closed = asyncio.Event()

    async def list_rows(self, table, filter=None, order=None, limit=None):
        async with self._lock:
            return await super().list_rows(table, filter, order, limit)

    async def insert_row(self, table, payload):
        async with self._lock:
            return await super().insert_row(table, payload)

    async def update_row(self, table, match, patch):
        async with self._lock:
            rows = await super().update_row(table, match, patch)
        if table == "seller_assignments":
            self._closes += 1
            if self._closes >= 2:
                self._both_closed.set()
            await self._both_closed.wait()
        return rows


def _assignment(id, seller_id, joint_id, start_at, end_at=None, active=True, note=None):
    return {
        "id": id,
        "seller_id": seller_id,
        "joint_id": joint_id,
        "active": active,
        "start_at": start_at,
        "end_at": end_at,
        "note": note,
    }


SELLERS = [
    {"id": "s1", "name": "Ama", "is_active": True},
    {"id": "s2", "name": "Kofi", "is_active": True},
    {"id": "s3", "name": "Esi", "is_active": False},
]
JOINTS = [
    {"id": "j1", "name": "Osu", "is_active": True},
    {"id": "j2", "name": "Labadi", "is_active": False},
]


class TestResolveBindings:
    """The pure resolution function over a snapshot."""

    def test_window_predicate(self):
        """Only rows whose [start_at, end_at) contains as_of survive."""
        as_of = ago(days=1)
        rows = [
            _assignment("a-open", "s1", "j1", ago(days=3)),
            _assignment("a-closed-before", "s2", "j1", ago(days=5), end_at=ago(days=2)),
            _assignment("a-future", "s2", "j1", ahead(days=1)),
            _assignment("a-spanning", "s2", "j1", ago(days=2), end_at=ahead(days=1)),
        ]
        bindings = resolve_bindings(rows, SELLERS, JOINTS, as_of=as_of)

        assert [b.assignment_id for b in bindings] == ["a-spanning", "a-open"]
        for b in bindings:
            assert b.start_at <= as_of
            assert b.end_at is None or b.end_at > as_of

    def test_end_at_is_exclusive(self):
        """An assignment ending exactly at as_of is no longer current."""
        as_of = ago(hours=1)
        rows = [_assignment("a1", "s1", "j1", ago(days=1), end_at=as_of)]
        assert resolve_bindings(rows, SELLERS, JOINTS, as_of=as_of) == []

    def test_start_at_is_inclusive(self):
        as_of = ago(hours=1)
        rows = [_assignment("a1", "s1", "j1", as_of)]
        assert [b.assignment_id for b in resolve_bindings(rows, SELLERS, JOINTS, as_of=as_of)] == ["a1"]

    def test_inactive_row_excluded(self):
        rows = [_assignment("a1", "s1", "j1", ago(days=1), active=False)]
        assert resolve_bindings(rows, SELLERS, JOINTS) == []

    def test_disabled_seller_or_joint_excluded(self):
        """Open rows for a disabled seller or a disabled joint never resolve."""
        rows = [
            _assignment("a-disabled-seller", "s3", "j1", ago(days=1)),
            _assignment("a-disabled-joint", "s1", "j2", ago(days=1)),
            _assignment("a-ok", "s2", "j1", ago(days=1)),
        ]
        bindings = resolve_bindings(rows, SELLERS, JOINTS)
        assert [b.assignment_id for b in bindings] == ["a-ok"]

    def test_joint_filter(self):
        rows = [
            _assignment("a1", "s1", "j1", ago(days=1)),
            _assignment("a2", "s2", "jX", ago(days=1)),
        ]
        bindings = resolve_bindings(rows, SELLERS, JOINTS, joint_id="j1")
        assert [b.seller_name for b in bindings] == ["Ama"]

    def test_duplicate_open_assignments_newest_first(self):
        """A double-assigned seller surfaces the most recently started row first."""
        rows = [
            _assignment("older", "s1", "j1", ago(days=2)),
            _assignment("newer", "s1", "j1", ago(hours=2)),
        ]
        bindings = resolve_bindings(rows, SELLERS, JOINTS)
        assert [b.assignment_id for b in bindings] == ["newer", "older"]

    def test_unknown_names_and_blank_note(self):
        rows = [_assignment("a1", "ghost", "nowhere", ago(days=1))]
        (binding,) = resolve_bindings(rows, SELLERS, JOINTS)
        assert binding.seller_name == "Unknown"
        assert binding.joint_name == "Unknown"
        assert binding.note == ""


class TestAssignmentResolver:
    """Resolver against a real store."""

    def test_assign_then_reassign(self, run_store):
        """assign(S, A) then assign(S, B) moves S from A to B."""

        async def scenario(store):
            ids = await seed_basics(store)
            resolver = AssignmentResolver(store)

            first = await resolver.assign(ids["Ama"], ids["Osu"])
            second = await resolver.assign(ids["Ama"], ids["Labadi"], note="weekend cover")

            at_osu = await resolver.resolve_active(joint_id=ids["Osu"])
            at_labadi = await resolver.resolve_active(joint_id=ids["Labadi"])
            history = await resolver.history(seller_id=ids["Ama"])
            return first, second, at_osu, at_labadi, history

        first, second, at_osu, at_labadi, history = run_store(scenario)

        assert at_osu == []
        assert [b.seller_name for b in at_labadi] == ["Ama"]
        assert at_labadi[0].assignment_id == second.assignment_id
        assert at_labadi[0].note == "weekend cover"
        assert second.start_at >= first.start_at

        # the first row is closed, not deleted
        assert len(history) == 2
        closed = next(b for b in history if b.assignment_id == first.assignment_id)
        assert closed.active is False
        assert closed.end_at is not None

    def test_resolve_as_of_past(self, run_store):
        """A closed assignment is still visible when asking about its window."""

        async def scenario(store):
            ids = await seed_basics(store)
            await store.insert_row(
                "seller_assignments",
                _assignment("hist-1", ids["Kofi"], ids["Osu"], ago(days=10), end_at=ago(days=5)),
            )
            resolver = AssignmentResolver(store)
            then = await resolver.resolve_active(joint_id=ids["Osu"], as_of=ago(days=7))
            now = await resolver.resolve_active(joint_id=ids["Osu"])
            return then, now

        then, now = run_store(scenario)
        assert [b.assignment_id for b in then] == ["hist-1"]
        assert now == []

    def test_disabled_seller_hidden(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            resolver = AssignmentResolver(store)
            await resolver.assign(ids["Ama"], ids["Osu"])
            await resolver.assign(ids["Kofi"], ids["Osu"])
            await store.update_row("sellers", {"id": ids["Kofi"]}, {"is_active": False})
            return await resolver.resolve_active(joint_id=ids["Osu"])

        bindings = run_store(scenario)
        assert [b.seller_name for b in bindings] == ["Ama"]

    def test_duplicate_open_rows_resolve_newest_first(self, run_store):
        """Two open rows for one seller resolve newest-first instead of failing."""

        async def scenario(store):
            ids = await seed_basics(store)
            for row_id, start in (("race-1", ago(minutes=10)), ("race-2", ago(minutes=5))):
                await store.insert_row(
                    "seller_assignments",
                    {
                        "id": row_id,
                        "seller_id": ids["Ama"],
                        "joint_id": ids["Osu"],
                        "active": True,
                        "start_at": start,
                    },
                )
            resolver = AssignmentResolver(store)
            current = await resolver.current_joint(ids["Ama"])
            everywhere = await resolver.resolve_active()
            return current, everywhere

        current, everywhere = run_store(scenario)
        assert current.assignment_id == "race-2"
        assert [b.assignment_id for b in everywhere] == ["race-2", "race-1"]

    def test_concurrent_assigns_leave_two_open_rows(self, run_store):
        """Both assigns close before either inserts; reads still pick the newest."""

        async def scenario(store):
            ids = await seed_basics(store)
            resolver = AssignmentResolver(store)
            await asyncio.gather(
                resolver.assign(ids["Ama"], ids["Osu"]),
                resolver.assign(ids["Ama"], ids["Labadi"]),
            )
            open_rows = await store.list_rows(
                "seller_assignments", RowFilter(eq={"seller_id": ids["Ama"], "active": True})
            )
            everywhere = await resolver.resolve_active()
            current = await resolver.current_joint(ids["Ama"])
            return ids, open_rows, everywhere, current

        ids, open_rows, everywhere, current = run_store(scenario, RacingStore)
        assert len(open_rows) == 2
        assert {b.joint_id for b in everywhere} == {ids["Osu"], ids["Labadi"]}
        assert everywhere[0].start_at >= everywhere[1].start_at
        assert current.assignment_id == everywhere[0].assignment_id

    def test_assign_closes_every_open_row(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            for start in (ago(minutes=10), ago(minutes=5)):
                await store.insert_row(
                    "seller_assignments",
                    {"seller_id": ids["Ama"], "joint_id": ids["Osu"], "active": True, "start_at": start},
                )
            resolver = AssignmentResolver(store)
            await resolver.assign(ids["Ama"], ids["Labadi"])
            return ids, await resolver.resolve_active()

        ids, bindings = run_store(scenario)
        assert [(b.seller_id, b.joint_id) for b in bindings] == [(ids["Ama"], ids["Labadi"])]

    def test_revoke(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            resolver = AssignmentResolver(store)
            await resolver.assign(ids["Ama"], ids["Osu"])
            closed = await resolver.revoke(ids["Ama"], note="left the business")
            return closed, await resolver.current_joint(ids["Ama"])

        closed, current = run_store(scenario)
        assert closed == 1
        assert current is None

    def test_revoke_keeps_assignment_note(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            resolver = AssignmentResolver(store)
            await resolver.assign(ids["Ama"], ids["Osu"], note="morning shift")
            await resolver.assign(ids["Kofi"], ids["Osu"])
            await resolver.revoke(ids["Ama"], note="left")
            await resolver.revoke(ids["Kofi"], note="moved away")
            return (
                await resolver.history(seller_id=ids["Ama"]),
                await resolver.history(seller_id=ids["Kofi"]),
            )

        ama, kofi = run_store(scenario)
        assert [(b.note, b.active) for b in ama] == [("morning shift | revoked: left", False)]
        assert ama[0].end_at is not None
        assert [b.note for b in kofi] == ["revoked: moved away"]

    def test_reassign_keeps_assignment_note(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            resolver = AssignmentResolver(store)
            await resolver.assign(ids["Ama"], ids["Osu"], note="morning shift")
            await resolver.assign(ids["Ama"], ids["Labadi"])
            return await resolver.history(seller_id=ids["Ama"])

        history = run_store(scenario)
        assert [b.note for b in history] == ["", "morning shift"]

    def test_assign_unknown_seller(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            await AssignmentResolver(store).assign("no-such-seller", ids["Osu"])

        with pytest.raises(NotFoundError):
            run_store(scenario)

    def test_assign_unknown_joint(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            await AssignmentResolver(store).assign(ids["Ama"], "no-such-joint")

        with pytest.raises(NotFoundError):
            run_store(scenario)

    def test_assign_to_inactive_joint_rejected(self, run_store):
        async def scenario(store):
            ids = await seed_basics(store)
            await store.update_row("joints", {"id": ids["Osu"]}, {"is_active": False})
            await AssignmentResolver(store).assign(ids["Ama"], ids["Osu"])

        with pytest.raises(ValidationError):
            run_store(scenario)
