import pytest

from conftest import FakeBookingStore, make_booking
from app.models.booking import LifecycleState
from app.services.reconciliation_service import reconcile
from app.services.snapshot_service import MemorySnapshotStore

def ids(bucket):
    return [b.id for b in bucket]

@pytest.mark.asyncio
async def test_first_run_places_everything_in_pending(clock):
    remote = FakeBookingStore([make_booking("a", 0), make_booking("b", 4)])
    snapshot = MemorySnapshotStore()

    lifecycle, result = await reconcile(remote, snapshot, clock)

    assert result.ok
    assert (result.remote_total, result.added_pending, result.added_done) == (2, 2, 0)
    assert ids(lifecycle.state.pending) == ["a", "b"]
    assert snapshot.load() == lifecycle.state

@pytest.mark.asyncio
async def test_known_bookings_keep_their_bucket(clock):
    remote = FakeBookingStore([
        make_booking("a", 2, status="pending"),
        make_booking("b", 3),
        make_booking("c", 5),
    ])
    snapshot = MemorySnapshotStore(LifecycleState(done=[make_booking("a", 2)], ongoing=[make_booking("b", 3)]))

    lifecycle, _ = await reconcile(remote, snapshot, clock)

    assert ids(lifecycle.state.done) == ["a"]
    assert ids(lifecycle.state.ongoing) == ["b"]
    assert ids(lifecycle.state.pending) == ["c"]

@pytest.mark.asyncio
async def test_past_event_seen_first_time_goes_straight_to_done(clock):
    remote = FakeBookingStore([make_booking("old", -3)])

    lifecycle, result = await reconcile(remote, MemorySnapshotStore(), clock)

    assert ids(lifecycle.state.done) == ["old"]
    assert lifecycle.state.pending == []
    assert result.added_done == 1

@pytest.mark.asyncio
async def test_reconciling_twice_never_duplicates(clock):
    remote = FakeBookingStore([make_booking("a"), make_booking("b", 1)])
    snapshot = MemorySnapshotStore()

    await reconcile(remote, snapshot, clock)
    lifecycle, result = await reconcile(remote, snapshot, clock)

    all_ids = ids(lifecycle.state.all_bookings())
    assert sorted(all_ids) == ["a", "b"]
    assert result.added_pending == 0

@pytest.mark.asyncio
async def test_duplicate_ids_in_remote_list_are_merged_once(clock):
    class RepeatingStore(FakeBookingStore):
        async def list_bookings(self):
            return [make_booking("a"), make_booking("a")]

    lifecycle, _ = await reconcile(RepeatingStore(), MemorySnapshotStore(), clock)
    assert ids(lifecycle.state.pending) == ["a"]

@pytest.mark.asyncio
async def test_remote_outage_keeps_snapshot_untouched(clock):
    remote = FakeBookingStore([make_booking("new")])
    remote.fail = True
    snapshot = MemorySnapshotStore(LifecycleState(ongoing=[make_booking("a")]))

    lifecycle, result = await reconcile(remote, snapshot, clock)

    assert not result.ok
    assert ids(lifecycle.state.ongoing) == ["a"]
    assert lifecycle.state.pending == []
    assert snapshot.saves == 0
