import json

from conftest import make_booking
from app.models.booking import LifecycleState, LifecycleStatus
from app.services.snapshot_service import SnapshotStore

def test_missing_file_is_absent(tmp_path):
    assert SnapshotStore(str(tmp_path / "none.json")).load() is None

def test_round_trip_under_single_key(tmp_path):
    path = tmp_path / "nested" / "snapshot.json"
    store = SnapshotStore(str(path), key="bookings")
    state = LifecycleState(
        pending=[make_booking("a", menu_package="Iced Tea")],
        done=[make_booking("b", -2, status=LifecycleStatus.DONE)],
    )

    assert store.save(state) is True

    document = json.loads(path.read_text(encoding="utf-8"))
    assert list(document) == ["bookings"]
    assert set(document["bookings"]) == {"pending", "ongoing", "done"}
    assert store.load() == state

def test_corrupt_json_is_treated_as_absent(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text("{not json", encoding="utf-8")
    assert SnapshotStore(str(path)).load() is None

def test_wrong_shape_is_treated_as_absent(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"bookings": {"pending": [{"id": "x"}]}}), encoding="utf-8")
    assert SnapshotStore(str(path)).load() is None

def test_write_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    store = SnapshotStore(str(blocker / "snapshot.json"))
    assert store.save(LifecycleState()) is False
