from datetime import date
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

from app.core.clock import local_day
from app.core.exceptions import BookingNotFound, StoreUnavailable
from app.core.logger import for_booking, logger
from app.models.booking import Booking, LifecycleState, LifecycleStatus

# Search order when reconciling a snapshot that holds an id more than once:
# the furthest-along bucket wins.
_PRECEDENCE = (LifecycleStatus.DONE, LifecycleStatus.ONGOING, LifecycleStatus.PENDING)


class Transition(NamedTuple):
    booking_id: str
    source: LifecycleStatus
    target: LifecycleStatus


def next_status(status: LifecycleStatus, event_day: date, today: date) -> Optional[LifecycleStatus]:
    """
    Automatic date rule for one booking. Returns the target bucket or None.
    pending -> ongoing on the event day, pending -> done once the day has
    passed without being observed, ongoing -> done after the day. Nothing
    ever leaves done automatically.
    """
    if status == LifecycleStatus.PENDING:
        if event_day == today:
            return LifecycleStatus.ONGOING
        if event_day < today:
            return LifecycleStatus.DONE
    elif status == LifecycleStatus.ONGOING:
        if event_day < today:
            return LifecycleStatus.DONE
    return None


def initial_status(booking: Booking, today: date) -> LifecycleStatus:
    """Bucket for a booking seen for the first time; past events go straight to done."""
    if local_day(booking.event_date) < today:
        return LifecycleStatus.DONE
    return LifecycleStatus.PENDING


def normalize_state(state: LifecycleState) -> LifecycleState:
    """Drops duplicate ids so every booking sits in exactly one bucket."""
    seen: Set[str] = set()
    buckets: Dict[LifecycleStatus, List[Booking]] = {}
    for status in _PRECEDENCE:
        kept = []
        for booking in state.bucket(status):
            if booking.id in seen:
                for_booking(booking.id).warning("⚠️ Found in several buckets, keeping the furthest one")
                continue
            seen.add(booking.id)
            kept.append(booking.model_copy(update={"status": status}))
        buckets[status] = kept
    return LifecycleState(**{status.value: bookings for status, bookings in buckets.items()})


class LifecycleStore:
    """
    In-memory lifecycle buckets plus the snapshot port they are persisted to.
    Every mutating method persists the combined state before returning.
    """

    def __init__(self, snapshot, state: Optional[LifecycleState] = None):
        self.snapshot = snapshot
        self.state = normalize_state(state) if state else LifecycleState()

    @classmethod
    def load(cls, snapshot) -> "LifecycleStore":
        return cls(snapshot, snapshot.load())

    def persist(self) -> bool:
        saved = self.snapshot.save(self.state)
        if not saved:
            logger.warning("⚠️ Lifecycle snapshot not persisted; in-memory state kept")
        return saved

    def known_ids(self) -> Set[str]:
        return {b.id for b in self.state.all_bookings()}

    def find(self, booking_id: str) -> Optional[Tuple[LifecycleStatus, Booking]]:
        for status in LifecycleStatus:
            for booking in self.state.bucket(status):
                if booking.id == booking_id:
                    return status, booking
        return None

    def _take(self, booking_id: str) -> Tuple[LifecycleStatus, Booking]:
        found = self.find(booking_id)
        if found is None:
            raise BookingNotFound(booking_id)
        status, booking = found
        bucket = self.state.bucket(status)
        bucket[:] = [b for b in bucket if b.id != booking_id]
        return status, booking

    def _put(self, booking: Booking, status: LifecycleStatus) -> Booking:
        placed = booking.model_copy(update={"status": status})
        self.state.bucket(status).append(placed)
        return placed

    def place(self, booking: Booking, status: LifecycleStatus) -> Booking:
        """Appends a not-yet-known booking without persisting."""
        if booking.id in self.known_ids():
            raise ValueError(f"Booking {booking.id} is already tracked")
        return self._put(booking, status)

    def move(self, booking_id: str, target: LifecycleStatus) -> Transition:
        """Operator move between any two buckets; date rules do not apply."""
        source, booking = self._take(booking_id)
        self._put(booking, target)
        self.persist()
        for_booking(booking_id).info(f"👉 Moved manually: {source.value} -> {target.value}")
        return Transition(booking_id, source, target)

    def remove(self, booking_id: str) -> Booking:
        _, booking = self._take(booking_id)
        self.persist()
        return booking

    def replace(self, booking: Booking) -> Booking:
        """Swaps in updated booking fields, keeping its bucket and position."""
        found = self.find(booking.id)
        if found is None:
            raise BookingNotFound(booking.id)
        status, _ = found
        bucket = self.state.bucket(status)
        updated = booking.model_copy(update={"status": status})
        bucket[:] = [updated if b.id == booking.id else b for b in bucket]
        self.persist()
        return updated

    def advance(self, today: date) -> List[Transition]:
        """
        Applies the date rules to pending and ongoing bookings. Idempotent for a
        fixed day: a second call finds nothing left to move.
        """
        transitions = []
        for source in (LifecycleStatus.PENDING, LifecycleStatus.ONGOING):
            for booking in list(self.state.bucket(source)):
                target = next_status(source, local_day(booking.event_date), today)
                if target is None:
                    continue
                self._take(booking.id)
                self._put(booking, target)
                transitions.append(Transition(booking.id, source, target))

        if transitions:
            self.persist()
            logger.info(f"⏱️ Lifecycle tick moved {len(transitions)} booking(s)")
        return transitions


class BookingLifecycleService:
    """Operator actions on tracked bookings, keeping the remote store in step."""

    def __init__(self, lifecycle: LifecycleStore, booking_store):
        self.lifecycle = lifecycle
        self.booking_store = booking_store

    def buckets(self) -> LifecycleState:
        return self.lifecycle.state

    def get(self, booking_id: str) -> Booking:
        found = self.lifecycle.find(booking_id)
        if found is None:
            raise BookingNotFound(booking_id)
        return found[1]

    async def mirror_status(self, transitions: List[Transition]) -> int:
        """
        Copies new statuses onto the remote records. Best-effort: the local
        buckets are the lifecycle authority, so a failed write is only logged.
        """
        mirrored = 0
        for transition in transitions:
            try:
                await self.booking_store.update_booking_field(
                    transition.booking_id, "status", transition.target.value
                )
                mirrored += 1
            except StoreUnavailable as e:
                for_booking(transition.booking_id).warning(f"⚠️ Status not mirrored remotely: {e}")
        return mirrored

    async def move_booking(self, booking_id: str, target: LifecycleStatus) -> Booking:
        transition = self.lifecycle.move(booking_id, target)
        await self.mirror_status([transition])
        return self.get(booking_id)

    async def cancel_booking(self, booking_id: str) -> Booking:
        """
        Deletes the booking remotely (attendees first) and only then drops it
        from the buckets. On StoreUnavailable the buckets are left untouched so
        the operator can retry.
        """
        self.get(booking_id)
        await self.booking_store.delete_booking(booking_id)
        booking = self.lifecycle.remove(booking_id)
        for_booking(booking_id).info("❌ Cancelled")
        return booking

    async def update_menu_package(self, booking_id: str, menu_package: str) -> Booking:
        booking = self.get(booking_id)
        await self.booking_store.update_booking_field(booking_id, "menu_package", menu_package)
        return self.lifecycle.replace(booking.model_copy(update={"menu_package": menu_package}))
