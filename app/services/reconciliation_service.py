from typing import Optional, Tuple

from pydantic import BaseModel

from app.core.clock import Clock, system_clock, today
from app.core.exceptions import StoreUnavailable
from app.core.logger import logger
from app.models.booking import LifecycleStatus
from app.services.lifecycle_service import LifecycleStore, initial_status


class ReconciliationResult(BaseModel):
    remote_total: int = 0
    added_pending: int = 0
    added_done: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def reconcile(booking_store, snapshot, clock: Clock = system_clock) -> Tuple[LifecycleStore, ReconciliationResult]:
    """
    Startup merge of the remote booking list into the local snapshot.

    Bookings already in a local bucket stay where they are; the remote store
    only decides which bookings exist. Unknown bookings are appended to pending,
    or straight to done when their event day has already passed. If the fetch
    fails the local snapshot is returned unchanged and nothing is written.
    """
    lifecycle = LifecycleStore.load(snapshot)

    try:
        remote = await booking_store.list_bookings()
    except StoreUnavailable as e:
        logger.error(f"❌ Reconciliation skipped, keeping local snapshot: {e}")
        return lifecycle, ReconciliationResult(error=str(e))

    result = ReconciliationResult(remote_total=len(remote))
    known = lifecycle.known_ids()
    current_day = today(clock)

    for booking in remote:
        if booking.id in known:
            continue
        status = initial_status(booking, current_day)
        lifecycle.place(booking, status)
        known.add(booking.id)
        if status == LifecycleStatus.DONE:
            result.added_done += 1
        else:
            result.added_pending += 1

    lifecycle.persist()
    logger.info(
        f"🔄 Reconciled {result.remote_total} remote bookings: "
        f"{result.added_pending} new pending, {result.added_done} caught up to done"
    )
    return lifecycle, result
