import asyncio
from typing import List, Optional

from app.core.clock import Clock, system_clock, today
from app.core.config import settings
from app.core.logger import logger
from app.services.lifecycle_service import BookingLifecycleService, Transition


class LifecycleScheduler:
    """
    Recurring lifecycle tick. Each run applies the date rules, persists the
    buckets, then mirrors the new statuses remotely; the next run is only
    scheduled once the previous one has finished, so ticks never overlap.
    """

    def __init__(
        self,
        service: BookingLifecycleService,
        clock: Clock = system_clock,
        interval: float = settings.LIFECYCLE_TICK_SECONDS,
    ):
        if interval <= 0:
            raise ValueError("tick interval must be positive")
        self.service = service
        self.clock = clock
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> List[Transition]:
        return self.service.lifecycle.advance(today(self.clock))

    async def run_once(self) -> List[Transition]:
        transitions = self.tick()
        if transitions:
            await self.service.mirror_status(transitions)
        return transitions

    async def _loop(self):
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("🔥 Lifecycle tick failed, retrying on next interval")
            await asyncio.sleep(self.interval)

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(f"⏰ Lifecycle scheduler started (every {self.interval}s)")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("🛑 Lifecycle scheduler stopped")
