# parkslot/services/expiry_sweeper.py
"""
Background expiry sweep: releases slots whose holds were never confirmed.

Runs as an asyncio task started with the app. Each tick hands the blocking
sweep to a worker thread so the event loop keeps serving requests.
"""

import asyncio
from typing import Optional
from parkslot.services.booking_coordinator import BookingCoordinator
from parkslot.utils.logger import get_logger

logger = get_logger(__name__)


def run_sweep(coordinator: BookingCoordinator, session_factory) -> int:
    db = session_factory()
    try:
        return coordinator.expire_stale_holds(db)
    finally:
        db.close()


async def expiry_loop(coordinator: BookingCoordinator, session_factory,
                      stop_event: asyncio.Event, interval: float):
    logger.info(f"⏱️  Expiry sweep started (every {interval}s)")
    while not stop_event.is_set():
        try:
            await asyncio.to_thread(run_sweep, coordinator, session_factory)
        except Exception as e:
            logger.error(f"Expiry sweep failed: {e}", exc_info=True)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            continue
    logger.info("⏱️  Expiry sweep stopped")


class ExpirySweeper:
    """Owns the sweep task so startup/shutdown hooks can start and stop it."""

    def __init__(self, coordinator: BookingCoordinator, session_factory, interval: float):
        self.coordinator = coordinator
        self.session_factory = session_factory
        self.interval = interval
        self._stop: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(
            expiry_loop(self.coordinator, self.session_factory, self._stop, self.interval)
        )

    async def stop(self):
        if not self.running:
            return
        self._stop.set()
        await self._task
        self._task = None
