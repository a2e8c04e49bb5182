"""Admission-controlled dispatcher for outbound calls.

RequestThrottler ties the pieces together:
  - submit() queues a WorkItem and hands back a future immediately.
  - A PacingDriver ticks every window_seconds / request_limit; each tick
    admits at most one queued item, and only if a permit is free.
  - The Dispatcher starts the transport call; the CompletionRouter resolves
    the future and returns the permit.

The concurrency cap plus the tick cadence approximate "request_limit calls
per window" while transport latency is small compared to the window.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from typing import Any, Dict

from config import SHUTDOWN_TIMEOUT
from core.completion import CompletionRouter, Outcome
from core.dispatch import Dispatcher
from core.errors import ClosedError, ShutdownTimeoutError
from core.interfaces import Serializer, Transport
from core.models import ThrottleSettings, WorkItem
from core.pacing import PacingDriver
from core.permits import PermitPool
from core.submission_queue import SubmissionQueue

logger = logging.getLogger(__name__)


class ThrottlerState(str, enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class RequestThrottler:
    """Rate-paced, concurrency-capped queue in front of a Transport.

    Must be constructed inside a running event loop: the pacing driver
    starts right away. submit() must be called on that loop's thread.
    """

    def __init__(
        self,
        settings: ThrottleSettings,
        *,
        serializer: Serializer,
        transport: Transport,
    ) -> None:
        self._settings = settings
        self._loop = asyncio.get_running_loop()

        self._permits = PermitPool(settings.request_limit)
        self._queue = SubmissionQueue(max_depth=settings.max_queue_depth)
        self._router = CompletionRouter(permits=self._permits, on_complete=self._on_complete)
        self._dispatcher = Dispatcher(serializer=serializer, transport=transport, router=self._router)
        self._driver = PacingDriver(period_seconds=settings.period_seconds, on_tick=self._admit_one)

        self._state = ThrottlerState.RUNNING
        self._progress = asyncio.Event()
        self._shutdown_lock = asyncio.Lock()
        self._drained = True

        self._submitted = 0
        self._completed = 0
        self._failed = 0
        self._cancelled = 0

        self._driver.start()

    @property
    def settings(self) -> ThrottleSettings:
        return self._settings

    @property
    def state(self) -> ThrottlerState:
        return self._state

    @property
    def stats(self) -> Dict[str, Any]:
        return {
            "state": self._state.value,
            "request_limit": self._settings.request_limit,
            "period_seconds": self._settings.period_seconds,
            "available_permits": self._permits.available,
            "queued": len(self._queue),
            "in_flight": self._dispatcher.in_flight,
            "ticks": self._driver.ticks,
            "submitted": self._submitted,
            "completed": self._completed,
            "failed": self._failed,
            "cancelled": self._cancelled,
        }

    def submit(self, payload: Any, credential: str) -> "asyncio.Future[Any]":
        """Queue one call and return the future that will carry its outcome.

        Raises ClosedError once shutdown has begun and RejectedError when a
        bounded queue is full; every other failure arrives through the future.
        """
        if self._state is not ThrottlerState.RUNNING:
            raise ClosedError("Throttler is shut down")

        future = self._loop.create_future()
        self._queue.enqueue(WorkItem(payload=payload, credential=credential, result=future))
        self._submitted += 1
        return future

    async def shutdown(
        self,
        timeout: float = SHUTDOWN_TIMEOUT,
        *,
        drain_pending: bool = True,
        raise_on_timeout: bool = False,
    ) -> bool:
        """Stop accepting work and wait up to `timeout` for outstanding calls.

        With drain_pending, items already queued keep being admitted at the
        normal pace until the queue is empty. Whatever is still queued when
        the wait ends fails with ClosedError. Calls already in flight are
        left to finish on their own.

        Returns True when everything finished in time. Safe to call again;
        later calls wait for the first one and return its result.
        """
        async with self._shutdown_lock:
            if self._state is ThrottlerState.STOPPED:
                return self._drained

            self._state = ThrottlerState.DRAINING
            self._queue.close()
            self._drained = False
            try:
                if not drain_pending:
                    await self._driver.stop()
                try:
                    await asyncio.wait_for(self._wait_idle(include_queued=drain_pending), timeout)
                    self._drained = True
                except asyncio.TimeoutError:
                    pass
            finally:
                # Also runs when the shutdown itself is cancelled; nothing queued is left unresolved.
                self._driver.cancel()
                abandoned = self._fail_queued()
                self._state = ThrottlerState.STOPPED

            await self._driver.stop()

        if not self._drained:
            logger.warning(
                "Shutdown timed out after %.2fs: %d call(s) still in flight, %d queued call(s) abandoned",
                timeout,
                self._dispatcher.in_flight,
                abandoned,
            )
            if raise_on_timeout:
                raise ShutdownTimeoutError(f"Outstanding work did not finish within {timeout}s")
        elif abandoned:
            logger.info("Shutdown abandoned %d queued call(s)", abandoned)
        return self._drained

    async def __aenter__(self) -> "RequestThrottler":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    # --- Admission ---

    def _admit_one(self) -> None:
        if not len(self._queue):
            return

        if not self._permits.try_acquire():
            # Pool exhausted: the head stays queued for a later tick.
            logger.debug("No permit available; %d call(s) waiting", len(self._queue))
            return

        item = self._queue.try_dequeue()
        if item is None:
            self._permits.release()
            return

        self._progress.set()
        if item.result.cancelled():
            self._permits.release()
            self._cancelled += 1
            return

        logger.debug("Admitted call queued %.3fs ago", time.monotonic() - item.submitted_at)
        self._dispatcher.dispatch(item)

    def _on_complete(self, item: WorkItem, outcome: Outcome) -> None:
        if outcome == "completed":
            self._completed += 1
        elif outcome == "failed":
            self._failed += 1
        else:
            self._cancelled += 1
        self._progress.set()

    # --- Lifecycle helpers ---

    async def _wait_idle(self, *, include_queued: bool) -> None:
        while self._dispatcher.in_flight or (include_queued and len(self._queue)):
            self._progress.clear()
            await self._progress.wait()

    def _fail_queued(self) -> int:
        items = self._queue.drain()
        for item in items:
            if not item.result.done():
                item.result.set_exception(ClosedError("Throttler shut down before the call was admitted"))
                self._failed += 1
        return len(items)
