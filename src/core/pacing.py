"""
Pacing driver.

A single asyncio task that calls a tick handler once per period on a
monotonic, fixed-rate timeline. Client-side smoothing only: it spaces out
admissions, it does not know about server-side limits.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PacingDriver:
    def __init__(self, *, period_seconds: float, on_tick: Callable[[], None]) -> None:
        period = float(period_seconds)
        if period <= 0:
            raise ValueError("period_seconds must be > 0")
        self._period = period
        self._on_tick = on_tick
        self._task: Optional[asyncio.Task] = None
        self._ticks = 0

    @property
    def period_seconds(self) -> float:
        return self._period

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        # Requires a running loop; the first tick fires immediately.
        if self._task is not None:
            raise RuntimeError("PacingDriver already started")
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pacing-driver")

    def cancel(self) -> None:
        """Request cancellation without waiting; stop() reaps the task."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def stop(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        next_tick = time.monotonic()
        while True:
            delay = next_tick - time.monotonic()
            if delay > 0:
                await asyncio.sleep(delay)

            self._ticks += 1
            try:
                self._on_tick()
            except Exception:
                # A failing tick must not end pacing for everything queued behind it.
                logger.exception("Pacing tick handler failed")

            next_tick += self._period
            now = time.monotonic()
            if next_tick < now:
                # Fell a whole period behind: skip missed slots instead of firing them as a burst.
                next_tick = now + self._period
