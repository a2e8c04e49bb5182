"""Dataclasses for throttler configuration and queued work.

ThrottleSettings is immutable for the lifetime of a throttler and is
validated on construction. WorkItem pairs a submitted payload with the
future handed back to the caller.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from core.errors import InvalidConfigError


@dataclass(frozen=True)
class ThrottleSettings:
    """Admission settings: at most `request_limit` calls per `window_seconds`.

    Field groups:
    - Window: window_seconds, request_limit
    - Backpressure: max_queue_depth (None means unbounded)
    """

    window_seconds: float
    request_limit: int

    max_queue_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.request_limit, bool) or not isinstance(self.request_limit, int):
            raise InvalidConfigError("request_limit must be an integer")
        if self.request_limit <= 0:
            raise InvalidConfigError("request_limit must be positive")
        try:
            window = float(self.window_seconds)
        except (TypeError, ValueError) as e:
            raise InvalidConfigError("window_seconds must be a number") from e
        if not window > 0:
            raise InvalidConfigError("window_seconds must be positive")
        if self.max_queue_depth is not None:
            if isinstance(self.max_queue_depth, bool) or not isinstance(self.max_queue_depth, int):
                raise InvalidConfigError("max_queue_depth must be an integer or None")
            if self.max_queue_depth <= 0:
                raise InvalidConfigError("max_queue_depth must be positive or None")

    @property
    def period_seconds(self) -> float:
        # One admission attempt per period spreads request_limit calls over the window
        return float(self.window_seconds) / self.request_limit


@dataclass(slots=True)
class WorkItem:
    # Payload + credential travel together; result is resolved exactly once
    payload: Any
    credential: str
    result: "asyncio.Future[Any]"
    submitted_at: float = field(default_factory=time.monotonic)
