"""Single completion point for admitted work.

Every admitted WorkItem reaches CompletionRouter.complete exactly once,
whether the transport succeeded, failed, or the payload never encoded.
The router resolves the caller's future and always gives the permit back.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal, Optional

from core.models import WorkItem
from core.permits import PermitPool

logger = logging.getLogger(__name__)

Outcome = Literal["completed", "failed", "cancelled"]


class CompletionRouter:
    def __init__(
        self,
        *,
        permits: PermitPool,
        on_complete: Optional[Callable[[WorkItem, Outcome], None]] = None,
    ) -> None:
        self._permits = permits
        self._on_complete = on_complete

    def complete(self, item: WorkItem, *, result: Any = None, error: Optional[BaseException] = None) -> None:
        outcome: Outcome = "failed" if error is not None else "completed"
        try:
            future = item.result
            if future.cancelled():
                # Caller gave up on the future; nothing left to resolve.
                outcome = "cancelled"
                logger.debug("Result for %r was cancelled by the caller", item.payload)
            elif error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)
        finally:
            self._permits.release()
            if self._on_complete is not None:
                self._on_complete(item, outcome)
