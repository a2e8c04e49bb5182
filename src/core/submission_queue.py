from __future__ import annotations

import threading
from collections import deque
from typing import Deque, List, Optional

from core.errors import ClosedError, RejectedError
from core.models import WorkItem


class SubmissionQueue:
    # FIFO of pending work; many producers, one consumer (the pacing tick)
    def __init__(self, *, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")
        self._max_depth = max_depth
        self._items: Deque[WorkItem] = deque()
        self._closed = False
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, item: WorkItem) -> None:
        with self._lock:
            if self._closed:
                raise ClosedError("Submission queue is closed")
            if self._max_depth is not None and len(self._items) >= self._max_depth:
                raise RejectedError(f"Submission queue is full ({self._max_depth} pending)")
            self._items.append(item)

    def try_dequeue(self) -> Optional[WorkItem]:
        with self._lock:
            return self._items.popleft() if self._items else None

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def drain(self) -> List[WorkItem]:
        """Remove and return everything still queued, oldest first."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
            return items
