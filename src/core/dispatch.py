"""Dispatcher for admitted work.

Serializes the payload, starts the transport call as a task and hooks its
completion to the CompletionRouter. Never awaits the network itself, so it
is safe to call from the pacing tick.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, Set

from core.completion import CompletionRouter
from core.errors import EncodingError, TransportError
from core.interfaces import Serializer, Transport
from core.models import WorkItem

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, *, serializer: Serializer, transport: Transport, router: CompletionRouter) -> None:
        self._serializer = serializer
        self._transport = transport
        self._router = router
        self._in_flight: Set["asyncio.Task[Any]"] = set()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def dispatch(self, item: WorkItem) -> None:
        try:
            body = self._serializer.serialize(item.payload)
        except EncodingError as e:
            self._router.complete(item, error=e)
            return
        except Exception as e:
            err = EncodingError(f"Failed to serialize payload: {e}")
            err.__cause__ = e
            self._router.complete(item, error=err)
            return

        try:
            task = asyncio.get_running_loop().create_task(self._transport.perform_call(body, item.credential))
        except Exception as e:
            err = TransportError(f"Failed to start transport call: {e}")
            err.__cause__ = e
            self._router.complete(item, error=err)
            return

        self._in_flight.add(task)
        task.add_done_callback(partial(self._on_done, item))

    def _on_done(self, item: WorkItem, task: "asyncio.Task[Any]") -> None:
        self._in_flight.discard(task)

        if task.cancelled():
            self._router.complete(item, error=TransportError("transport call cancelled"))
            return

        exc = task.exception()
        if exc is None:
            self._router.complete(item, result=task.result())
            return

        if not isinstance(exc, TransportError):
            wrapped = TransportError(f"Transport call failed: {exc}")
            wrapped.__cause__ = exc
            exc = wrapped
        logger.warning("Document registration failed: %s", exc)
        self._router.complete(item, error=exc)
