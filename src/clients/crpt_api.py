"""Throttled CRPT document API.

CrptApi is the caller-facing entry point: it wires a JsonSerializer and a
CrptClient behind a RequestThrottler so that create_document() can be
called freely while outbound calls stay within the configured rate.

Usage (inside a running event loop):

    async with CrptApi(window_seconds=1.0, request_limit=5) as api:
        futures = [api.create_document(doc, token) for _ in range(30)]
        responses = await asyncio.gather(*futures)
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from clients.crpt_client import CrptClient
from config import CRPT_API_URL, CRPT_TIMEOUT, HTTP_VERIFY, SHUTDOWN_TIMEOUT
from core.documents import Document
from core.errors import ValidationError
from core.interfaces import Serializer, Transport
from core.models import ThrottleSettings
from core.serialization import JsonSerializer
from core.throttler import RequestThrottler


class CrptApi:
    def __init__(
        self,
        window_seconds: float = 1.0,
        request_limit: int = 5,
        *,
        max_queue_depth: Optional[int] = None,
        base_url: str = CRPT_API_URL,
        timeout: float = CRPT_TIMEOUT,
        verify: bool = HTTP_VERIFY,
        serializer: Optional[Serializer] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        # Settings validate first so a bad config never starts the pacing task.
        settings = ThrottleSettings(
            window_seconds=window_seconds,
            request_limit=request_limit,
            max_queue_depth=max_queue_depth,
        )
        self._throttler = RequestThrottler(
            settings,
            serializer=serializer or JsonSerializer(),
            transport=transport or CrptClient(base_url=base_url, timeout=timeout, verify=verify),
        )

    @property
    def stats(self) -> Dict[str, Any]:
        return self._throttler.stats

    def create_document(
        self,
        document: Union[Document, Mapping[str, Any]],
        signature: str,
    ) -> "asyncio.Future[httpx.Response]":
        """Queue a document for registration; the future resolves to the HTTP response.

        Raises ValidationError for a blank signature, ClosedError after
        shutdown and RejectedError when the queue is full. Encoding and
        transport failures are delivered through the future.
        """
        token = (signature or "").strip()
        if not token:
            raise ValidationError("Signature (bearer token) is required")
        return self._throttler.submit(document, token)

    async def shutdown(self, timeout: float = SHUTDOWN_TIMEOUT) -> bool:
        return await self._throttler.shutdown(timeout)

    async def __aenter__(self) -> "CrptApi":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
