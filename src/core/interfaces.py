"""Core protocol and interface definitions.

Defines the collaborators the throttler is wired with: a Serializer that
turns a payload into bytes and a Transport that performs the remote call.
Both are injected, so tests substitute stubs without process-wide state.
"""

from __future__ import annotations

from typing import Any, Protocol


class Serializer(Protocol):
    """Contract for turning a payload into a request body."""
    def serialize(self, payload: Any) -> bytes:
        ...


class Transport(Protocol):
    """Contract for the remote call. Must complete (or raise) exactly once per call."""
    async def perform_call(self, body: bytes, credential: str) -> Any:
        ...
