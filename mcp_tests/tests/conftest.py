import asyncio

import pytest

from core.errors import EncodingError


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool and resource registration."""

    def __init__(self) -> None:
        self.tools = {}
        self.resources = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator

    def resource(self, uri: str, **kwargs):
        def _decorator(fn):
            self.resources[uri] = fn
            return fn
        return _decorator


class StubSerializer:
    """Encodes str(payload); payloads equal to "bad" fail to encode."""

    def serialize(self, payload) -> bytes:
        if payload == "bad":
            raise EncodingError("cannot encode 'bad'")
        return str(payload).encode("utf-8")


class StubTransport:
    """Records calls and concurrency; optionally sleeps or fails."""

    def __init__(self, *, delay: float = 0.0, fail_on=None, error: Exception = None) -> None:
        self.delay = delay
        self.fail_on = set(fail_on or ())
        self.error = error or RuntimeError("connection reset")
        self.calls = []
        self.started_at = []
        self.active = 0
        self.max_active = 0

    async def perform_call(self, body: bytes, credential: str):
        loop = asyncio.get_running_loop()
        self.calls.append((body, credential))
        self.started_at.append(loop.time())
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if body in self.fail_on:
                raise self.error
            return {"status": 200, "body": body}
        finally:
            self.active -= 1


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def stub_serializer():
    return StubSerializer()


@pytest.fixture
def stub_transport():
    return StubTransport()
