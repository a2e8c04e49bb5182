import asyncio

import pytest

from core.completion import CompletionRouter
from core.dispatch import Dispatcher
from core.errors import EncodingError, TransportError
from core.models import WorkItem
from core.permits import PermitPool

from conftest import StubTransport


def _admitted(pool: PermitPool, payload, credential="tok") -> WorkItem:
    assert pool.try_acquire()
    return WorkItem(payload=payload, credential=credential, result=asyncio.get_running_loop().create_future())


def _wire(serializer, transport, limit=2):
    pool = PermitPool(limit)
    completed = []
    router = CompletionRouter(permits=pool, on_complete=lambda item, outcome: completed.append((item.payload, outcome)))
    return pool, completed, Dispatcher(serializer=serializer, transport=transport, router=router)


@pytest.mark.asyncio
async def test_dispatch_success_resolves_and_releases(stub_serializer, stub_transport):
    pool, completed, d = _wire(stub_serializer, stub_transport)
    item = _admitted(pool, "doc-1", credential="secret")

    d.dispatch(item)
    assert d.in_flight == 1

    out = await item.result
    await asyncio.sleep(0)

    assert out == {"status": 200, "body": b"doc-1"}
    assert stub_transport.calls == [(b"doc-1", "secret")]
    assert pool.available == 2
    assert d.in_flight == 0
    assert completed == [("doc-1", "completed")]


@pytest.mark.asyncio
async def test_dispatch_encoding_error_skips_transport(stub_serializer, stub_transport):
    pool, completed, d = _wire(stub_serializer, stub_transport)
    item = _admitted(pool, "bad")

    d.dispatch(item)

    with pytest.raises(EncodingError):
        await item.result
    assert stub_transport.calls == []
    assert pool.available == 2
    assert d.in_flight == 0


@pytest.mark.asyncio
async def test_dispatch_unexpected_serializer_error_becomes_encoding_error(stub_transport):
    class Exploding:
        def serialize(self, payload):
            raise TypeError("not today")

    pool, _, d = _wire(Exploding(), stub_transport)
    item = _admitted(pool, "x")

    d.dispatch(item)

    with pytest.raises(EncodingError) as ei:
        await item.result
    assert isinstance(ei.value.__cause__, TypeError)
    assert pool.available == 2


@pytest.mark.asyncio
async def test_dispatch_transport_failure_is_wrapped(stub_serializer):
    transport = StubTransport(fail_on={b"x"}, error=ConnectionError("reset"))
    pool, completed, d = _wire(stub_serializer, transport)
    item = _admitted(pool, "x")

    d.dispatch(item)

    with pytest.raises(TransportError) as ei:
        await item.result
    await asyncio.sleep(0)
    assert isinstance(ei.value.__cause__, ConnectionError)
    assert pool.available == 2
    assert completed == [("x", "failed")]


@pytest.mark.asyncio
async def test_dispatch_transport_error_passes_through(stub_serializer):
    original = TransportError("503 upstream")
    transport = StubTransport(fail_on={b"x"}, error=original)
    pool, _, d = _wire(stub_serializer, transport)
    item = _admitted(pool, "x")

    d.dispatch(item)

    with pytest.raises(TransportError) as ei:
        await item.result
    assert ei.value is original


@pytest.mark.asyncio
async def test_dispatch_caller_cancelled_future_still_releases(stub_serializer):
    transport = StubTransport(delay=0.05)
    pool, completed, d = _wire(stub_serializer, transport)
    item = _admitted(pool, "slow")

    d.dispatch(item)
    item.result.cancel()
    await asyncio.sleep(0.1)

    assert pool.available == 2
    assert d.in_flight == 0
    assert completed == [("slow", "cancelled")]


@pytest.mark.asyncio
async def test_router_releases_even_if_resolving_raises():
    pool = PermitPool(1)
    router = CompletionRouter(permits=pool)
    item = _admitted(pool, "dup")
    item.result.set_result("already")

    with pytest.raises(asyncio.InvalidStateError):
        router.complete(item, result="again")

    assert pool.available == 1
