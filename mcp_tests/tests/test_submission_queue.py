import asyncio

import pytest

from core.errors import ClosedError, RejectedError
from core.models import WorkItem
from core.submission_queue import SubmissionQueue


def _item(payload, loop):
    return WorkItem(payload=payload, credential="tok", result=loop.create_future())


@pytest.fixture
def loop():
    lp = asyncio.new_event_loop()
    yield lp
    lp.close()


def test_queue_is_fifo(loop):
    q = SubmissionQueue()
    for i in range(3):
        q.enqueue(_item(i, loop))

    assert len(q) == 3
    assert [q.try_dequeue().payload for _ in range(3)] == [0, 1, 2]
    assert q.try_dequeue() is None


def test_queue_closed_rejects_enqueue(loop):
    q = SubmissionQueue()
    q.close()

    assert q.closed is True
    with pytest.raises(ClosedError):
        q.enqueue(_item("a", loop))


def test_queue_max_depth_rejects_overflow(loop):
    q = SubmissionQueue(max_depth=2)
    q.enqueue(_item("a", loop))
    q.enqueue(_item("b", loop))

    with pytest.raises(RejectedError):
        q.enqueue(_item("c", loop))

    # Room frees up once the head is admitted
    q.try_dequeue()
    q.enqueue(_item("c", loop))
    assert len(q) == 2


def test_queue_drain_returns_everything_in_order(loop):
    q = SubmissionQueue()
    for p in ("a", "b", "c"):
        q.enqueue(_item(p, loop))

    drained = q.drain()

    assert [i.payload for i in drained] == ["a", "b", "c"]
    assert len(q) == 0


@pytest.mark.parametrize("depth", [0, -1])
def test_queue_rejects_non_positive_max_depth(depth):
    with pytest.raises(ValueError):
        SubmissionQueue(max_depth=depth)
