import json

import pytest

from resources.document_examples import register_resources
from tools import throttle_status as throttle_status_tool


class FakeApi:
    stats = {"state": "running", "queued": 3, "in_flight": 1}


@pytest.mark.asyncio
async def test_throttle_status_returns_stats_copy(dummy_mcp):
    api = FakeApi()
    throttle_status_tool.register(dummy_mcp, get_api=lambda: api)
    fn = dummy_mcp.tools["throttle_status"]

    out = await fn()

    assert out == {"state": "running", "queued": 3, "in_flight": 1}
    assert out is not api.stats


def test_example_document_resource_is_wire_json(dummy_mcp):
    register_resources(dummy_mcp)
    fn = dummy_mcp.resources["crpt://examples/document"]

    data = json.loads(fn())
    assert data["doc_type"] == "LP_INTRODUCE_GOODS"
    assert data["description"]["participantInn"] == "ParticipantINN"
