# src/resources/document_examples.py

from mcp.server.fastmcp import FastMCP

from core.documents import example_document
from core.serialization import JsonSerializer


def register_resources(mcp: FastMCP) -> None:
    """
    Register example payload resources for the MCP server.
    """

    @mcp.resource(
        "crpt://examples/document",
        mime_type="application/json",
        description="Example LP_INTRODUCE_GOODS document in API wire format"
    )
    def example_document_json() -> str:
        return JsonSerializer().serialize(example_document()).decode("utf-8")
