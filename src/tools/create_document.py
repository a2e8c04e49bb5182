"""MCP tool that registers a document through the throttled CRPT API.

Registers 'create_document', which queues the document behind the rate
limiter and returns the API's status code and body once the call is made.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from mcp.server.fastmcp import FastMCP

from clients.crpt_api import CrptApi
from config import CRPT_TOKEN
from core.errors import ValidationError


def register(mcp: FastMCP, *, get_api: Callable[[], CrptApi], default_signature: str = CRPT_TOKEN) -> None:
    @mcp.tool(name="create_document")
    async def create_document(document: Dict[str, Any], signature: Optional[str] = None) -> Dict[str, Any]:
        """Create a document in the CRPT system (rate limited).

        Params:
          - document: the document as a JSON object, using API field names
            (doc_id, doc_type, importRequest, products, ...).
          - signature: bearer token; defaults to the CRPT_TOKEN environment variable.

        Returns:
          {"status": <HTTP status code>, "body": <response text>}

        Raises:
          ValidationError for an empty document or missing signature;
          ClosedError/RejectedError when the limiter does not accept work;
          TransportError/EncodingError when the call itself fails.
        """
        if not isinstance(document, dict) or not document:
            raise ValidationError("Document is empty")

        token = (signature or default_signature or "").strip()
        if not token:
            raise ValidationError("Missing signature (set CRPT_TOKEN or pass one)")

        response = await get_api().create_document(document, token)
        return {"status": response.status_code, "body": response.text}
