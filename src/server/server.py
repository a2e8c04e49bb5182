"""Server bootstrap for the CRPT MCP service.

Creates the FastMCP instance, owns the throttled CrptApi for the server's
lifespan, registers tools and resources, and starts the MCP server
(stdio transport).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP

from clients.crpt_api import CrptApi
from config import (
    CRPT_API_URL,
    CRPT_TIMEOUT,
    HTTP_VERIFY,
    LOG_LEVEL,
    SHUTDOWN_TIMEOUT,
    THROTTLE_MAX_QUEUE,
    THROTTLE_REQUEST_LIMIT,
    THROTTLE_WINDOW_SECONDS,
)

from tools.create_document import register as register_create_document
from tools.throttle_status import register as register_throttle_status

from resources.document_examples import register_resources

logger = logging.getLogger(__name__)

_api: Optional[CrptApi] = None


def get_api() -> CrptApi:
    if _api is None:
        raise RuntimeError("CRPT API is not running (server lifespan not started)")
    return _api


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    global _api
    # The throttler's pacing task needs the server's event loop, so build it here.
    _api = CrptApi(
        THROTTLE_WINDOW_SECONDS,
        THROTTLE_REQUEST_LIMIT,
        max_queue_depth=THROTTLE_MAX_QUEUE or None,
        base_url=CRPT_API_URL,
        timeout=CRPT_TIMEOUT,
        verify=HTTP_VERIFY,
    )
    logger.info(
        "CRPT API throttled to %d request(s) per %.2fs",
        THROTTLE_REQUEST_LIMIT,
        THROTTLE_WINDOW_SECONDS,
    )
    try:
        yield
    finally:
        api, _api = _api, None
        await api.shutdown(SHUTDOWN_TIMEOUT)


mcp = FastMCP("crpt-mcp", lifespan=lifespan)


def register_tools() -> None:
    register_create_document(mcp, get_api=get_api)
    register_throttle_status(mcp, get_api=get_api)


def register_all() -> None:
    register_tools()
    register_resources(mcp)


register_all()


def main() -> None:
    # stdout carries the stdio protocol; logs go to stderr.
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
