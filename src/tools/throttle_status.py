from __future__ import annotations

from typing import Any, Callable, Dict

from mcp.server.fastmcp import FastMCP

from clients.crpt_api import CrptApi


def register(mcp: FastMCP, *, get_api: Callable[[], CrptApi]) -> None:
    @mcp.tool(name="throttle_status")
    async def throttle_status() -> Dict[str, Any]:
        """Report the rate limiter's state: permits, queue depth, in-flight calls and counters."""
        return dict(get_api().stats)
