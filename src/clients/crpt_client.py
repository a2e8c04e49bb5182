from __future__ import annotations

import logging

import httpx

from core.errors import TransportError, ValidationError

logger = logging.getLogger(__name__)


class CrptClient:
    """Async transport for the CRPT document-create endpoint.

    perform_call(body, credential) POSTs a JSON body with a bearer token
    and returns the httpx.Response whatever its status; only network and
    protocol failures raise (as TransportError).
    """

    JSON_CONTENT_TYPE = "application/json"

    def __init__(self, *, base_url: str, timeout: float, verify: bool = True) -> None:
        self._url = (base_url or "").strip()
        if not self._url:
            raise ValidationError("CRPT API URL is empty")
        self._timeout = float(timeout)
        self._verify = bool(verify)

    async def perform_call(self, body: bytes, credential: str) -> httpx.Response:
        token = (credential or "").strip()
        headers = {
            "Content-Type": self.JSON_CONTENT_TYPE,
            "Authorization": f"Bearer {token}",
        }

        try:
            async with self._create_client() as c:
                r = await c.post(self._url, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to call CRPT API: {e}") from e

        logger.info("Response: status=%s url=%s", r.status_code, self._url)
        return r

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            verify=self._verify,
        )
