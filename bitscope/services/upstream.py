"""Blockstream-compatible explorer API client.

One shared ``httpx.AsyncClient`` per process. Every failure mode (transport
error, timeout, non-2xx including 429, bad JSON) surfaces as ``UpstreamError``
so callers only have one thing to catch.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from bitscope.config import Settings
from bitscope.errors import UpstreamError

logger = logging.getLogger(__name__)

BLOCKS_PATH = "/blocks"
MEMPOOL_PATH = "/mempool/recent"
TX_PATH = "/tx/{txid}"


class UpstreamClient:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _http(self) -> httpx.AsyncClient:
        """Return the shared client, rebuilding it if a previous shutdown closed it."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._settings.upstream_base_url,
                timeout=self._settings.upstream_timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def _get_json(self, path: str) -> Any:
        try:
            resp = await self._http().get(path)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise UpstreamError(path, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamError(path, f"invalid JSON body: {e}") from e

    async def _get_list(self, path: str) -> list[dict]:
        data = await self._get_json(path)
        if not isinstance(data, list):
            raise UpstreamError(path, f"expected a JSON array, got {type(data).__name__}")
        return data

    async def fetch_blocks(self) -> list[dict]:
        """Most recent blocks, newest first, in upstream's own shape."""
        return await self._get_list(BLOCKS_PATH)

    async def fetch_mempool(self) -> list[dict]:
        """Most recent mempool transaction summaries."""
        return await self._get_list(MEMPOOL_PATH)

    async def fetch_transaction(self, txid: str) -> Any:
        # Encoded as one path segment so upstream sees exactly the id the client sent.
        return await self._get_json(TX_PATH.format(txid=quote(txid, safe="")))

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
