"""Explorer routes.

GET /blocks    → cached latest blocks        (never calls upstream)
GET /mempool   → cached recent mempool txs   (never calls upstream)
GET /tx/{id}   → live upstream pass-through  (never touches the cache)
"""

import logging
from typing import Any

from fastapi import APIRouter, Request

from bitscope.errors import TransactionFetchError, UpstreamError
from bitscope.services.cache import SnapshotCache
from bitscope.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)

router = APIRouter()


def _cache(request: Request) -> SnapshotCache:
    return request.app.state.cache


def _upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream


@router.get("/blocks")
async def blocks(request: Request) -> list[dict]:
    return list(_cache(request).get().blocks)


@router.get("/mempool")
async def mempool(request: Request) -> list[dict]:
    return list(_cache(request).get().mempool)


@router.get("/tx/{txid}")
async def transaction(txid: str, request: Request) -> Any:
    """Single transaction, fetched live and returned verbatim."""
    try:
        return await _upstream(request).fetch_transaction(txid)
    except UpstreamError as e:
        logger.warning("Transaction fetch failed for %s: %s", txid, e.reason)
        raise TransactionFetchError() from e
