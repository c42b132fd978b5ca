"""Background refresher — polls upstream and republishes the cache snapshot.

The whole recovery policy is "keep serving the last good snapshot": a failed
refresh is logged and otherwise ignored until the next tick. No retry, no
backoff.

Unlike a plain interval timer, refreshes here never overlap. The loop waits
for one refresh to finish before sleeping, and ``refresh()`` itself holds a
lock so a manual call cannot race the loop either.
"""

import asyncio
import logging

from bitscope.config import Settings
from bitscope.errors import UpstreamError
from bitscope.services.cache import SnapshotCache, project_block, project_mempool_entry
from bitscope.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)


class Refresher:
    def __init__(self, client: UpstreamClient, cache: SnapshotCache, settings: Settings):
        self._client = client
        self._cache = cache
        self._settings = settings
        self._lock = asyncio.Lock()
        self._stop = asyncio.Event()
        self._task: asyncio.Task | None = None

    async def _fetch_both(self) -> tuple[list[dict], list[dict]]:
        results = await asyncio.gather(
            self._client.fetch_blocks(),
            self._client.fetch_mempool(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        blocks, mempool = results
        return blocks, mempool

    async def refresh(self) -> bool:
        """Fetch both resources and replace the cache. Never raises."""
        async with self._lock:
            logger.info("Refreshing data from upstream %s", self._settings.upstream_base_url)
            try:
                blocks, mempool = await asyncio.wait_for(
                    self._fetch_both(), timeout=self._settings.upstream_timeout
                )
                snapshot = self._cache.replace(
                    [project_block(b) for b in blocks[: self._settings.blocks_limit]],
                    [project_mempool_entry(t) for t in mempool[: self._settings.mempool_limit]],
                )
            except asyncio.TimeoutError:
                logger.warning(
                    "Upstream rate-limited or unreachable (timed out after %.1fs); serving stale cache",
                    self._settings.upstream_timeout,
                )
                return False
            except UpstreamError as e:
                logger.warning("Upstream rate-limited or unreachable (%s); serving stale cache", e)
                return False
            except (AttributeError, TypeError) as e:
                # Upstream sent an array of something other than objects.
                logger.warning("Upstream returned malformed records (%s); serving stale cache", e)
                return False
            except Exception:
                logger.exception("Unexpected refresh failure; serving stale cache")
                return False

            logger.info(
                "Data cache updated at %s: %d blocks, %d mempool entries",
                snapshot.refreshed_at.isoformat(),
                len(snapshot.blocks),
                len(snapshot.mempool),
            )
            return True

    async def run(self) -> None:
        """Refresh now, then every interval until ``stop()``."""
        while not self._stop.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._settings.refresh_interval)
            except asyncio.TimeoutError:
                pass

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            # Fresh primitives: a restarted app may be running on a new event loop.
            self._lock = asyncio.Lock()
            self._stop = asyncio.Event()
            self._task = asyncio.create_task(self.run(), name="bitscope-refresher")
        return self._task

    async def stop(self) -> None:
        self._stop.set()
        if self._task is not None:
            await self._task
            self._task = None
