"""In-memory snapshot of the latest blocks and mempool entries.

Single writer (the refresher), many readers (route handlers). A snapshot is
built completely before it is published, and publishing is one attribute
assignment, so a reader always sees a matching blocks/mempool pair.

Note: each uvicorn worker holds its own cache and runs its own refresher.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, TypedDict

BLOCK_FIELDS = ("id", "height", "timestamp", "tx_count")
MEMPOOL_FIELDS = ("txid", "fee", "vsize")


class Block(TypedDict):
    id: str
    height: int
    timestamp: int
    tx_count: int


class MempoolEntry(TypedDict):
    txid: str
    fee: int
    vsize: int


def project_block(raw: dict[str, Any]) -> Block:
    return {name: raw.get(name) for name in BLOCK_FIELDS}  # type: ignore[return-value]


def project_mempool_entry(raw: dict[str, Any]) -> MempoolEntry:
    return {name: raw.get(name) for name in MEMPOOL_FIELDS}  # type: ignore[return-value]


@dataclass(frozen=True)
class Snapshot:
    blocks: tuple[Block, ...] = ()
    mempool: tuple[MempoolEntry, ...] = ()
    refreshed_at: datetime | None = field(default=None, compare=False)


class SnapshotCache:
    def __init__(self):
        self._snapshot = Snapshot()

    def get(self) -> Snapshot:
        return self._snapshot

    def replace(self, blocks: Iterable[Block], mempool: Iterable[MempoolEntry]) -> Snapshot:
        """Publish a new snapshot, discarding the previous one entirely."""
        snapshot = Snapshot(
            blocks=tuple(blocks),
            mempool=tuple(mempool),
            refreshed_at=datetime.now(timezone.utc),
        )
        self._snapshot = snapshot
        return snapshot
