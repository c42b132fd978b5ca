import httpx
import pytest

from bitscope.app import create_app
from bitscope.config import Settings
from bitscope.services.cache import SnapshotCache
from bitscope.services.refresher import Refresher
from bitscope.services.upstream import UpstreamClient

BASE_URL = "https://explorer.test/api"


def make_block(n: int) -> dict:
    return {
        "id": f"{n:064x}",
        "height": 800_000 - n,
        "timestamp": 1_700_000_000 - n * 600,
        "tx_count": 2000 + n,
        "version": 536870912,
        "merkle_root": "ab" * 32,
        "size": 1_500_000,
        "weight": 3_990_000,
    }


def make_mempool_entry(n: int) -> dict:
    return {"txid": f"tx{n:04d}", "fee": 1000 + n, "vsize": 140 + n, "value": 50_000}


class FakeUpstream:
    """Programmable explorer API behind an httpx.MockTransport.

    ``routes`` maps a request path to either a JSON-able body (served with
    200), an ``httpx.Response``, or an exception instance to raise.
    """

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.calls.append(path)
        result = self.routes.get(path)
        if result is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(upstream_base_url=BASE_URL, refresh_interval_ms=50, upstream_timeout_ms=1000)


@pytest.fixture
def cache() -> SnapshotCache:
    return SnapshotCache()


@pytest.fixture
def refresher(fake_upstream, cache, settings) -> Refresher:
    client = UpstreamClient(settings, transport=fake_upstream.transport)
    return Refresher(client, cache, settings)


@pytest.fixture
def app(fake_upstream, settings):
    return create_app(settings, transport=fake_upstream.transport, run_refresher=False)
