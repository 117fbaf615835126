"""Pytest configuration and shared fixtures."""

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from budaclient.client.auth import Credentials
from budaclient.client.rest import RestClient
from budaclient.utils.config import ClientConfig, Config


class FakeBudaAPI:
    """Minimal stand-in for the Buda API.

    Routes map a path (relative to /api/v2) to a callable taking the
    request and returning ``(status, payload)``; payload is JSON-encoded
    unless it is already bytes. Every request is recorded.
    """

    base_path = "/api/v2"

    def __init__(self):
        self.routes: dict[str, Callable[[web.Request], tuple[int, Any]]] = {}
        self.requests: list[web.Request] = []

    def add(self, path: str, payload: Any, status: int = 200) -> None:
        self.routes[path] = lambda request: (status, payload)

    def add_handler(self, path: str, handler: Callable[[web.Request], tuple[int, Any]]) -> None:
        self.routes[path] = handler

    def requests_for(self, path: str) -> list[web.Request]:
        return [r for r in self.requests if r.path == self.base_path + path]

    async def handle(self, request: web.Request) -> web.Response:
        await request.read()  # cached on the request for later assertions
        self.requests.append(request)
        path = request.path.removeprefix(self.base_path)
        handler = self.routes.get(path)
        if handler is None:
            return web.json_response({"message": "Not found", "code": "not_found"}, status=404)

        status, payload = handler(request)
        if isinstance(payload, bytes):
            return web.Response(body=payload, status=status, content_type="text/plain")
        return web.json_response(payload, status=status)


@pytest.fixture
def credentials() -> Credentials:
    """Test API credentials."""
    return Credentials(api_key="test-key", api_secret="s3cr3t")


@pytest.fixture
def fake_api() -> FakeBudaAPI:
    """Create an empty fake API."""
    return FakeBudaAPI()


@pytest.fixture
async def buda_server(fake_api: FakeBudaAPI) -> AsyncGenerator[TestServer, None]:
    """Serve the fake API on a local port."""
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake_api.handle)
    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def client_config(buda_server: TestServer) -> ClientConfig:
    """Client settings pointing at the fake API."""
    return ClientConfig(
        base_url=str(buda_server.make_url(FakeBudaAPI.base_path)),
        page_size=2,
        max_concurrent_pages=4,
        timeout=5,
    )


@pytest.fixture
async def rest_client(
    credentials: Credentials, client_config: ClientConfig
) -> AsyncGenerator[RestClient, None]:
    """Create a REST client connected to the fake API."""
    client = RestClient(credentials=credentials, config=client_config)
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
def make_page() -> Callable[..., dict]:
    """Build a paginated envelope."""

    def _make_page(
        key: str,
        items: list[Any],
        page: int = 1,
        total_pages: int | None = 1,
        total_count: int | None = None,
    ) -> dict:
        body: dict[str, Any] = {key: items}
        if total_pages is not None:
            body["meta"] = {
                "current_page": page,
                "total_pages": total_pages,
                "total_count": total_count if total_count is not None else len(items),
            }
        return body

    return _make_page


@pytest.fixture
def encode() -> Callable[[Any], bytes]:
    """JSON-encode a payload the way the server sends it."""
    return lambda payload: json.dumps(payload).encode("utf-8")


@pytest.fixture
def sample_order() -> dict:
    """Sample order as returned by GET /orders/{id}."""
    return {
        "id": 1,
        "type": "Bid",
        "state": "traded",
        "created_at": "2017-06-09T14:27:06.000Z",
        "market_id": "BTC-CLP",
        "account_id": 5,
        "fee_currency": "BTC",
        "price_type": "limit",
        "limit": ["1500000.0", "CLP"],
        "amount": ["0.0", "BTC"],
        "original_amount": ["0.01", "BTC"],
        "traded_amount": ["0.01", "BTC"],
        "total_exchanged": ["15000.0", "CLP"],
        "paid_fee": ["0.00008", "BTC"],
    }


@pytest.fixture
def sample_market() -> dict:
    """Sample market."""
    return {
        "id": "BTC-CLP",
        "name": "btc-clp",
        "base_currency": "BTC",
        "quote_currency": "CLP",
        "minimum_order_amount": ["0.001", "BTC"],
    }


@pytest.fixture
def skip_if_no_credentials():
    """Skip test if API credentials are not available."""
    if not Config.API_KEY or not Config.API_SECRET:
        pytest.skip("API credentials not available")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "live: mark test as requiring live connection")
    config.addinivalue_line(
        "markers", "credentials: mark test as requiring API credentials"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "integration_live" in item.nodeid:
            item.add_marker(pytest.mark.live)
            item.add_marker(pytest.mark.credentials)
