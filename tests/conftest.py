"""Pytest configuration and fixtures for API tests."""

import os

# Must be set before footprint_api.config builds its settings
os.environ.setdefault("MAPBOX_ACCESS_TOKEN", "test-token")

from collections.abc import Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from footprint_api.clients.mapbox import MapboxClient  # noqa: E402
from footprint_api.dependencies import get_http_client  # noqa: E402
from footprint_api.main import app  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

TEST_TOKEN = "test-token"


class FakeMapbox:
    """Stand-in for api.mapbox.com, answering from a path -> response table.

    Unknown paths get a 404. A registered exception is raised instead of
    answering, to simulate transport failures.
    """

    def __init__(self) -> None:
        self.responses: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, response: httpx.Response | Exception) -> None:
        self.responses[path] = response

    def add_tile(self, path: str, payload: bytes) -> None:
        self.add(path, httpx.Response(200, content=payload))

    def add_geocode(self, query: str, centers: list[tuple[float, float]]) -> None:
        features = [
            {"place_name": f"{query} {i}", "center": [lon, lat]}
            for i, (lon, lat) in enumerate(centers)
        ]
        self.add(
            f"/geocoding/v5/mapbox.places/{query}.json",
            httpx.Response(200, json={"type": "FeatureCollection", "query": [query], "features": features}),
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(request.url.path)
        if response is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_mapbox() -> FakeMapbox:
    return FakeMapbox()


@pytest.fixture
def http_client_factory(fake_mapbox: FakeMapbox) -> Callable[[], httpx.AsyncClient]:
    """Build HTTP clients routed to the fake Mapbox."""

    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(fake_mapbox.handler))

    return factory


@pytest_asyncio.fixture
async def mapbox_client(http_client_factory):
    """MapboxClient talking to the fake Mapbox."""
    async with http_client_factory() as http:
        yield MapboxClient(http, TEST_TOKEN)


@pytest_asyncio.fixture
async def client(http_client_factory):
    """Async test client for FastAPI app."""

    async def override_get_http_client():
        async with http_client_factory() as http:
            yield http

    app.dependency_overrides[get_http_client] = override_get_http_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
