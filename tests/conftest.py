"""Shared pytest fixtures for the dashboard test suite.

The Docker Engine is simulated with ``httpx.MockTransport``: the
``engine_routes`` fixture maps an Engine path either to the keyword
arguments of an ``httpx.Response`` or to an ``httpx`` exception class
raised for that path.  Tests mutate it to script the Engine.
"""

from __future__ import annotations

from typing import Any, AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from dockdash.adapters.engine_client import EngineClient
from dockdash.config import Settings
from dockdash.main import create_app

ENGINE_URL = "http://engine.test"

VERSION_PAYLOAD: dict[str, Any] = {
    "Platform": {"Name": "Docker Engine - Community"},
    "Version": "24.0.2",
    "ApiVersion": "1.43",
    "MinAPIVersion": "1.12",
    "GitCommit": "659604f",
    "GoVersion": "go1.20.4",
    "Os": "linux",
    "Arch": "amd64",
    "KernelVersion": "6.2.0",
    "BuildTime": "2023-05-25T21:52:22.000000000+00:00",
}

CONTAINERS_PAYLOAD: list[dict[str, Any]] = [
    {
        "Id": "abc123",
        "Names": ["/app"],
        "Image": "nginx:latest",
        "State": "running",
        "Status": "Up 2 hours",
    },
    {
        "Id": "def456",
        "Names": ["/db", "/app/db"],
        "Image": "postgres:16",
        "State": "exited",
        "Status": "Exited (0) 3 days ago",
    },
]


@pytest.fixture()
def engine_routes() -> dict[str, Any]:
    """Default Engine behaviour: both endpoints answer successfully."""
    return {
        "/version": {"status_code": 200, "json": VERSION_PAYLOAD},
        "/containers/json": {"status_code": 200, "json": CONTAINERS_PAYLOAD},
    }


@pytest.fixture()
def engine_requests() -> list[httpx.Request]:
    """Requests received by the fake Engine, in order."""
    return []


@pytest.fixture()
def engine_transport(
    engine_routes: dict[str, Any],
    engine_requests: list[httpx.Request],
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        engine_requests.append(request)
        route = engine_routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "page not found"})
        if isinstance(route, type) and issubclass(route, httpx.RequestError):
            raise route("engine down", request=request)
        return httpx.Response(**route)

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture()
async def engine(engine_transport: httpx.MockTransport) -> AsyncIterator[EngineClient]:
    """Yield an EngineClient talking to the fake Engine."""
    client = EngineClient(ENGINE_URL, transport=engine_transport)
    yield client
    await client.close()


@pytest.fixture()
def settings() -> Settings:
    return Settings(ENGINE_URL=ENGINE_URL)


@pytest.fixture()
def app(settings: Settings, engine: EngineClient) -> FastAPI:
    """Return an application wired to the fake Engine."""
    return create_app(settings=settings, engine=engine)


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Yield an async HTTP client wired to the ASGI app.

    Uses ``httpx.ASGITransport`` so that requests are handled in-process
    without starting a real server.
    """
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as ac:
        yield ac
