"""Async client for the Docker Engine HTTP API.

Only the two read-only endpoints the dashboard needs are covered:
``GET /version`` and ``GET /containers/json``.  Each fetch is a single
GET followed by a JSON decode into the domain models; failures surface
as one of the ``EngineClientError`` subclasses and are never retried.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from dockdash.exceptions import (
    ConfigError,
    DecodeError,
    EngineClientError,
    TransportError,
    UpstreamError,
)
from dockdash.metrics import ENGINE_REQUESTS, ENGINE_UP
from dockdash.models import ContainerList, Version, container_list_adapter

logger = structlog.get_logger(__name__)

T = TypeVar("T")

VERSION_PATH = "/version"
CONTAINERS_PATH = "/containers/json"


def _validate_base_url(base_url: str) -> str:
    """Return *base_url* without a trailing slash.

    Raises:
        ConfigError: If the URL is not an absolute http(s) URL with a host,
            or carries a query string or fragment.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigError(f"Invalid Engine URL {base_url!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(
            f"Invalid Engine URL {base_url!r}: expected an absolute "
            "http:// or https:// URL"
        )
    if url.query or url.fragment:
        raise ConfigError(
            f"Invalid Engine URL {base_url!r}: query strings and fragments "
            "are not allowed"
        )
    return str(url).rstrip("/")


def _decode_version(payload: Any) -> Version:
    try:
        return Version.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {VERSION_PATH} payload: {exc}") from exc


def _decode_containers(payload: Any) -> ContainerList:
    if not isinstance(payload, list):
        raise DecodeError(
            f"Unexpected {CONTAINERS_PATH} payload: expected a JSON array, "
            f"got {type(payload).__name__}"
        )
    try:
        return container_list_adapter.validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {CONTAINERS_PATH} payload: {exc}") from exc


class EngineClient:
    """Typed facade over the Docker Engine API.

    The client holds no mutable state besides the pooled HTTP transport,
    so one instance is safely shared by every concurrent request.

    Parameters:
        base_url: Root URL of the Engine API (e.g. ``http://localhost:42069``).
        timeout: Timeout in seconds applied to every request.
        transport: Optional httpx transport, mainly for tests.

    Raises:
        ConfigError: If *base_url* is malformed.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = _validate_base_url(base_url)
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def fetch_version(self) -> Version:
        """Return the Engine version information.

        Raises:
            TransportError: The Engine is unreachable or timed out.
            UpstreamError: The Engine answered with a non-2xx status.
            DecodeError: The body is not a valid version object.
        """
        return await self._fetch(VERSION_PATH, _decode_version)

    async def fetch_containers(self) -> ContainerList:
        """Return the containers known to the Engine, in Engine order.

        Raises:
            TransportError: The Engine is unreachable or timed out.
            UpstreamError: The Engine answered with a non-2xx status.
            DecodeError: The body is not an array of container objects.
        """
        return await self._fetch(CONTAINERS_PATH, _decode_containers)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _fetch(self, path: str, decode: Callable[[Any], T]) -> T:
        try:
            result = decode(await self._get_json(path))
        except EngineClientError as exc:
            ENGINE_REQUESTS.labels(endpoint=path, outcome=type(exc).__name__).inc()
            if not isinstance(exc, DecodeError):
                ENGINE_UP.set(0)
            await logger.awarning(
                "engine_fetch_failed",
                endpoint=path,
                error=type(exc).__name__,
                detail=str(exc),
            )
            raise

        ENGINE_REQUESTS.labels(endpoint=path, outcome="ok").inc()
        ENGINE_UP.set(1)
        await logger.adebug("engine_fetch_ok", endpoint=path)
        return result

    async def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = await self._client.get(url)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Timed out after {self.timeout}s waiting for {url}"
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Could not reach {url}: {exc}") from exc

        if not resp.is_success:
            raise UpstreamError(
                f"Engine answered {resp.status_code} for {url}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"Engine returned invalid JSON for {url}") from exc
