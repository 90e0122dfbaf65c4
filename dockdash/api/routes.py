"""Route definitions for the dashboard.

The page routes fetch from the Docker Engine, turn the result into a
rendering context and hand it to the template registry.  ``/health`` and
``/metrics`` never contact the Engine.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response as StarletteResponse

from dockdash import __version__
from dockdash.adapters.engine_client import EngineClient
from dockdash.config import Settings
from dockdash.templating import TemplateRegistry

logger = structlog.get_logger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies (shared, read-only values built by the app factory)
# ---------------------------------------------------------------------------

def get_engine(request: Request) -> EngineClient:
    return request.app.state.engine


def get_templates(request: Request) -> TemplateRegistry:
    return request.app.state.templates


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def _render(
    templates: TemplateRegistry,
    name: str,
    context: dict[str, Any],
) -> HTMLResponse:
    await logger.adebug("render_context", template=name, context=context)
    return HTMLResponse(templates.render(name, context))


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

@router.get("/", response_class=HTMLResponse, tags=["pages"])
async def index(
    templates: TemplateRegistry = Depends(get_templates),
) -> HTMLResponse:
    """Static landing page."""
    return await _render(templates, "index.html", {})


@router.get("/infos", response_class=HTMLResponse, tags=["pages"])
async def engine_infos(
    engine: EngineClient = Depends(get_engine),
    templates: TemplateRegistry = Depends(get_templates),
) -> HTMLResponse:
    """Engine version information.

    The rendering context holds one key per ``Version`` field.
    """
    version = await engine.fetch_version()
    return await _render(templates, "infos.html", version.model_dump())


@router.get("/containers", tags=["pages"])
async def containers(
    engine: EngineClient = Depends(get_engine),
    templates: TemplateRegistry = Depends(get_templates),
    settings: Settings = Depends(get_settings),
) -> StarletteResponse:
    """Containers known to the Engine, in Engine order.

    Rendered as HTML, or returned as JSON when ``CONTAINERS_RENDER_HTML``
    is disabled.
    """
    items = await engine.fetch_containers()
    context = {"containers": [c.model_dump() for c in items]}
    if not settings.CONTAINERS_RENDER_HTML:
        return JSONResponse(context)
    return await _render(templates, "containers.html", context)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Unauthenticated liveness probe.

    Returns:
        A JSON object with ``status`` and ``version`` fields.
    """
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# Prometheus metrics
# ---------------------------------------------------------------------------

@router.get("/metrics", tags=["monitoring"])
async def prometheus_metrics() -> StarletteResponse:
    """Prometheus metrics in text exposition format."""
    return StarletteResponse(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
