"""Application entry-point for the Docker dashboard.

Builds the FastAPI application: the Engine client and the template
registry are constructed once by :func:`create_app` and shared read-only
by every request.  A malformed ``ENGINE_URL`` or a broken template
directory aborts startup.

Run modes::

    uvicorn dockdash.main:app --host 0.0.0.0 --port 3000

    python -m dockdash.main
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI

from dockdash import __version__
from dockdash.adapters.engine_client import EngineClient
from dockdash.api.errors import register_error_handlers
from dockdash.api.routes import router
from dockdash.config import Settings, settings as default_settings
from dockdash.logging_config import RequestLoggingMiddleware, setup_logging
from dockdash.templating import TemplateRegistry


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler -- runs once on startup and shutdown.

    Initialises structured logging, reports what was loaded, and closes
    the Engine client on shutdown.
    """
    cfg: Settings = app.state.settings
    setup_logging(log_level=cfg.LOG_LEVEL)
    logger = structlog.get_logger("dockdash.startup")
    await logger.ainfo(
        "server_starting",
        version=__version__,
        engine_url=app.state.engine.base_url,
        templates=list(app.state.templates.names),
        log_level=cfg.LOG_LEVEL,
    )
    yield
    await app.state.engine.close()
    await logger.ainfo("server_shutting_down")


def create_app(
    settings: Settings | None = None,
    engine: EngineClient | None = None,
    templates: TemplateRegistry | None = None,
) -> FastAPI:
    """Build the application.

    Parameters:
        settings: Configuration; the environment-derived settings by default.
        engine: Pre-built Engine client; built from ``settings`` if omitted.
        templates: Pre-built template registry; loaded from
            ``settings.TEMPLATES_DIR`` if omitted.

    Raises:
        ConfigError: ``ENGINE_URL`` is malformed.
        TemplateError: The templates cannot be loaded.
    """
    cfg = settings or default_settings
    if engine is None:
        engine = EngineClient(cfg.ENGINE_URL, timeout=cfg.ENGINE_TIMEOUT)
    if templates is None:
        templates = TemplateRegistry.load(cfg.TEMPLATES_DIR)

    app = FastAPI(
        title="Docker Dashboard",
        description="HTML pages showing Docker Engine version and containers.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.engine = engine
    app.state.templates = templates

    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on ``HOST:PORT``."""
    import uvicorn

    uvicorn.run(
        "dockdash.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
