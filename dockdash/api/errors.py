"""Exception handlers turning dashboard errors into HTML error pages.

Engine unreachable or answering with an error -> 502, anything the
dashboard itself fails on (decoding, templates) -> 500.
"""

from __future__ import annotations

import html

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from dockdash.exceptions import DashboardError

logger = structlog.get_logger(__name__)

_ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{status} {kind}</title></head>
<body>
<h1>{status} {kind}</h1>
<p>{detail}</p>
<p><a href="/">Back to the dashboard</a></p>
</body>
</html>
"""


async def dashboard_error_handler(request: Request, exc: Exception) -> HTMLResponse:
    """Render a minimal error page for a :class:`DashboardError`.

    The page does not go through the template registry, so it still works
    when the failure is a template error.
    """
    status = getattr(exc, "http_status", 500)
    message = getattr(exc, "public_message", DashboardError.public_message)
    kind = type(exc).__name__
    await logger.aerror(
        "request_failed",
        path=request.url.path,
        error=kind,
        status_code=status,
        detail=str(exc),
    )
    body = _ERROR_PAGE.format(
        status=status,
        kind=html.escape(kind),
        detail=html.escape(message),
    )
    return HTMLResponse(body, status_code=status)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)
