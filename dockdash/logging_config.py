"""Structured logging configuration using *structlog*.

``setup_logging`` switches structlog to JSON lines on stdout.
``RequestLoggingMiddleware`` writes one access-log event per request and
feeds the request metrics.
"""

from __future__ import annotations

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from dockdash.metrics import UNMATCHED_ENDPOINT, observe_request


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structlog with JSON rendering.

    Parameters:
        log_level: Minimum log level to emit (e.g. ``"DEBUG"``, ``"INFO"``).
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            structlog.processors.NAME_TO_LEVEL[log_level.lower()],
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def route_template(request: Request) -> str:
    """Return the path template of the route that served *request*.

    The router stores the matched route in the scope; requests no route
    matched (404 scans, typos) all share ``UNMATCHED_ENDPOINT``.
    """
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if path else UNMATCHED_ENDPOINT


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log and request metrics for every HTTP request.

    The log event keeps the concrete path; the metrics use the route
    template.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger = structlog.get_logger("dockdash.access")
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - start

        endpoint = route_template(request)
        await logger.ainfo(
            "request_handled",
            method=request.method,
            path=request.url.path,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_ms=round(elapsed * 1000, 2),
        )
        observe_request(request.method, endpoint, response.status_code, elapsed)
        return response
