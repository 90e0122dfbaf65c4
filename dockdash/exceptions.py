"""Error taxonomy shared by the Engine client, template registry and routes.

Every error carries the HTTP status the page handlers answer with when it
escapes a request, and the message shown to the visitor.  The exception
text itself only goes to the logs.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for all dashboard errors."""

    http_status: int = 500
    public_message: str = "The dashboard failed to handle this request."


class ConfigError(DashboardError):
    """Invalid configuration detected at construction time."""

    public_message = "The dashboard is misconfigured."


class TemplateError(DashboardError):
    """A template is missing, fails to parse, or fails to render."""

    public_message = "The page could not be rendered."


class EngineClientError(DashboardError):
    """Base class for failures of a single Engine fetch."""


class TransportError(EngineClientError):
    """The Engine could not be reached, or did not answer in time."""

    http_status = 502
    public_message = "The Docker Engine could not be reached."


class UpstreamError(EngineClientError):
    """The Engine answered with a non-success HTTP status."""

    http_status = 502
    public_message = "The Docker Engine answered with an error."

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(EngineClientError):
    """The response body does not match the expected JSON shape."""

    public_message = "The Docker Engine sent an unexpected response."
