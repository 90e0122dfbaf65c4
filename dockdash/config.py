"""Application configuration via environment variables and .env file.

Uses pydantic-settings to load configuration from environment variables
with optional fallback to a .env file. All settings can be overridden
by setting the corresponding environment variable.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class Settings(BaseSettings):
    """Central configuration for the dashboard.

    Attributes:
        ENGINE_URL: Base URL of the Docker Engine HTTP API.
        ENGINE_TIMEOUT: Timeout in seconds applied to every Engine request.
        HOST: Address the HTTP server binds to.
        PORT: Port the HTTP server binds to.
        TEMPLATES_DIR: Directory holding the ``*.html`` page templates.
        CONTAINERS_RENDER_HTML: Render ``/containers`` as HTML when true,
            return the raw container list as JSON when false.
        LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    ENGINE_URL: str = "http://localhost:42069"
    ENGINE_TIMEOUT: float = 10.0
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    TEMPLATES_DIR: Path = DEFAULT_TEMPLATES_DIR
    CONTAINERS_RENDER_HTML: bool = True
    LOG_LEVEL: str = "INFO"


settings = Settings()
