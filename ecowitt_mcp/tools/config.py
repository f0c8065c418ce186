"""
Ecowitt MCP Server Configuration

Values come from the environment. Credentials are required; the base URL and
request timeout have defaults. Nothing here ever echoes a secret back.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import httpx

from .. import __version__
from .errors import configuration_error

SERVER_NAME = "ecowitt-weather-server"

DEFAULT_BASE_URL = "https://api.ecowitt.net/api/v3"
DEFAULT_REQUEST_TIMEOUT_MS = 10000
MAX_REQUEST_TIMEOUT_MS = 300000


@dataclass(frozen=True)
class Credentials:
    application_key: str
    api_key: str

    def __repr__(self) -> str:
        return "Credentials(application_key='***', api_key='***')"


@dataclass(frozen=True)
class ClientConfig:
    credentials: Credentials
    base_url: str = DEFAULT_BASE_URL
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    version: str = __version__

    @property
    def request_timeout(self) -> float:
        """Timeout in seconds"""
        return self.request_timeout_ms / 1000.0


def is_absolute_http_url(value: str) -> bool:
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def _required(environ: Mapping[str, str], name: str) -> str:
    value = (environ.get(name) or "").strip()
    if not value:
        raise configuration_error(f"{name} is required")
    return value


def _timeout_ms(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_REQUEST_TIMEOUT_MS
    try:
        value = float(raw)
    except ValueError:
        raise configuration_error("REQUEST_TIMEOUT must be a positive number", "INVALID_CONFIG") from None
    if value <= 0:
        raise configuration_error("REQUEST_TIMEOUT must be a positive number", "INVALID_CONFIG")
    if value > MAX_REQUEST_TIMEOUT_MS:
        raise configuration_error("REQUEST_TIMEOUT cannot exceed 5 minutes", "INVALID_CONFIG")
    return int(value)


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from environment variables."""
    if environ is None:
        environ = os.environ

    credentials = Credentials(
        application_key=_required(environ, "ECOWITT_APPLICATION_KEY"),
        api_key=_required(environ, "ECOWITT_API_KEY"),
    )

    base_url = (environ.get("ECOWITT_BASE_URL") or "").strip() or DEFAULT_BASE_URL
    if not is_absolute_http_url(base_url):
        raise configuration_error("ECOWITT_BASE_URL must be an absolute http(s) URL", "INVALID_CONFIG")

    return ClientConfig(
        credentials=credentials,
        base_url=base_url,
        request_timeout_ms=_timeout_ms(environ.get("REQUEST_TIMEOUT")),
    )
