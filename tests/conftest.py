from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from ecowitt_mcp.tools.config import ClientConfig, Credentials
from ecowitt_mcp.tools.ecowitt_client import EcowittClient

APPLICATION_KEY = "test-application-key"
API_KEY = "test-api-key"
BASE_URL = "https://api.ecowitt.test/api/v3"


def make_config(**overrides: Any) -> ClientConfig:
    values: dict[str, Any] = {
        "credentials": Credentials(application_key=APPLICATION_KEY, api_key=API_KEY),
        "base_url": BASE_URL,
        "request_timeout_ms": 2000,
        "version": "9.9.9",
    }
    values.update(overrides)
    return ClientConfig(**values)


def envelope(data: Any = None, code: int = 0, msg: str = "success") -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "msg": msg, "time": 1700000000}
    if data is not None:
        body["data"] = data
    return body


@pytest.fixture
def config() -> ClientConfig:
    return make_config()


@pytest.fixture
def make_client() -> Callable[..., EcowittClient]:
    def _make(handler: Callable[[httpx.Request], Any], **overrides: Any) -> EcowittClient:
        return EcowittClient(make_config(**overrides), transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def upstream() -> Callable[..., tuple[list[httpx.Request], Callable[[httpx.Request], httpx.Response]]]:
    """Handler answering every request with one JSON body; records the requests."""

    def _build(body: Any = None, status_code: int = 200):
        requests: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, json=body if body is not None else envelope({}))

        return requests, _handler

    return _build
