from __future__ import annotations

import pytest

from ecowitt_mcp.tools.config import (
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_MS,
    Credentials,
    load_config,
)
from ecowitt_mcp.tools.errors import EcowittError, ErrorKind

ENV = {"ECOWITT_APPLICATION_KEY": "app-secret", "ECOWITT_API_KEY": "api-secret"}


def test_defaults_apply_when_optional_values_are_missing() -> None:
    config = load_config(dict(ENV))

    assert config.credentials == Credentials("app-secret", "api-secret")
    assert config.base_url == DEFAULT_BASE_URL
    assert config.request_timeout_ms == DEFAULT_REQUEST_TIMEOUT_MS
    assert config.request_timeout == 10.0


def test_values_are_trimmed_and_overrides_applied() -> None:
    config = load_config(
        {
            "ECOWITT_APPLICATION_KEY": "  app-secret ",
            "ECOWITT_API_KEY": "api-secret\n",
            "ECOWITT_BASE_URL": "http://localhost:8080/api/v3/",
            "REQUEST_TIMEOUT": "2500",
        }
    )

    assert config.credentials.application_key == "app-secret"
    assert config.credentials.api_key == "api-secret"
    assert config.base_url == "http://localhost:8080/api/v3/"
    assert config.request_timeout_ms == 2500
    assert config.request_timeout == 2.5


@pytest.mark.parametrize("missing", ["ECOWITT_APPLICATION_KEY", "ECOWITT_API_KEY"])
def test_missing_credentials_fail(missing: str) -> None:
    env = dict(ENV)
    env[missing] = "   "

    with pytest.raises(EcowittError) as exc_info:
        load_config(env)

    assert exc_info.value.kind is ErrorKind.CONFIGURATION
    assert missing in exc_info.value.message


@pytest.mark.parametrize("url", ["not a url", "ftp://example.com/api", "/api/v3"])
def test_base_url_must_be_absolute_http(url: str) -> None:
    with pytest.raises(EcowittError) as exc_info:
        load_config({**ENV, "ECOWITT_BASE_URL": url})
    assert exc_info.value.kind is ErrorKind.CONFIGURATION


@pytest.mark.parametrize("timeout", ["0", "-5", "abc", "300001"])
def test_request_timeout_must_be_sane(timeout: str) -> None:
    with pytest.raises(EcowittError) as exc_info:
        load_config({**ENV, "REQUEST_TIMEOUT": timeout})
    assert exc_info.value.kind is ErrorKind.CONFIGURATION
    assert "REQUEST_TIMEOUT" in exc_info.value.message


def test_request_timeout_upper_bound_is_inclusive() -> None:
    assert load_config({**ENV, "REQUEST_TIMEOUT": "300000"}).request_timeout_ms == 300000


def test_secrets_stay_out_of_repr() -> None:
    config = load_config(dict(ENV))
    assert "app-secret" not in repr(config)
    assert "api-secret" not in repr(config)
