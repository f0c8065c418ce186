from __future__ import annotations

import json
from datetime import datetime

import httpx
import pytest

from conftest import envelope
from ecowitt_mcp.tools.device_handlers import DeviceHandlers
from ecowitt_mcp.tools.device_tools import DeviceToolRegistry
from ecowitt_mcp.tools.time_tools import current_utc_iso
from ecowitt_mcp.tools.unified_tools import UnifiedToolRegistry
from ecowitt_mcp.tools.unit_options import UNIT_OPTION_KEYS, extract_unit_options

DEVICE_LIST = envelope({"list": [{"id": 1, "name": "Backyard", "mac": "11:22:33:44:55:66", "stationtype": "GW1100A"}]})


def _registry(make_client, handler) -> UnifiedToolRegistry:
    handlers = DeviceHandlers(make_client(handler))
    return UnifiedToolRegistry(device_registry=DeviceToolRegistry(handlers))


def _payload(result, is_error: bool = False) -> dict:
    assert result.isError is is_error
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return json.loads(result.content[0].text)


def _router(requests: list[httpx.Request]):
    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/device/list"):
            return httpx.Response(200, json=DEVICE_LIST)
        if request.url.path.endswith("/device/info"):
            return httpx.Response(200, json=envelope({"name": "Backyard", "mac": request.url.params.get("mac")}))
        return httpx.Response(200, json=envelope({"outdoor": {"temperature": {"value": "18.2"}}}))

    return _handler


def test_all_tools_are_advertised(make_client) -> None:
    registry = _registry(make_client, _router([]))

    tools = {tool.name: tool for tool in registry.get_all_tool_definitions()}

    assert set(tools) == {
        "get_devices",
        "get_device_info",
        "get_device_realtime_info",
        "get_device_historical_info",
        "get_current_datetime",
    }
    history = tools["get_device_historical_info"].inputSchema
    assert history["required"] == ["mac", "start_date", "end_date", "call_back"]
    assert history["properties"]["cycle_type"]["enum"] == ["auto", "5min", "30min", "4hour", "1day"]
    for key in UNIT_OPTION_KEYS:
        assert key in tools["get_device_realtime_info"].inputSchema["properties"]


@pytest.mark.asyncio
async def test_get_devices_returns_resource_records(make_client) -> None:
    registry = _registry(make_client, _router([]))

    payload = _payload(await registry.handle_tool_call("get_devices", {}))

    assert payload["devices"][0]["uri"] == "ecowitt://device/112233445566"
    assert payload["devices"][0]["stationType"] == "GW1100A"


@pytest.mark.asyncio
async def test_get_device_info_by_name(make_client) -> None:
    requests: list[httpx.Request] = []
    registry = _registry(make_client, _router(requests))

    payload = _payload(await registry.handle_tool_call("get_device_info", {"name": "backyard"}))

    assert payload == {"name": "Backyard", "mac": "11:22:33:44:55:66"}
    assert [r.url.path.rsplit("/", 1)[-1] for r in requests] == ["list", "info"]


@pytest.mark.asyncio
async def test_history_tool_forwards_only_known_unit_options(make_client) -> None:
    requests: list[httpx.Request] = []
    registry = _registry(make_client, _router(requests))

    payload = _payload(
        await registry.handle_tool_call(
            "get_device_historical_info",
            {
                "mac": "112233445566",
                "start_date": "2024-05-01 00:00:00",
                "end_date": "2024-05-01 12:00:00",
                "call_back": "outdoor.temperature",
                "cycle_type": "5min",
                "temp_unitid": 1,
                "colour_unitid": 99,
            },
        )
    )

    params = requests[0].url.params
    assert payload["history"]["outdoor"]["temperature"]["value"] == "18.2"
    assert params["mac"] == "11:22:33:44:55:66"
    assert params["cycle_type"] == "5min"
    assert params["temp_unitid"] == "1"
    assert "colour_unitid" not in params


@pytest.mark.asyncio
async def test_failures_become_error_envelopes(make_client) -> None:
    registry = _registry(make_client, lambda request: httpx.Response(503, json={}))

    payload = _payload(await registry.handle_tool_call("get_device_realtime_info", {"mac": "11:22:33:44:55:66"}), is_error=True)

    assert payload["error"]["kind"] == "server_error"
    assert payload["error"]["code"] == 503
    assert payload["error"]["retryable"] is True


@pytest.mark.asyncio
async def test_invalid_address_is_reported_without_network(make_client) -> None:
    requests: list[httpx.Request] = []
    registry = _registry(make_client, _router(requests))

    payload = _payload(await registry.handle_tool_call("get_device_realtime_info", {"mac": "AA::BB:CC:DD:EE:FF"}), is_error=True)

    assert payload["error"]["kind"] == "parameter_error"
    assert requests == []


@pytest.mark.asyncio
async def test_unhandled_exceptions_never_escape(make_client) -> None:
    registry = _registry(make_client, _router([]))

    async def _explode():
        raise RuntimeError("unexpected")

    registry.device_registry.handlers.list_resources = _explode

    payload = _payload(await registry.handle_tool_call("get_devices", {}), is_error=True)

    assert payload["error"]["code"] == "UNHANDLED_EXCEPTION"
    assert payload["error"]["kind"] == "handler_error"


@pytest.mark.asyncio
async def test_unknown_tool(make_client) -> None:
    registry = _registry(make_client, _router([]))

    payload = _payload(await registry.handle_tool_call("get_forecast", {"city": "Leeds"}), is_error=True)

    assert payload["error"]["code"] == "UNKNOWN_TOOL"


@pytest.mark.asyncio
async def test_current_datetime_tool(make_client) -> None:
    registry = _registry(make_client, _router([]))

    payload = _payload(await registry.handle_tool_call("get_current_datetime", None))

    assert payload["datetime"].endswith("Z")
    parsed = datetime.fromisoformat(payload["datetime"].replace("Z", "+00:00"))
    assert parsed.utcoffset().total_seconds() == 0


def test_current_utc_iso_has_millisecond_precision() -> None:
    value = current_utc_iso()
    assert len(value.split(".")[-1]) == len("123Z")


def test_extract_unit_options_ignores_unknown_and_empty_keys() -> None:
    args = {"mac": "AA:BB:CC:DD:EE:FF", "temp_unitid": 1, "pressure_unitid": None, "callback": "outdoor", "capacity_unitid": 26}
    assert extract_unit_options(args) == {"temp_unitid": 1, "capacity_unitid": 26}
    assert extract_unit_options({}) == {}
