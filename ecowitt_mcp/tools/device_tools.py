"""
Ecowitt Device Tools

MCP tool definitions and handlers for Ecowitt weather station queries.
"""

import json
import logging
from typing import Any, List, Optional

from mcp.types import CallToolResult, Tool, TextContent

from .config import ClientConfig, load_config
from .device_handlers import DeviceHandlers
from .ecowitt_client import CYCLE_TYPES, EcowittClient
from .errors import EcowittError, ErrorKind, to_error_envelope
from .unit_options import UNIT_OPTIONS_SCHEMA, extract_unit_options

logger = logging.getLogger(__name__)

MAC_DESCRIPTION = "Device MAC address (format: AA:BB:CC:DD:EE:FF or AABBCCDDEEFF) or IMEI"


def json_content(payload: Any) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))]


def json_result(payload: Any) -> CallToolResult:
    return CallToolResult(content=json_content(payload), isError=False)


def error_result(error: BaseException) -> CallToolResult:
    """The JSON error envelope as content, flagged so clients see a failed call."""
    return CallToolResult(content=json_content(to_error_envelope(error)), isError=True)


class DeviceToolRegistry:
    """Registry for Ecowitt device MCP tools"""

    TOOL_NAMES = (
        "get_devices",
        "get_device_info",
        "get_device_realtime_info",
        "get_device_historical_info",
    )

    def __init__(self, handlers: DeviceHandlers):
        self.handlers = handlers

    def handles(self, name: str) -> bool:
        return name in self.TOOL_NAMES

    def get_tool_definitions(self) -> List[Tool]:
        """Get all device tool definitions"""
        return [
            Tool(
                name="get_devices",
                description="Get information about all Ecowitt weather station devices",
                inputSchema={"type": "object", "properties": {}},
            ),
            Tool(
                name="get_device_info",
                description="Get detailed information about one Ecowitt device, addressed by MAC/IMEI or by name",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "mac": {"type": "string", "description": MAC_DESCRIPTION},
                        "name": {"type": "string", "description": "Device name (case-insensitive)"},
                    },
                },
            ),
            Tool(
                name="get_device_realtime_info",
                description="Get real-time information from an Ecowitt weather station device",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "mac": {"type": "string", "description": MAC_DESCRIPTION},
                        "callback": {
                            "type": "string",
                            "description": "Optional field types to return (e.g., 'all', 'outdoor', 'indoor.humidity')",
                        },
                        **UNIT_OPTIONS_SCHEMA,
                    },
                    "required": ["mac"],
                },
            ),
            Tool(
                name="get_device_historical_info",
                description="Get historical data from an Ecowitt weather station device",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "mac": {"type": "string", "description": MAC_DESCRIPTION},
                        "start_date": {
                            "type": "string",
                            "description": "Start time of data query (ISO8601: 'YYYY-MM-DD HH:mm:ss')",
                        },
                        "end_date": {
                            "type": "string",
                            "description": "End time of data query (ISO8601: 'YYYY-MM-DD HH:mm:ss')",
                        },
                        "call_back": {
                            "type": "string",
                            "description": "Comma-separated list of field types to return (e.g., 'outdoor.temp,indoor.humidity')",
                        },
                        "cycle_type": {
                            "type": "string",
                            "enum": list(CYCLE_TYPES),
                            "description": "Data resolution: 'auto', '5min', '30min', '4hour', '1day'",
                        },
                        **UNIT_OPTIONS_SCHEMA,
                    },
                    "required": ["mac", "start_date", "end_date", "call_back"],
                },
            ),
        ]

    async def handle_tool_call(self, name: str, arguments: Optional[dict]) -> CallToolResult:
        """Route a device tool call; failures come back as isError JSON error envelopes."""
        arguments = arguments or {}
        try:
            if name == "get_devices":
                return json_result(await self._handle_devices())
            elif name == "get_device_info":
                return json_result(await self._handle_device_info(arguments))
            elif name == "get_device_realtime_info":
                return json_result(await self._handle_realtime_info(arguments))
            elif name == "get_device_historical_info":
                return json_result(await self._handle_historical_info(arguments))
            else:
                return error_result(EcowittError(f"Unknown tool: {name}", "UNKNOWN_TOOL", ErrorKind.PARAMETER))

        except EcowittError as e:
            logger.info("Tool %s failed: %s (%s)", name, e.message, e.kind.value)
            return error_result(e)
        except Exception as e:
            logger.exception("Tool %s raised an unhandled exception", name)
            return error_result(e)

    async def _handle_devices(self) -> Any:
        devices = await self.handlers.list_resources()
        return {"devices": devices}

    async def _handle_device_info(self, arguments: dict) -> Any:
        mac = arguments.get("mac")
        name = arguments.get("name")
        if not mac and name:
            return await self.handlers.get_by_name(name)
        return await self.handlers.get_by_address(mac)

    async def _handle_realtime_info(self, arguments: dict) -> Any:
        return await self.handlers.get_realtime_info(
            arguments.get("mac"),
            arguments.get("callback"),
            extract_unit_options(arguments),
        )

    async def _handle_historical_info(self, arguments: dict) -> Any:
        data = await self.handlers.get_history(
            arguments.get("mac"),
            arguments.get("start_date"),
            arguments.get("end_date"),
            arguments.get("call_back"),
            arguments.get("cycle_type"),
            extract_unit_options(arguments),
        )
        return {"history": data}


# Singleton instance
_device_registry = None

def get_device_registry(config: Optional[ClientConfig] = None) -> DeviceToolRegistry:
    """Get singleton device tool registry instance"""
    global _device_registry
    if _device_registry is None:
        client = EcowittClient(config or load_config())
        _device_registry = DeviceToolRegistry(DeviceHandlers(client))
    return _device_registry
