"""
Time Tools

Lets assistants anchor relative history queries ("last 24 hours") to the
current UTC time.
"""

from datetime import datetime, timezone
from typing import List, Optional

from mcp.types import CallToolResult, Tool

from .device_tools import error_result, json_result
from .errors import EcowittError, ErrorKind


def current_utc_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a Z suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TimeToolRegistry:
    """Registry for time MCP tools"""

    TOOL_NAMES = ("get_current_datetime",)

    def handles(self, name: str) -> bool:
        return name in self.TOOL_NAMES

    def get_tool_definitions(self) -> List[Tool]:
        return [
            Tool(
                name="get_current_datetime",
                description="Get the current datetime in ISO 8601 format (UTC).",
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    async def handle_tool_call(self, name: str, arguments: Optional[dict]) -> CallToolResult:
        if name == "get_current_datetime":
            return json_result({"datetime": current_utc_iso()})
        return error_result(EcowittError(f"Unknown tool: {name}", "UNKNOWN_TOOL", ErrorKind.PARAMETER))
