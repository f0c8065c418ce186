"""
Unified MCP Tool Registry

Combines device tools and time tools.
"""

from typing import List, Optional

from mcp.types import CallToolResult, Tool

from .config import ClientConfig
from .device_tools import DeviceToolRegistry, error_result, get_device_registry
from .errors import EcowittError, ErrorKind
from .time_tools import TimeToolRegistry


class UnifiedToolRegistry:
    """
    Unified registry for MCP tools:
    - Device tools (device list, detail, real-time and history readings)
    - Time tools (current UTC datetime)
    """

    def __init__(self, device_registry: Optional[DeviceToolRegistry] = None, config: Optional[ClientConfig] = None):
        self.device_registry = device_registry or get_device_registry(config)
        self.time_registry = TimeToolRegistry()

    def get_all_tool_definitions(self) -> List[Tool]:
        """Get tool definitions from all registries"""
        return self.device_registry.get_tool_definitions() + self.time_registry.get_tool_definitions()

    async def handle_tool_call(self, name: str, arguments: Optional[dict]) -> CallToolResult:
        """Route tool calls to appropriate handler"""

        if self.device_registry.handles(name):
            return await self.device_registry.handle_tool_call(name, arguments)

        elif self.time_registry.handles(name):
            return await self.time_registry.handle_tool_call(name, arguments)

        else:
            return error_result(EcowittError(f"Unknown tool: {name}", "UNKNOWN_TOOL", ErrorKind.PARAMETER))


# Singleton instance
_unified_registry = None

def get_unified_registry(config: Optional[ClientConfig] = None) -> UnifiedToolRegistry:
    """Get singleton unified registry instance"""
    global _unified_registry
    if _unified_registry is None:
        _unified_registry = UnifiedToolRegistry(config=config)
    return _unified_registry
