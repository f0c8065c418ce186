"""
Ecowitt MCP Server

Main MCP server implementation using stdio transport.
"""

import sys
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server

from .. import __version__
from .config import SERVER_NAME, ClientConfig
from .device_resources import DeviceResourceProvider
from .unified_tools import UnifiedToolRegistry, get_unified_registry


def create_mcp_server(config: Optional[ClientConfig] = None, registry: Optional[UnifiedToolRegistry] = None) -> Server:
    """Create and configure the MCP server"""
    app = Server(SERVER_NAME, version=__version__)
    registry = registry or get_unified_registry(config)
    resources = DeviceResourceProvider(registry.device_registry.handlers)

    @app.list_tools()
    async def list_tools():
        """List all available tools"""
        return registry.get_all_tool_definitions()

    @app.call_tool()
    async def call_tool(name: str, arguments: dict):
        """Handle tool calls"""
        return await registry.handle_tool_call(name, arguments)

    @app.list_resources()
    async def list_resources():
        """List one resource per weather station"""
        return await resources.list_resources()

    @app.list_resource_templates()
    async def list_resource_templates():
        return resources.get_resource_templates()

    @app.read_resource()
    async def read_resource(uri):
        """Read device detail as JSON"""
        return await resources.read_resource(uri)

    return app


async def run_server(config: Optional[ClientConfig] = None):
    """Run the MCP server using stdio transport"""
    app = create_mcp_server(config)

    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


def print_startup_info(config: ClientConfig):
    """Print startup information to stderr"""
    print("Starting Ecowitt MCP Server...", file=sys.stderr)
    print(f"Ecowitt API at {config.base_url}", file=sys.stderr)
    print(f"Request timeout: {config.request_timeout_ms} ms", file=sys.stderr)
