"""
Ecowitt Device Resources

Exposes each weather station as a read-only MCP resource at
ecowitt://device/{mac}. Failures leave as McpError carrying the error envelope.
"""

import json
import logging
from typing import List

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, Resource, ResourceTemplate

from .device_handlers import RESOURCE_URI_PREFIX, DeviceHandlers
from .errors import JSONRPC_ERROR_CODES, EcowittError, ErrorKind, handler_error

logger = logging.getLogger(__name__)

RESOURCE_TEMPLATE = RESOURCE_URI_PREFIX + "{mac}"


def to_mcp_error(error: BaseException) -> McpError:
    if not isinstance(error, EcowittError):
        error = handler_error("resource handler", error)
    return McpError(
        ErrorData(
            code=JSONRPC_ERROR_CODES[error.kind],
            message=error.message,
            data=error.to_dict(),
        )
    )


class DeviceResourceProvider:
    """Device list and device detail as MCP resources"""

    def __init__(self, handlers: DeviceHandlers):
        self.handlers = handlers

    def get_resource_templates(self) -> List[ResourceTemplate]:
        return [
            ResourceTemplate(
                uriTemplate=RESOURCE_TEMPLATE,
                name="devices",
                description="Access Ecowitt weather station device information.",
                mimeType="application/json",
            )
        ]

    async def list_resources(self) -> List[Resource]:
        try:
            devices = await self.handlers.list_resources()
        except Exception as e:
            logger.info("Listing device resources failed: %s", e)
            raise to_mcp_error(e) from e
        return [
            Resource(
                uri=device["uri"],
                name=device.get("name") or device["uri"],
                description=f"{device.get('stationType') or 'Ecowitt'} weather station",
                mimeType="application/json",
            )
            for device in devices
        ]

    async def read_resource(self, uri) -> List[ReadResourceContents]:
        uri = str(uri)
        try:
            if not uri.startswith(RESOURCE_URI_PREFIX):
                raise EcowittError(f"Unknown resource: {uri}", "UNKNOWN_RESOURCE", ErrorKind.PARAMETER)
            data = await self.handlers.get_by_address(uri[len(RESOURCE_URI_PREFIX):])
        except Exception as e:
            logger.info("Reading %s failed: %s", uri, e)
            raise to_mcp_error(e) from e
        return [ReadResourceContents(content=json.dumps(data, indent=2, ensure_ascii=False), mime_type="application/json")]
