"""
Ecowitt MCP Server Tools

A modular system for querying Ecowitt weather stations.

## Module Structure

```
tools/
├── __init__.py           # This file - exports all public APIs
├── config.py             # Environment configuration (credentials, base URL, timeout)
├── errors.py             # Error taxonomy and error envelopes
├── mac.py                # MAC address validation and formatting
├── unit_options.py       # Unit selection parameters
├── validation.py         # Required-parameter checks
├── ecowitt_client.py     # Async HTTP client for the Ecowitt API
├── device_handlers.py    # Address resolution and payload shaping
├── device_tools.py       # Device tools (list, detail, real-time, history)
├── device_resources.py   # Devices as MCP resources
├── time_tools.py         # Current UTC datetime
├── unified_tools.py      # Combines all tool registries
└── server.py             # MCP server implementation
```

## Quick Start

```python
from ecowitt_mcp.tools import get_unified_registry, run_server

# Get all tool definitions
registry = get_unified_registry()
tools = registry.get_all_tool_definitions()

# Handle tool calls
result = await registry.handle_tool_call("get_device_realtime_info", {"mac": "AA:BB:CC:DD:EE:FF"})
```

## Available Tools

### Devices
- `get_devices` - List weather stations on the account
- `get_device_info` - Device detail by MAC/IMEI or name
- `get_device_realtime_info` - Latest readings
- `get_device_historical_info` - Readings between two dates

### Time
- `get_current_datetime` - Current UTC time (ISO 8601)
"""

from .. import __version__

# Configuration
from .config import (
    Credentials,
    ClientConfig,
    load_config,
    SERVER_NAME,
    DEFAULT_BASE_URL,
)

# Errors
from .errors import (
    EcowittError,
    ErrorKind,
    classify_code,
    is_retryable,
    to_error_envelope,
)

# Ecowitt API
from .ecowitt_client import EcowittClient
from .device_handlers import DeviceHandlers

# Device tools
from .device_tools import (
    DeviceToolRegistry,
    get_device_registry,
)
from .device_resources import DeviceResourceProvider

# Unified registry
from .unified_tools import (
    UnifiedToolRegistry,
    get_unified_registry
)

# Server
from .server import (
    create_mcp_server,
    run_server,
    print_startup_info
)

__all__ = [
    # Version
    "__version__",

    # Configuration
    "Credentials",
    "ClientConfig",
    "load_config",
    "SERVER_NAME",
    "DEFAULT_BASE_URL",

    # Errors
    "EcowittError",
    "ErrorKind",
    "classify_code",
    "is_retryable",
    "to_error_envelope",

    # Ecowitt API
    "EcowittClient",
    "DeviceHandlers",

    # Device tools
    "DeviceToolRegistry",
    "get_device_registry",
    "DeviceResourceProvider",

    # Unified registry
    "UnifiedToolRegistry",
    "get_unified_registry",

    # Server
    "create_mcp_server",
    "run_server",
    "print_startup_info",
]
