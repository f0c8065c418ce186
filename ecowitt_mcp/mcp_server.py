#!/usr/bin/env python3
"""
Ecowitt MCP Server

A Model Context Protocol server that wraps the Ecowitt weather station API,
exposing device queries as MCP tools and resources.

This is the main entry point. All implementation is modularized in the `tools` package.
"""

import asyncio
import logging
import os
import sys

from ecowitt_mcp.tools import (
    EcowittError,
    load_config,
    run_server,
    print_startup_info,
)


def main():
    """Main entry point"""
    # Logs go to stderr (stdout is used for MCP protocol)
    logging.basicConfig(
        level=os.environ.get("ECOWITT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config()
    except EcowittError as e:
        print(f"Failed to start Ecowitt MCP Server: {e.message}", file=sys.stderr)
        sys.exit(1)

    print_startup_info(config)

    # Run the server
    asyncio.run(run_server(config))


if __name__ == "__main__":
    main()
