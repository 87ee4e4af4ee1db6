"""
Toggl MCP Server

Binds the tool catalog and dispatcher to an MCP server over stdio.
"""

import logging
import sys
from typing import List

import anyio
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__, catalog
from .client import TogglClient
from .config import load_config
from .dispatcher import ToolDispatcher
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

SERVER_NAME = "toggl-mcp"


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server with `tools/list` and `tools/call` bound."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return catalog.list_tools()

    # bound directly so McpError surfaces as a JSON-RPC error with its code
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        content = await dispatcher.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def _run(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Toggl MCP server running")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point. Exits with status 1 when TOGGL_API_KEY is missing."""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error("Error: %s", e.message)
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    client = TogglClient(config.api_token, base_url=config.api_base_url, timeout=config.timeout)
    server = create_server(ToolDispatcher(client))
    anyio.run(_run, server)


if __name__ == "__main__":
    main()
