"""
Baseline MCP Server - stdio transport

Registers the Baseline tools on an `mcp` low-level Server and serves them over
stdin/stdout. Logging must go to stderr, stdout carries the protocol stream.
"""

from typing import Any

import mcp.types as types
from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .models import SERVER_INFO
from .tools import TOOL_NAMES, BaselineTools


def list_tool_definitions() -> list[types.Tool]:
    return [types.Tool(**definition) for definition in BaselineTools.list_tools()]


async def call_tool(tools: BaselineTools, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
    """Run a tool and unwrap its ToolResponse into MCP text content.

    Errors propagate; the protocol library reports them as an error tool result.
    """
    response = await tools.call(name, arguments, strict=True)
    return [types.TextContent(type="text", text=item.text) for item in response.content]


def create_server(tools: BaselineTools) -> Server:
    server: Server = Server(SERVER_INFO.name, version=SERVER_INFO.version)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return list_tool_definitions()

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        try:
            return await call_tool(tools, name, arguments)
        except Exception as e:
            logger.error(f"{name} failed: {e}")
            raise

    return server


async def run_stdio_server(tools: BaselineTools) -> None:
    """Serve until the input stream closes or the process is terminated"""
    server: Server = create_server(tools)

    logger.info(f"🏠 {SERVER_INFO.name} running on stdio")
    logger.info(f"📊 Available tools: {', '.join(TOOL_NAMES)}")
    logger.info(f"🌐 Data source: {tools.api_base_url}")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
