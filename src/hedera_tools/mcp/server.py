"""MCP server for hedera-tools."""

from __future__ import annotations

import json
import uuid
from typing import TYPE_CHECKING

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from hedera_tools.tools.base import ToolCall

if TYPE_CHECKING:
    from hedera_tools.tools.registry import ToolRegistry

server = Server("hedera-tools")

_registry: ToolRegistry | None = None


def set_registry(registry: ToolRegistry) -> None:
    """Install the registry the server dispatches to."""
    global _registry
    _registry = registry


def _get_registry() -> ToolRegistry:
    if _registry is None:
        msg = "MCP server has no tool registry; call set_registry() first."
        raise RuntimeError(msg)
    return _registry


def _get_tools() -> list[Tool]:
    """Define the MCP tools from the registry."""
    return [
        Tool(
            name=d.name,
            description=d.description,
            inputSchema=d.parameters_schema,
        )
        for d in _get_registry().list_definitions()
    ]


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available MCP tools."""
    return _get_tools()


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:  # type: ignore[type-arg]
    """Handle tool calls by running them through the JSON façade."""
    call = ToolCall(
        id=uuid.uuid4().hex,
        name=name,
        payload=json.dumps(arguments or {}),
    )
    result = await _get_registry().execute(call)
    return [TextContent(type="text", text=result.content)]


async def run_server(registry: ToolRegistry) -> None:
    """Start the MCP server on stdio."""
    set_registry(registry)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
