"""Tool registry: name lookup and execution of available tools.

Provides registration, lookup, listing, and execution of tools
that implement the :class:`Tool` protocol.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from hedera_tools.tools.base import ToolDefinition, ToolResult
from hedera_tools.tools.facade import create_hedera_tools, error_envelope

if TYPE_CHECKING:
    from hedera_tools.ledger.consensus import ConsensusService
    from hedera_tools.ledger.tokens import TokenService
    from hedera_tools.tools.base import Tool, ToolCall


class ToolRegistry:
    """Registry for managing available tools.

    Supports registration, lookup by name, listing definitions
    (for passing to agent frameworks), and executing tool calls.
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if tool.name in self._tools:
            msg = f"Tool already registered: {tool.name}"
            raise ValueError(msg)
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        """Get a tool by name.

        Raises:
            KeyError: If the tool is not found.
        """
        if name not in self._tools:
            msg = f"Tool not found: {name}"
            raise KeyError(msg)
        return self._tools[name]

    def list_definitions(self) -> list[ToolDefinition]:
        """Return tool definitions for all registered tools."""
        return [
            ToolDefinition(
                name=t.name,
                description=t.description,
                parameters_schema=t.parameters_schema,
            )
            for t in self._tools.values()
        ]

    async def execute(self, tool_call: ToolCall) -> ToolResult:
        """Execute a tool call and return the result.

        An unknown tool, or a tool that breaks its contract by raising,
        yields a :class:`ToolResult` carrying an error envelope.
        """
        try:
            tool = self.get(tool_call.name)
        except KeyError:
            return ToolResult(
                tool_call_id=tool_call.id,
                content=json.dumps(
                    {
                        "status": "error",
                        "message": f"Tool not found: {tool_call.name}",
                        "code": "TOOL_NOT_FOUND",
                    }
                ),
                is_error=True,
            )
        try:
            content = await tool.execute(tool_call.payload)
        except Exception as exc:
            return ToolResult(
                tool_call_id=tool_call.id,
                content=error_envelope(exc),
                is_error=True,
            )
        return ToolResult(
            tool_call_id=tool_call.id,
            content=content,
            is_error=_is_error(content),
        )

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def list_names(self) -> list[str]:
        """Return names of all registered tools."""
        return list(self._tools.keys())


def _is_error(content: str) -> bool:
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return False
    return isinstance(data, dict) and data.get("status") == "error"


def build_registry(consensus: ConsensusService, tokens: TokenService) -> ToolRegistry:
    """Create a registry holding every Hedera tool."""
    registry = ToolRegistry()
    for tool in create_hedera_tools(consensus, tokens):
        registry.register(tool)
    return registry
