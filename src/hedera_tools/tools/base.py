"""Tool protocol and data types.

Defines the ``Tool`` protocol that every agent-callable tool satisfies,
plus data classes for tool calls, results, and definitions. A tool takes
one JSON string and returns one JSON string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Schema definition for a tool, suitable for passing to agent frameworks."""

    name: str
    description: str
    parameters_schema: dict[str, Any]


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A tool invocation requested by an agent."""

    id: str
    name: str
    payload: str = "{}"


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Result from executing a tool: the JSON envelope and its outcome."""

    tool_call_id: str
    content: str
    is_error: bool = False


@runtime_checkable
class Tool(Protocol):
    """Protocol that all tool implementations must satisfy."""

    @property
    def name(self) -> str:
        """Unique name for this tool."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        ...

    @property
    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's input payload."""
        ...

    async def execute(self, payload: str) -> str:
        """Execute the tool with a JSON-string payload.

        Returns:
            A JSON-string envelope with ``status`` of ``success`` or
            ``error``. Never raises.
        """
        ...
