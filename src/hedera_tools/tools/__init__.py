"""Agent tool façade over the ledger services.

Provides the tool protocol, the operation table, the JSON façade and
a registry for looking tools up by name.
"""

from hedera_tools.tools.base import Tool, ToolCall, ToolDefinition, ToolResult
from hedera_tools.tools.facade import LedgerTool, create_hedera_tools
from hedera_tools.tools.registry import ToolRegistry, build_registry

__all__ = [
    "LedgerTool",
    "Tool",
    "ToolCall",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    "build_registry",
    "create_hedera_tools",
]
