"""Tests for tool registry."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from hedera_tools.tools.base import ToolCall
from hedera_tools.tools.registry import ToolRegistry, build_registry

# ── Mock tools ──────────────────────────────────────────────────────


class _EchoTool:
    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo the payload"

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {"text": {"type": "string"}}}

    async def execute(self, payload: str) -> str:
        return json.dumps({"status": "success", "echo": json.loads(payload)})


class _RefusingTool(_EchoTool):
    @property
    def name(self) -> str:
        return "refuse"

    async def execute(self, payload: str) -> str:
        return json.dumps({"status": "error", "message": "nope", "code": "UNKNOWN_ERROR"})


class _BrokenTool(_EchoTool):
    @property
    def name(self) -> str:
        return "broken"

    async def execute(self, payload: str) -> str:
        msg = "Intentional failure"
        raise RuntimeError(msg)


# ── Registration ────────────────────────────────────────────────────


class TestRegistration:
    def test_register_and_get(self) -> None:
        reg = ToolRegistry()
        tool = _EchoTool()
        reg.register(tool)
        assert reg.get("echo") is tool

    def test_duplicate_registration_raises(self) -> None:
        reg = ToolRegistry()
        reg.register(_EchoTool())
        with pytest.raises(ValueError, match=r"already registered"):
            reg.register(_EchoTool())

    def test_get_missing_raises(self) -> None:
        with pytest.raises(KeyError, match=r"not found"):
            ToolRegistry().get("nonexistent")

    def test_contains_and_len(self) -> None:
        reg = ToolRegistry()
        assert len(reg) == 0
        reg.register(_EchoTool())
        assert "echo" in reg
        assert "nonexistent" not in reg
        assert len(reg) == 1

    def test_definitions_match_tools(self) -> None:
        reg = ToolRegistry()
        reg.register(_EchoTool())
        defs = reg.list_definitions()
        assert [d.name for d in defs] == ["echo"]
        assert defs[0].description == "Echo the payload"
        assert "text" in defs[0].parameters_schema["properties"]


# ── Execution ───────────────────────────────────────────────────────


class TestExecution:
    async def test_execute_success(self) -> None:
        reg = ToolRegistry()
        reg.register(_EchoTool())
        result = await reg.execute(ToolCall(id="tc-1", name="echo", payload='{"text": "hi"}'))
        assert not result.is_error
        assert result.tool_call_id == "tc-1"
        assert json.loads(result.content)["echo"] == {"text": "hi"}

    async def test_error_envelope_flagged(self) -> None:
        reg = ToolRegistry()
        reg.register(_RefusingTool())
        result = await reg.execute(ToolCall(id="tc-2", name="refuse"))
        assert result.is_error

    async def test_execute_missing_tool(self) -> None:
        result = await ToolRegistry().execute(ToolCall(id="tc-3", name="nonexistent"))
        assert result.is_error
        data = json.loads(result.content)
        assert data["status"] == "error"
        assert data["code"] == "TOOL_NOT_FOUND"
        assert "not found" in data["message"]

    async def test_raising_tool_becomes_envelope(self) -> None:
        reg = ToolRegistry()
        reg.register(_BrokenTool())
        result = await reg.execute(ToolCall(id="tc-4", name="broken"))
        assert result.is_error
        assert json.loads(result.content) == {
            "status": "error",
            "message": "Intentional failure",
            "code": "UNKNOWN_ERROR",
        }


# ── build_registry ──────────────────────────────────────────────────


class TestBuildRegistry:
    def test_registers_all_hedera_tools(self) -> None:
        reg = build_registry(MagicMock(), MagicMock())
        assert len(reg) == 9
        assert "hedera_query_topic" in reg
        assert "hedera_get_hbar_balance" in reg

    async def test_dispatches_by_name(self) -> None:
        consensus = MagicMock()
        consensus.delete_topic = AsyncMock(return_value=None)
        reg = build_registry(consensus, MagicMock())

        result = await reg.execute(
            ToolCall(id="x", name="hedera_delete_topic", payload='{"topicId": "0.0.5"}')
        )

        assert not result.is_error
        consensus.delete_topic.assert_awaited_once_with("0.0.5")
