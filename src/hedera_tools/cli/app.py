"""Main CLI application.

Click commands for hedera-tools: tools, call, messages, mcp.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING

import click

from hedera_tools import __version__
from hedera_tools.config.loader import load_config
from hedera_tools.core.errors import ConfigError, HederaToolsError

if TYPE_CHECKING:
    from hedera_tools.config.schema import HederaToolsConfig, LoggingConfig


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> HederaToolsConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _setup_logging(config: LoggingConfig, *, verbose: bool = False) -> None:
    """Configure root logging on stderr; stdout carries tool output and MCP."""
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# ── Group ────────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hedera-tools")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """hedera-tools - Hedera ledger operations as agent tools.

    Create and manage consensus topics, move tokens, and read topic
    messages through a uniform JSON tool contract.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _prepare(ctx: click.Context) -> HederaToolsConfig:
    config = _load_config(ctx.obj["config_path"])
    _setup_logging(config.logging, verbose=ctx.obj.get("verbose", False))
    return config


# ── tools ────────────────────────────────────────────────────────


@cli.command()
def tools() -> None:
    """List the available tools."""
    from hedera_tools.cli.display import ToolsDisplay
    from hedera_tools.tools.operations import DESCRIPTIONS

    ToolsDisplay().show_tools(DESCRIPTIONS)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.argument("payload", required=False, default="{}")
@click.pass_context
def call(ctx: click.Context, name: str, payload: str) -> None:
    """Invoke tool NAME with a JSON PAYLOAD and print the result.

    Exits non-zero when the tool reports an error.
    """
    config = _prepare(ctx)
    try:
        content, is_error = asyncio.run(_call_async(config, name, payload))
    except HederaToolsError as e:
        _error(str(e))
        return
    click.echo(content)
    if is_error:
        sys.exit(1)


async def _call_async(
    config: HederaToolsConfig, name: str, payload: str
) -> tuple[str, bool]:
    """Async implementation for the call command."""
    from hedera_tools.ledger.client import build_services
    from hedera_tools.tools.base import ToolCall
    from hedera_tools.tools.registry import build_registry

    services = build_services(config)
    try:
        registry = build_registry(services.consensus, services.tokens)
        result = await registry.execute(ToolCall(id="cli", name=name, payload=payload))
    finally:
        await services.aclose()
    return result.content, result.is_error


# ── messages ─────────────────────────────────────────────────────


@cli.command()
@click.argument("topic_id")
@click.option("--wait-ms", type=int, default=None, help="Indexing delay before reading.")
@click.option("--limit", type=int, default=None, help="Messages per page.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def messages(
    ctx: click.Context,
    topic_id: str,
    wait_ms: int | None,
    limit: int | None,
    as_json: bool,
) -> None:
    """Read every message of TOPIC_ID from the mirror node."""
    config = _prepare(ctx)
    records = asyncio.run(_messages_async(config, topic_id, wait_ms, limit))
    if as_json:
        click.echo(json.dumps(records, indent=2))
        return

    from hedera_tools.cli.display import ToolsDisplay

    ToolsDisplay().show_messages(topic_id, records)


async def _messages_async(
    config: HederaToolsConfig,
    topic_id: str,
    wait_ms: int | None,
    limit: int | None,
) -> list[dict[str, object]]:
    """Async implementation for the messages command."""
    from hedera_tools.ledger.mirror import MirrorClient

    async with MirrorClient(
        config.mirror_base_url(),
        timeout=config.mirror.timeout,
        max_pages=config.mirror.max_pages,
    ) as mirror:
        return await mirror.fetch_topic_messages(
            topic_id,
            wait_ms=config.mirror.wait_ms if wait_ms is None else wait_ms,
            limit=config.mirror.page_limit if limit is None else limit,
        )


# ── mcp ──────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def mcp(ctx: click.Context) -> None:
    """Start the MCP server for AI agent integration."""
    config = _prepare(ctx)
    try:
        asyncio.run(_mcp_async(config))
    except HederaToolsError as e:
        _error(str(e))


async def _mcp_async(config: HederaToolsConfig) -> None:
    from hedera_tools.ledger.client import build_services
    from hedera_tools.mcp.server import run_server
    from hedera_tools.tools.registry import build_registry

    services = build_services(config)
    try:
        await run_server(build_registry(services.consensus, services.tokens))
    finally:
        await services.aclose()
