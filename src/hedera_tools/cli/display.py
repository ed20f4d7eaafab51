"""Rich rendering for CLI output."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

_TRUNCATE_LEN = 120


def _truncate(text: str, limit: int = _TRUNCATE_LEN) -> str:
    """Truncate text to *limit* characters with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + " ..."


def decode_message(record: Mapping[str, Any]) -> str:
    """Return the text of a mirror message record.

    The mirror node base64-encodes message bodies; bodies that are not
    valid UTF-8 text are shown as their raw base64.
    """
    raw = record.get("message") or ""
    try:
        return base64.b64decode(raw, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return str(raw)


class ToolsDisplay:
    """Tables for tool listings and topic messages.

    Accepts an optional :class:`~rich.console.Console` for dependency
    injection in tests.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def show_tools(self, descriptions: Mapping[str, str]) -> None:
        table = Table(title="Hedera tools")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Description")
        for name, description in descriptions.items():
            summary = description.strip().splitlines()[0] if description.strip() else ""
            table.add_row(name, summary)
        self._console.print(table)

    def show_messages(self, topic_id: str, messages: Sequence[Mapping[str, Any]]) -> None:
        if not messages:
            self._console.print(f"No messages found for topic {topic_id}.")
            return
        table = Table(title=f"Topic {topic_id}")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Timestamp", style="dim")
        table.add_column("Message")
        for record in messages:
            table.add_row(
                str(record.get("sequence_number", "")),
                str(record.get("consensus_timestamp", "")),
                _truncate(decode_message(record)),
            )
        self._console.print(table)
