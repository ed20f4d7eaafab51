"""Shared test fixtures for hedera-tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest

from tests.fixtures.ledger import BASE_URL, MirrorStub, make_fake_hiero

if TYPE_CHECKING:
    from hedera_tools.ledger.consensus import ConsensusService
    from hedera_tools.ledger.mirror import MirrorClient
    from hedera_tools.ledger.tokens import TokenService

_HIERO_MODULES = (
    "hedera_tools.ledger.base",
    "hedera_tools.ledger.consensus",
    "hedera_tools.ledger.tokens",
    "hedera_tools.ledger.client",
)


@pytest.fixture
def fake_hiero(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the Hiero SDK in every ledger module with one MagicMock."""
    import importlib

    fake = make_fake_hiero()
    for name in _HIERO_MODULES:
        monkeypatch.setattr(importlib.import_module(name), "hiero", fake)
    return fake


@pytest.fixture
def make_mirror() -> Any:
    """Factory fixture: ``make_mirror(pages, **kwargs) -> (MirrorClient, MirrorStub)``."""
    from hedera_tools.ledger.mirror import MirrorClient

    def _make(pages: dict[str, Any], **kwargs: Any) -> tuple[MirrorClient, MirrorStub]:
        stub = MirrorStub(pages)
        return MirrorClient(BASE_URL, http_client=stub.client(), **kwargs), stub

    return _make


@pytest.fixture
def ledger_client() -> MagicMock:
    return MagicMock(name="client")


@pytest.fixture
def consensus(fake_hiero: MagicMock, ledger_client: MagicMock, make_mirror: Any) -> ConsensusService:
    from hedera_tools.ledger.consensus import ConsensusService

    mirror, _ = make_mirror({})
    return ConsensusService(ledger_client, mirror, default_wait_ms=0)


@pytest.fixture
def tokens(fake_hiero: MagicMock, ledger_client: MagicMock) -> TokenService:
    from hedera_tools.ledger.tokens import TokenService

    return TokenService(ledger_client, "AccountId(0.0.2)", MagicMock(name="operator_key"))
