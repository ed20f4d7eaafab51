"""Construction of the Hiero client and services from configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import hiero_sdk_python as hiero

from hedera_tools.core.errors import ConfigError
from hedera_tools.ledger.consensus import ConsensusService
from hedera_tools.ledger.mirror import MirrorClient
from hedera_tools.ledger.tokens import TokenService

if TYPE_CHECKING:
    from hedera_tools.config.schema import HederaToolsConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LedgerServices:
    """Services sharing one client handle."""

    client: Any
    mirror: MirrorClient
    consensus: ConsensusService
    tokens: TokenService

    async def aclose(self) -> None:
        await self.mirror.aclose()
        close = getattr(self.client, "close", None)
        if callable(close):
            close()


def build_client(config: HederaToolsConfig) -> tuple[Any, Any, Any]:
    """Create a Hiero client for the configured network and operator.

    Returns:
        ``(client, operator_id, operator_key)``.

    Raises:
        ConfigError: If operator credentials are missing or unparsable.
    """
    operator = config.operator
    if not operator.account_id or not operator.private_key:
        msg = (
            "Operator credentials are required. Set operator.account_id and "
            f"operator.private_key, or {operator.account_id_env} and "
            f"{operator.private_key_env}."
        )
        raise ConfigError(msg)

    try:
        operator_id = hiero.AccountId.from_string(operator.account_id)
        operator_key = hiero.PrivateKey.from_string(operator.private_key)
    except ValueError as e:
        msg = f"Invalid operator credentials: {e}"
        raise ConfigError(msg) from e

    client = hiero.Client(hiero.Network(config.network.name))
    client.set_operator(operator_id, operator_key)
    logger.info("Connected to %s as %s", config.network.name, operator.account_id)
    return client, operator_id, operator_key


def build_services(
    config: HederaToolsConfig,
    *,
    client: Any | None = None,
    operator_id: Any | None = None,
    operator_key: Any | None = None,
    mirror: MirrorClient | None = None,
) -> LedgerServices:
    """Wire consensus and token services around one client handle."""
    if client is None:
        client, operator_id, operator_key = build_client(config)

    if mirror is None:
        mirror = MirrorClient(
            config.mirror_base_url(),
            timeout=config.mirror.timeout,
            max_pages=config.mirror.max_pages,
        )

    admin_key = None
    if config.consensus.admin_key and operator_key is not None:
        admin_key = operator_key.public_key()

    consensus = ConsensusService(
        client,
        mirror,
        admin_key=admin_key,
        default_memo=config.consensus.default_memo,
        default_wait_ms=config.mirror.wait_ms,
        default_page_limit=config.mirror.page_limit,
    )
    tokens = TokenService(client, operator_id, operator_key)
    return LedgerServices(client=client, mirror=mirror, consensus=consensus, tokens=tokens)
