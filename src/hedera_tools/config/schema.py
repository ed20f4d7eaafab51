"""Pydantic models for hedera-tools configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

MAINNET_MIRROR_URL = "https://mainnet.mirrornode.hedera.com"
TESTNET_MIRROR_URL = "https://testnet.mirrornode.hedera.com"


class NetworkConfig(BaseModel):
    """Which Hedera network to talk to."""

    name: Literal["testnet", "mainnet"] = "testnet"


class OperatorConfig(BaseModel):
    """Operator account that pays for and signs transactions."""

    account_id: str | None = None
    account_id_env: str | None = "HEDERA_ACCOUNT_ID"
    private_key: str | None = None
    private_key_env: str | None = "HEDERA_PRIVATE_KEY"


class MirrorConfig(BaseModel):
    """Mirror node REST settings."""

    base_url: str | None = None
    wait_ms: int = Field(default=5000, ge=0)
    page_limit: int = Field(default=10, ge=1)
    max_pages: int | None = Field(default=100, ge=1)
    timeout: float = 30.0


class ConsensusConfig(BaseModel):
    """Consensus service defaults."""

    default_memo: str = "Default Topic"
    admin_key: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""


class HederaToolsConfig(BaseModel):
    """Top-level configuration for hedera-tools."""

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    operator: OperatorConfig = Field(default_factory=OperatorConfig)
    mirror: MirrorConfig = Field(default_factory=MirrorConfig)
    consensus: ConsensusConfig = Field(default_factory=ConsensusConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def mirror_base_url(self) -> str:
        """Return the mirror REST base URL for the configured network."""
        if self.mirror.base_url:
            return self.mirror.base_url.rstrip("/")
        if self.network.name == "mainnet":
            return MAINNET_MIRROR_URL
        return TESTNET_MIRROR_URL
