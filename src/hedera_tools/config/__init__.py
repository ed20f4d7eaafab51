"""Configuration loading and validation."""

from hedera_tools.config.loader import load_config
from hedera_tools.config.schema import (
    ConsensusConfig,
    HederaToolsConfig,
    LoggingConfig,
    MirrorConfig,
    NetworkConfig,
    OperatorConfig,
)

__all__ = [
    "ConsensusConfig",
    "HederaToolsConfig",
    "LoggingConfig",
    "MirrorConfig",
    "NetworkConfig",
    "OperatorConfig",
    "load_config",
]
