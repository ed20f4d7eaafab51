"""Core types, errors, and shared utilities."""

from hedera_tools.core.errors import (
    UNKNOWN_ERROR,
    ConfigError,
    HederaToolsError,
    InvalidInputError,
    LedgerError,
    LedgerTransactionError,
    TopicCreationError,
)

__all__ = [
    "UNKNOWN_ERROR",
    "ConfigError",
    "HederaToolsError",
    "InvalidInputError",
    "LedgerError",
    "LedgerTransactionError",
    "TopicCreationError",
]
