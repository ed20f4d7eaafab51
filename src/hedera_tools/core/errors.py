"""Exception hierarchy for hedera-tools.

Every module imports from here. The hierarchy is:

    HederaToolsError(code)
    ├── LedgerError
    │   ├── LedgerTransactionError(status)
    │   └── TopicCreationError
    ├── InvalidInputError
    └── ConfigError

Every error carries a ``code`` string which the tool façade reports
in its error envelope.
"""

from __future__ import annotations

UNKNOWN_ERROR = "UNKNOWN_ERROR"


class HederaToolsError(Exception):
    """Base exception for all hedera-tools errors."""

    code: str = UNKNOWN_ERROR

    def __init__(self, message: str, *, code: str | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message)


# ─── Ledger Errors ────────────────────────────────────────────


class LedgerError(HederaToolsError):
    """Base for errors raised while talking to the ledger network."""

    code = "LEDGER_ERROR"


class LedgerTransactionError(LedgerError):
    """The network returned a non-success receipt status."""

    def __init__(self, operation: str, status: str) -> None:
        self.operation = operation
        self.status = status
        super().__init__(f"{operation} failed with status {status}", code=status)


class TopicCreationError(LedgerError):
    """Topic creation was accepted but no topic id came back."""

    code = "TOPIC_CREATION_FAILED"


# ─── Input Errors ─────────────────────────────────────────────


class InvalidInputError(HederaToolsError):
    """Tool payload is not valid JSON or fails request validation."""

    code = "INVALID_INPUT"


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(HederaToolsError):
    """Invalid configuration."""

    code = "CONFIG_ERROR"
