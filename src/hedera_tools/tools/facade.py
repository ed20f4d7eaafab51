"""JSON-in/JSON-out façade over ledger operations.

Every call runs Parse → Invoke → Serialize. Failures at any step become
an error envelope ``{"status": "error", "message", "code"}``; nothing
raised by the payload or the ledger escapes :meth:`LedgerTool.execute`.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from hedera_tools.core.errors import UNKNOWN_ERROR, InvalidInputError
from hedera_tools.tools.operations import create_operations
from hedera_tools.tools.schemas import ErrorEnvelope

if TYPE_CHECKING:
    from hedera_tools.ledger.consensus import ConsensusService
    from hedera_tools.ledger.tokens import TokenService
    from hedera_tools.tools.operations import Operation

logger = logging.getLogger(__name__)


def error_envelope(error: BaseException) -> str:
    """Serialize ``error`` as the uniform failure result."""
    message = str(error) or type(error).__name__
    code = getattr(error, "code", None)
    if not isinstance(code, str) or not code:
        code = UNKNOWN_ERROR
    return ErrorEnvelope(message=message, code=code).model_dump_json()


def _describe_validation(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "input"
        parts.append(f"{loc}: {item['msg']}")
    return "Invalid input: " + "; ".join(parts)


def parse_payload(payload: str | None, operation: Operation) -> BaseModel:
    """Decode and validate a JSON payload into the operation's request.

    Raises:
        InvalidInputError: On malformed JSON, a non-object payload, or a
            request that fails validation.
    """
    text = (payload or "").strip()
    if not text and operation.accepts_empty:
        text = "{}"
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Malformed JSON input: {e.msg}"
        raise InvalidInputError(msg) from e
    if not isinstance(data, dict):
        msg = "Input must be a JSON object."
        raise InvalidInputError(msg)
    try:
        return operation.request_model.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(_describe_validation(e)) from e


class LedgerTool:
    """Agent-facing tool for one :class:`Operation`.

    Implements the :class:`Tool` protocol.
    """

    def __init__(self, operation: Operation) -> None:
        self._operation = operation

    @property
    def name(self) -> str:
        return self._operation.name

    @property
    def description(self) -> str:
        return self._operation.description

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return self._operation.request_model.model_json_schema(by_alias=True)

    async def execute(self, payload: str) -> str:
        """Run the operation on a JSON payload and return a JSON envelope."""
        try:
            request = parse_payload(payload, self._operation)
            result = await self._operation.handler(request)
        except Exception as e:
            logger.warning("Tool %s failed: %s", self.name, e)
            return error_envelope(e)
        return result.model_dump_json(by_alias=True)


def create_hedera_tools(
    consensus: ConsensusService,
    tokens: TokenService,
) -> list[LedgerTool]:
    """Return one tool per ledger operation, in a stable order."""
    return [LedgerTool(op) for op in create_operations(consensus, tokens).values()]
