"""Shared transaction plumbing for the ledger services.

The Hiero SDK is synchronous, so every network call is pushed onto the
default executor to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

import hiero_sdk_python as hiero
from hiero_sdk_python.exceptions import PrecheckError, ReceiptStatusError

from hedera_tools.core.errors import LedgerTransactionError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def status_name(status: Any) -> str:
    """Render a receipt status as its response-code name."""
    name = getattr(status, "name", None)
    if isinstance(name, str):
        return name
    try:
        name = hiero.ResponseCode(status).name
    except (TypeError, ValueError):
        return str(status)
    return name if isinstance(name, str) else str(status)


class LedgerService:
    """Base for services holding a ledger client handle."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    async def _run_sync(self, fn: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn)

    async def _submit(self, transaction: Any, operation: str) -> Any:
        """Freeze, execute and await the receipt of ``transaction``.

        Raises:
            LedgerTransactionError: If the network rejects the transaction
                at precheck or the receipt status is not SUCCESS.
        """

        def _execute() -> Any:
            transaction.freeze_with(self._client)
            return transaction.execute(self._client)

        try:
            receipt = await self._run_sync(_execute)
        except (PrecheckError, ReceiptStatusError) as e:
            status = status_name(e.status)
            logger.warning("%s rejected: %s", operation, status)
            raise LedgerTransactionError(operation, status) from e
        if receipt.status != hiero.ResponseCode.SUCCESS:
            status = status_name(receipt.status)
            logger.warning("%s rejected: %s", operation, status)
            raise LedgerTransactionError(operation, status)
        logger.debug("%s succeeded", operation)
        return receipt
