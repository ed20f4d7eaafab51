"""Fungible token and account balance operations."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import hiero_sdk_python as hiero

from hedera_tools.core.errors import InvalidInputError, LedgerError
from hedera_tools.ledger.base import LedgerService

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

TINYBARS_PER_HBAR = 100_000_000


def to_solidity_address(entity_id: str) -> str:
    """Return the long-zero EVM address of a ``shard.realm.num`` id.

    >>> to_solidity_address("0.0.1234")
    '00000000000000000000000000000000000004d2'
    """
    parts = entity_id.split(".")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        msg = f"Not a shard.realm.num entity id: {entity_id!r}"
        raise InvalidInputError(msg)
    shard, realm, num = (int(p) for p in parts)
    return f"{shard:08x}{realm:016x}{num:016x}"


class TokenService(LedgerService):
    """Token creation, transfers, airdrops and HBAR balance lookups.

    Transfers and airdrops debit the operator account, which also acts as
    treasury for tokens created here.
    """

    def __init__(self, client: Any, operator_id: Any, operator_key: Any | None = None) -> None:
        super().__init__(client)
        self._operator_id = operator_id
        self._operator_key = operator_key

    async def create_fungible_token(
        self,
        name: str,
        symbol: str,
        decimals: int,
        initial_supply: int,
    ) -> str:
        """Create a fungible token treasured by the operator; return its id."""
        tx = (
            hiero.TokenCreateTransaction()
            .set_token_name(name)
            .set_token_symbol(symbol)
            .set_decimals(decimals)
            .set_initial_supply(initial_supply)
            .set_treasury_account_id(self._operator_id)
        )
        if self._operator_key is not None:
            tx.set_admin_key(self._operator_key.public_key())

        receipt = await self._submit(tx, "TokenCreateTransaction")
        token_id = str(receipt.token_id) if receipt.token_id else ""
        if not token_id:
            msg = "Failed to create token."
            raise LedgerError(msg)
        logger.info("Created token %s (%s)", token_id, symbol)
        return token_id

    async def transfer_token(self, token_id: str, to_account_id: str, amount: int) -> None:
        token = hiero.TokenId.from_string(token_id)
        tx = (
            hiero.TransferTransaction()
            .add_token_transfer(token, self._operator_id, -amount)
            .add_token_transfer(token, hiero.AccountId.from_string(to_account_id), amount)
        )
        await self._submit(tx, "TransferTransaction")
        logger.info("Transferred %d of %s to %s", amount, token_id, to_account_id)

    async def airdrop_token(
        self,
        token_id: str,
        recipients: Sequence[tuple[str, int]],
    ) -> None:
        """Airdrop ``token_id`` to each ``(account_id, amount)`` in one transaction."""
        token = hiero.TokenId.from_string(token_id)
        total = sum(amount for _, amount in recipients)
        tx = hiero.TokenAirdropTransaction()
        tx.add_token_transfer(token, self._operator_id, -total)
        for account_id, amount in recipients:
            tx.add_token_transfer(token, hiero.AccountId.from_string(account_id), amount)
        await self._submit(tx, "TokenAirdropTransaction")
        logger.info("Airdropped %d of %s to %d accounts", total, token_id, len(recipients))

    async def get_hbar_balance(self, account_id: str | None = None) -> float:
        """Return the HBAR balance of ``account_id`` (the operator by default)."""
        account = (
            hiero.AccountId.from_string(account_id) if account_id else self._operator_id
        )

        def _query() -> Any:
            query = hiero.CryptoGetAccountBalanceQuery().set_account_id(account)
            return query.execute(self._client)

        balance = await self._run_sync(_query)
        tinybars = int(balance.hbars.to_tinybars())
        return float(Decimal(tinybars) / TINYBARS_PER_HBAR)
