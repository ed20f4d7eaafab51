"""Hedera Consensus Service adapter.

Wraps topic create/update/delete and message submission around the
Hiero SDK, and reads topic messages back through the mirror node.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import hiero_sdk_python as hiero

from hedera_tools.core.errors import TopicCreationError
from hedera_tools.ledger.base import LedgerService

if TYPE_CHECKING:
    from hedera_tools.ledger.mirror import MirrorClient

logger = logging.getLogger(__name__)

DEFAULT_TOPIC_MEMO = "Default Topic"


class ConsensusService(LedgerService):
    """Topic lifecycle and messaging on the consensus service.

    Holds only the client handle, the optional admin key and the mirror
    reader; topic identity is never cached.
    """

    def __init__(
        self,
        client: Any,
        mirror: MirrorClient,
        *,
        admin_key: Any | None = None,
        default_memo: str = DEFAULT_TOPIC_MEMO,
        default_wait_ms: int = 5000,
        default_page_limit: int = 10,
    ) -> None:
        super().__init__(client)
        self._mirror = mirror
        self._admin_key = admin_key
        self._default_memo = default_memo
        self._default_wait_ms = default_wait_ms
        self._default_page_limit = default_page_limit

    @property
    def default_memo(self) -> str:
        return self._default_memo

    async def create_topic(self, memo: str | None = None) -> str:
        """Create a topic and return its id.

        Raises:
            TopicCreationError: If the receipt carries no topic id.
            LedgerTransactionError: If the network rejects the transaction.
        """
        kwargs: dict[str, Any] = {"memo": memo or self._default_memo}
        if self._admin_key is not None:
            kwargs["admin_key"] = self._admin_key
        tx = hiero.TopicCreateTransaction(**kwargs)

        receipt = await self._submit(tx, "TopicCreateTransaction")
        topic_id = str(receipt.topic_id) if receipt.topic_id else ""
        if not topic_id:
            msg = "Failed to create topic."
            raise TopicCreationError(msg)
        logger.info("Created topic %s", topic_id)
        return topic_id

    async def update_topic(self, topic_id: str, memo: str) -> None:
        tx = hiero.TopicUpdateTransaction(
            topic_id=hiero.TopicId.from_string(topic_id),
            memo=memo,
        )
        await self._submit(tx, "TopicUpdateTransaction")
        logger.info("Updated memo of topic %s", topic_id)

    async def delete_topic(self, topic_id: str) -> None:
        """Delete a topic. Irreversible; callers confirm intent first."""
        tx = hiero.TopicDeleteTransaction(topic_id=hiero.TopicId.from_string(topic_id))
        await self._submit(tx, "TopicDeleteTransaction")
        logger.info("Deleted topic %s", topic_id)

    async def submit_message(self, topic_id: str, message: str) -> None:
        tx = hiero.TopicMessageSubmitTransaction(
            topic_id=hiero.TopicId.from_string(topic_id),
            message=message,
        )
        await self._submit(tx, "TopicMessageSubmitTransaction")
        logger.info("Submitted message to topic %s", topic_id)

    async def query_topic(
        self,
        topic_id: str,
        wait_ms: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return the topic's messages as mirror node records.

        ``wait_ms`` and ``limit`` fall back to the configured indexing
        delay and page size.
        """
        return await self._mirror.fetch_topic_messages(
            topic_id,
            wait_ms=self._default_wait_ms if wait_ms is None else wait_ms,
            limit=self._default_page_limit if limit is None else limit,
        )
