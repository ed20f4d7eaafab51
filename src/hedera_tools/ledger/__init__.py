"""Ledger adapters: consensus topics, tokens, and the mirror node reader."""

from hedera_tools.ledger.consensus import DEFAULT_TOPIC_MEMO, ConsensusService
from hedera_tools.ledger.mirror import MirrorClient
from hedera_tools.ledger.tokens import TokenService, to_solidity_address

__all__ = [
    "DEFAULT_TOPIC_MEMO",
    "ConsensusService",
    "MirrorClient",
    "TokenService",
    "to_solidity_address",
]
