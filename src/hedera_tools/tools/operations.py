"""The fixed set of ledger operations exposed as tools.

Each :class:`Operation` pairs a tool name and description with its
request/result records and the coroutine that runs it. The table built
by :func:`create_operations` is the single dispatch point: adding a tool
means adding an entry, not a subclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hedera_tools.ledger.tokens import to_solidity_address
from hedera_tools.tools.schemas import (
    AirdropTokenRequest,
    AirdropTokenResult,
    CreateFungibleTokenRequest,
    CreateFungibleTokenResult,
    CreateTopicRequest,
    CreateTopicResult,
    DeleteTopicRequest,
    DeleteTopicResult,
    GetHbarBalanceRequest,
    GetHbarBalanceResult,
    QueryTopicRequest,
    QueryTopicResult,
    SubmitMessageRequest,
    SubmitMessageResult,
    TransferTokenRequest,
    TransferTokenResult,
    UpdateTopicRequest,
    UpdateTopicResult,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pydantic import BaseModel

    from hedera_tools.ledger.consensus import ConsensusService
    from hedera_tools.ledger.tokens import TokenService

CREATE_FUNGIBLE_TOKEN = "hedera_create_fungible_token"
TRANSFER_TOKEN = "hedera_transfer_token"
GET_HBAR_BALANCE = "hedera_get_hbar_balance"
AIRDROP_TOKEN = "hedera_airdrop_token"
CREATE_TOPIC = "hedera_create_topic"
UPDATE_TOPIC = "hedera_update_topic"
DELETE_TOPIC = "hedera_delete_topic"
SUBMIT_MESSAGE = "hedera_submit_message"
QUERY_TOPIC = "hedera_query_topic"


@dataclass(frozen=True, slots=True)
class Operation:
    """One agent-callable ledger operation."""

    name: str
    description: str
    request_model: type[BaseModel]
    result_model: type[BaseModel]
    handler: Callable[[Any], Awaitable[BaseModel]]
    accepts_empty: bool = False


DESCRIPTIONS = {
    CREATE_FUNGIBLE_TOKEN: """Create a fungible token on Hedera.
Inputs (a JSON string):
  name: string, the name of the token e.g. My Token,
  symbol: string, the symbol of the token e.g. MT,
  decimals: number, the amount of decimals of the token,
  initialSupply: number, the initial supply of the token e.g. 100000
""",
    TRANSFER_TOKEN: """Transfer fungible tokens on Hedera.
Inputs (a JSON string):
  tokenId: string, the ID of the token to transfer e.g. 0.0.123456,
  toAccountId: string, the account ID to transfer to e.g. 0.0.789012,
  amount: number, the amount of tokens to transfer e.g. 100
""",
    GET_HBAR_BALANCE: """Get the HBAR balance of the connected account.
This tool takes no inputs, just pass an empty string or '{}'.
""",
    AIRDROP_TOKEN: """Airdrop fungible tokens to multiple accounts on Hedera.
Inputs (a JSON string):
  tokenId: string, the ID of the token to airdrop e.g. 0.0.123456,
  recipients: array of objects containing:
    - accountId: string, the account ID to send tokens to e.g. 0.0.789012
    - amount: number, the amount of tokens to send e.g. 100
Example input: {"tokenId": "0.0.123456", "recipients": [
  {"accountId": "0.0.789012", "amount": 100},
  {"accountId": "0.0.789013", "amount": 200}]}
""",
    CREATE_TOPIC: """Create a consensus topic on Hedera.
Inputs (a JSON string): {"topicMemo": string (optional)}
Creates a topic the agent can publish messages to. 'topicMemo' describes
the purpose of the topic.
Example: {"topicMemo": "Discussion on Hedera Consensus Service"}
""",
    UPDATE_TOPIC: """Update the memo (description) of an existing Hedera consensus topic.
Inputs (a JSON string): {"topicId": string, "topicMemo": string}
""",
    DELETE_TOPIC: """Delete an existing Hedera consensus topic.
Inputs (a JSON string): {"topicId": string}
Use this tool cautiously as deleting a topic is irreversible.
""",
    SUBMIT_MESSAGE: """Submit a message to a Hedera consensus topic.
Inputs (a JSON string): {"topicId": string, "message": string}
Posts textual updates or instructions to the specified topic.
""",
    QUERY_TOPIC: """Query messages from a Hedera consensus topic.
Inputs (a JSON string):
  {"topicId": string, "duration": number (optional), "limit": number (optional)}
'duration' is how many milliseconds to wait for recent messages to be
indexed; 'limit' is the page size used while collecting them.
""",
}


def create_operations(
    consensus: ConsensusService,
    tokens: TokenService,
) -> dict[str, Operation]:
    """Build the name → operation lookup table bound to the given services."""

    async def create_fungible_token(req: CreateFungibleTokenRequest) -> CreateFungibleTokenResult:
        token_id = await tokens.create_fungible_token(
            req.name, req.symbol, req.decimals, req.initial_supply
        )
        return CreateFungibleTokenResult(
            initial_supply=req.initial_supply,
            token_id=token_id,
            solidity_address=to_solidity_address(token_id),
        )

    async def transfer_token(req: TransferTokenRequest) -> TransferTokenResult:
        await tokens.transfer_token(req.token_id, req.to_account_id, req.amount)
        return TransferTokenResult(
            token_id=req.token_id,
            to_account_id=req.to_account_id,
            amount=req.amount,
        )

    async def get_hbar_balance(req: GetHbarBalanceRequest) -> GetHbarBalanceResult:
        return GetHbarBalanceResult(balance=await tokens.get_hbar_balance())

    async def airdrop_token(req: AirdropTokenRequest) -> AirdropTokenResult:
        await tokens.airdrop_token(
            req.token_id, [(r.account_id, r.amount) for r in req.recipients]
        )
        return AirdropTokenResult(
            token_id=req.token_id,
            recipient_count=len(req.recipients),
            total_amount=sum(r.amount for r in req.recipients),
        )

    async def create_topic(req: CreateTopicRequest) -> CreateTopicResult:
        topic_id = await consensus.create_topic(req.topic_memo)
        return CreateTopicResult(
            topic_id=topic_id,
            memo=req.topic_memo or consensus.default_memo,
        )

    async def update_topic(req: UpdateTopicRequest) -> UpdateTopicResult:
        await consensus.update_topic(req.topic_id, req.topic_memo)
        return UpdateTopicResult(topic_id=req.topic_id, new_memo=req.topic_memo)

    async def delete_topic(req: DeleteTopicRequest) -> DeleteTopicResult:
        await consensus.delete_topic(req.topic_id)
        return DeleteTopicResult(topic_id=req.topic_id)

    async def submit_message(req: SubmitMessageRequest) -> SubmitMessageResult:
        await consensus.submit_message(req.topic_id, req.message)
        return SubmitMessageResult(topic_id=req.topic_id)

    async def query_topic(req: QueryTopicRequest) -> QueryTopicResult:
        messages = await consensus.query_topic(
            req.topic_id, wait_ms=req.duration, limit=req.limit or None
        )
        return QueryTopicResult(topic_id=req.topic_id, messages=messages)

    table = [
        Operation(CREATE_FUNGIBLE_TOKEN, DESCRIPTIONS[CREATE_FUNGIBLE_TOKEN],
                  CreateFungibleTokenRequest, CreateFungibleTokenResult, create_fungible_token),
        Operation(TRANSFER_TOKEN, DESCRIPTIONS[TRANSFER_TOKEN],
                  TransferTokenRequest, TransferTokenResult, transfer_token),
        Operation(GET_HBAR_BALANCE, DESCRIPTIONS[GET_HBAR_BALANCE],
                  GetHbarBalanceRequest, GetHbarBalanceResult, get_hbar_balance,
                  accepts_empty=True),
        Operation(AIRDROP_TOKEN, DESCRIPTIONS[AIRDROP_TOKEN],
                  AirdropTokenRequest, AirdropTokenResult, airdrop_token),
        Operation(CREATE_TOPIC, DESCRIPTIONS[CREATE_TOPIC],
                  CreateTopicRequest, CreateTopicResult, create_topic),
        Operation(UPDATE_TOPIC, DESCRIPTIONS[UPDATE_TOPIC],
                  UpdateTopicRequest, UpdateTopicResult, update_topic),
        Operation(DELETE_TOPIC, DESCRIPTIONS[DELETE_TOPIC],
                  DeleteTopicRequest, DeleteTopicResult, delete_topic),
        Operation(SUBMIT_MESSAGE, DESCRIPTIONS[SUBMIT_MESSAGE],
                  SubmitMessageRequest, SubmitMessageResult, submit_message),
        Operation(QUERY_TOPIC, DESCRIPTIONS[QUERY_TOPIC],
                  QueryTopicRequest, QueryTopicResult, query_topic),
    ]
    return {op.name: op for op in table}
