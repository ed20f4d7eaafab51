"""Typed request and result records for each tool.

Requests use camelCase aliases on the wire and reject unknown fields.
Results serialize back to camelCase.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hedera_tools.core.errors import UNKNOWN_ERROR


class _Request(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class _Result(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Literal["success"] = "success"


# ─── Requests ─────────────────────────────────────────────────


class CreateFungibleTokenRequest(_Request):
    name: str = Field(min_length=1, description="Token name, e.g. My Token")
    symbol: str = Field(min_length=1, description="Token symbol, e.g. MT")
    decimals: int = Field(ge=0, description="Number of decimals")
    initial_supply: int = Field(ge=0, description="Initial supply, e.g. 100000")


class TransferTokenRequest(_Request):
    token_id: str = Field(description="Token to transfer, e.g. 0.0.123456")
    to_account_id: str = Field(description="Receiving account, e.g. 0.0.789012")
    amount: int = Field(gt=0, description="Amount of tokens to transfer")


class GetHbarBalanceRequest(_Request):
    """Takes no input."""

    model_config = ConfigDict(extra="ignore")


class AirdropRecipient(_Request):
    account_id: str = Field(description="Account to send tokens to")
    amount: int = Field(gt=0, description="Amount of tokens to send")


class AirdropTokenRequest(_Request):
    token_id: str = Field(description="Token to airdrop, e.g. 0.0.123456")
    recipients: list[AirdropRecipient] = Field(min_length=1)


class CreateTopicRequest(_Request):
    topic_memo: str | None = Field(
        default=None, description="Purpose of the topic"
    )


class UpdateTopicRequest(_Request):
    topic_id: str
    topic_memo: str


class DeleteTopicRequest(_Request):
    topic_id: str


class SubmitMessageRequest(_Request):
    topic_id: str
    message: str


class QueryTopicRequest(_Request):
    topic_id: str
    duration: int | None = Field(
        default=None, ge=0, description="Milliseconds to wait for indexing"
    )
    limit: int | None = Field(
        default=None, ge=0, description="Messages per page; 0 uses the default"
    )


# ─── Results ──────────────────────────────────────────────────


class CreateFungibleTokenResult(_Result):
    message: str = "Token creation successful"
    initial_supply: int
    token_id: str
    solidity_address: str


class TransferTokenResult(_Result):
    message: str = "Token transfer successful"
    token_id: str
    to_account_id: str
    amount: int


class GetHbarBalanceResult(_Result):
    balance: float
    unit: Literal["HBAR"] = "HBAR"


class AirdropTokenResult(_Result):
    message: str = "Token airdrop successful"
    token_id: str
    recipient_count: int
    total_amount: int


class CreateTopicResult(_Result):
    topic_id: str
    memo: str


class UpdateTopicResult(_Result):
    message: str = "Topic memo updated"
    topic_id: str
    new_memo: str


class DeleteTopicResult(_Result):
    message: str = "Topic deleted"
    topic_id: str


class SubmitMessageResult(_Result):
    message: str = "Message submitted to topic"
    topic_id: str


class QueryTopicResult(_Result):
    topic_id: str
    messages: list[dict[str, Any]]


class ErrorEnvelope(BaseModel):
    """Uniform failure result."""

    status: Literal["error"] = "error"
    message: str
    code: str = UNKNOWN_ERROR
