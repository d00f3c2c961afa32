"""Pydantic schemas for the HTTP API.

Field names follow the camelCase wire format used by the web client.
Request fields accept any JSON value so that the session store, which owns
validation, sees exactly what the client sent and reports problems as a 400.
"""
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


# ============= Requests =============

class CreateSessionRequest(BaseModel):
    """Start a new game.

    Each player entry is {name, extra?: {amount, from?, paymentType?}}.
    """
    players: Any = None


class AddPlayerRequest(BaseModel):
    """Join an existing game."""
    name: Any = None


class RecordTransactionRequest(BaseModel):
    """Buy from the bank or transfer between players."""
    model_config = ConfigDict(populate_by_name=True)

    type: Any = None  # buy, transfer
    from_: Any = Field(default=None, alias="from")
    to: Any = None
    amount: Any = None
    payment_type: Any = Field(default=None, alias="paymentType")


# ============= Responses =============

class PlayerItem(BaseModel):
    id: int
    name: str


class SessionResponse(BaseModel):
    """A session's code and roster."""
    model_config = ConfigDict(populate_by_name=True)

    session_code: str = Field(alias="sessionCode")
    players: list[PlayerItem]


class TransactionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    type: str
    from_: str = Field(alias="from")
    to: str
    amount: int
    payment_type: str = Field(alias="paymentType")


class TransactionsResponse(BaseModel):
    transactions: list[TransactionItem]


class RecordTransactionResponse(BaseModel):
    ok: bool = True


class PlayerSummaryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chips_purchased: int = Field(alias="chipsPurchased")
    chips_received: int = Field(alias="chipsReceived")
    chips_given: int = Field(alias="chipsGiven")
    current_chips: int = Field(alias="currentChips")


class BankSummaryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chips_issued: int = Field(alias="chipsIssued")
    cash_received: int = Field(alias="cashReceived")
    iou_amount: int = Field(alias="iouAmount")


class SettlementItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    amount: int


class SummaryResponse(BaseModel):
    """Live balances, bank totals and settlements."""
    model_config = ConfigDict(populate_by_name=True)

    summary: dict[str, PlayerSummaryItem]
    bank_summary: BankSummaryItem = Field(alias="bankSummary")
    settlements: list[SettlementItem]
