"""Protocol module: HTTP request and response schemas."""
from .messages import (
    CreateSessionRequest,
    AddPlayerRequest,
    RecordTransactionRequest,
    SessionResponse,
    PlayerItem,
    SummaryResponse,
    TransactionsResponse,
    RecordTransactionResponse,
)

__all__ = [
    "CreateSessionRequest",
    "AddPlayerRequest",
    "RecordTransactionRequest",
    "SessionResponse",
    "PlayerItem",
    "SummaryResponse",
    "TransactionsResponse",
    "RecordTransactionResponse",
]
