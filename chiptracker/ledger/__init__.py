"""Ledger module: transaction records and summary computation."""
from .models import BANK, GameSession, PaymentType, Player, Transaction, TransactionType
from .summary import (
    BankSummary,
    LedgerSummary,
    PlayerSummary,
    Settlement,
    compute_summary,
    format_summary_table,
)

__all__ = [
    "BANK",
    "GameSession",
    "PaymentType",
    "Player",
    "Transaction",
    "TransactionType",
    "BankSummary",
    "LedgerSummary",
    "PlayerSummary",
    "Settlement",
    "compute_summary",
    "format_summary_table",
]
