"""Derive balances, bank totals and settlements from a transaction log."""
from dataclasses import dataclass, field

from chiptracker.ledger.models import PaymentType, Player, Transaction, TransactionType


@dataclass
class PlayerSummary:
    """A player's chip movements."""
    chips_purchased: int = 0
    chips_received: int = 0
    chips_given: int = 0

    @property
    def current_chips(self) -> int:
        return self.chips_purchased + self.chips_received - self.chips_given

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "chipsPurchased": self.chips_purchased,
            "chipsReceived": self.chips_received,
            "chipsGiven": self.chips_given,
            "currentChips": self.current_chips,
        }


@dataclass
class BankSummary:
    """Chips issued by the bank and how they were paid for."""
    chips_issued: int = 0
    cash_received: int = 0
    iou_amount: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "chipsIssued": self.chips_issued,
            "cashReceived": self.cash_received,
            "iouAmount": self.iou_amount,
        }


@dataclass(frozen=True)
class Settlement:
    """Net debt: from_ owes to the given amount."""
    from_: str
    to: str
    amount: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"from": self.from_, "to": self.to, "amount": self.amount}


@dataclass
class LedgerSummary:
    """Everything derived from a session's log."""
    players: dict[str, PlayerSummary] = field(default_factory=dict)
    bank: BankSummary = field(default_factory=BankSummary)
    settlements: list[Settlement] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "summary": {name: s.to_dict() for name, s in self.players.items()},
            "bankSummary": self.bank.to_dict(),
            "settlements": [s.to_dict() for s in self.settlements],
        }


def compute_summary(players: list[Player], transactions: list[Transaction]) -> LedgerSummary:
    """Compute the live summary of a session.

    Transactions that name players missing from the roster stay in the log
    but are skipped for the per-player buckets and for settlements.

    Args:
        players: Session roster, in registration order.
        transactions: Full transaction log, in creation order.

    Returns:
        Per-player balances, bank totals and pairwise net debts.
    """
    result = LedgerSummary(players={p.name: PlayerSummary() for p in players})
    summary = result.players
    bank = result.bank

    # ious[a][b] = sum of iou transfers from a to b
    ious: dict[str, dict[str, int]] = {p.name: {} for p in players}

    for tx in transactions:
        if tx.type == TransactionType.BUY:
            if tx.to in summary:
                summary[tx.to].chips_purchased += tx.amount
            bank.chips_issued += tx.amount
            if tx.payment_type == PaymentType.CASH:
                bank.cash_received += tx.amount
            elif tx.payment_type == PaymentType.IOU:
                bank.iou_amount += tx.amount
        elif tx.type == TransactionType.TRANSFER:
            if tx.from_ in summary:
                summary[tx.from_].chips_given += tx.amount
            if tx.to in summary:
                summary[tx.to].chips_received += tx.amount
            if tx.payment_type == PaymentType.IOU and tx.from_ in ious and tx.to in ious:
                ious[tx.from_][tx.to] = ious[tx.from_].get(tx.to, 0) + tx.amount

    for player_a in players:
        for player_b in players:
            if player_a.name == player_b.name:
                continue
            owe_a_to_b = ious[player_a.name].get(player_b.name, 0)
            owe_b_to_a = ious[player_b.name].get(player_a.name, 0)
            net = owe_a_to_b - owe_b_to_a
            if net > 0:
                result.settlements.append(
                    Settlement(from_=player_a.name, to=player_b.name, amount=net)
                )

    return result


def format_summary_table(summary: dict) -> str:
    """Format a serialized summary as a text table.

    Args:
        summary: Output of LedgerSummary.to_dict() (or the summary endpoint).

    Returns:
        Formatted table string.
    """
    players = summary.get("summary", {})
    if not players:
        return "No players registered."

    lines = [
        "| Player     | Bought | Received | Given | Chips |",
        "|------------|--------|----------|-------|-------|",
    ]
    for name, s in players.items():
        lines.append(
            f"| {name:<10} | {s['chipsPurchased']:>6} | {s['chipsReceived']:>8} "
            f"| {s['chipsGiven']:>5} | {s['currentChips']:>5} |"
        )

    bank = summary.get("bankSummary", {})
    lines.append("")
    lines.append(
        f"Bank: issued {bank.get('chipsIssued', 0)}, "
        f"cash {bank.get('cashReceived', 0)}, iou {bank.get('iouAmount', 0)}"
    )

    settlements = summary.get("settlements", [])
    if settlements:
        lines.append("")
        lines.append("Settlements:")
        for s in settlements:
            lines.append(f"  {s['from']} owes {s['to']} {s['amount']}")
    else:
        lines.append("No outstanding IOUs.")

    return "\n".join(lines)
