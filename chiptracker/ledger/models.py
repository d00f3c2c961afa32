"""Session, player and transaction records."""
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

BANK = "bank"


class TransactionType(str, Enum):
    """Types of chip transactions."""
    BUY = "buy"
    TRANSFER = "transfer"


class PaymentType(str, Enum):
    """How a transaction was paid for."""
    CASH = "cash"
    IOU = "iou"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["PaymentType"]:
        """Return the matching payment type, or None if value is not one."""
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


@dataclass(frozen=True)
class Player:
    """A player registered in a session."""
    id: int
    name: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Transaction:
    """A chip transaction record. Never edited once appended."""
    id: int
    type: TransactionType
    from_: str  # Player name, or BANK for buys
    to: str
    amount: int
    payment_type: PaymentType

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "from": self.from_,
            "to": self.to,
            "amount": self.amount,
            "paymentType": self.payment_type.value,
        }


@dataclass
class GameSession:
    """State of one game: roster, append-only log and id counters."""

    code: str
    players: list[Player] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    player_id_counter: int = 1
    transaction_id_counter: int = 1
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def has_player(self, name: str) -> bool:
        """Check whether a name is taken (case-insensitive)."""
        lowered = name.lower()
        return any(p.name.lower() == lowered for p in self.players)

    def append_player(self, name: str) -> Player:
        """Register a player under the next sequential id."""
        player = Player(id=self.player_id_counter, name=name)
        self.player_id_counter += 1
        self.players.append(player)
        return player

    def append_transaction(
        self,
        transaction_type: TransactionType,
        from_: str,
        to: str,
        amount: int,
        payment_type: PaymentType,
    ) -> Transaction:
        """Append a transaction under the next sequential id."""
        transaction = Transaction(
            id=self.transaction_id_counter,
            type=transaction_type,
            from_=from_,
            to=to,
            amount=amount,
            payment_type=payment_type,
        )
        self.transaction_id_counter += 1
        self.transactions.append(transaction)
        return transaction
