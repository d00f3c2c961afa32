"""In-memory game session store."""
import secrets
import string
import threading
from typing import Any, Optional

from chiptracker.config import config
from chiptracker.errors import NotFoundError, ValidationError
from chiptracker.ledger.models import (
    BANK,
    GameSession,
    PaymentType,
    Player,
    Transaction,
    TransactionType,
)
from chiptracker.ledger.summary import LedgerSummary, compute_summary
from chiptracker.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_session_code(length: Optional[int] = None) -> str:
    """Generate a short, shareable session code.

    Args:
        length: Number of characters (uses config default if not provided).

    Returns:
        Uppercase alphanumeric code.
    """
    length = length or config.session_code_length
    return "".join(secrets.choice(SESSION_CODE_ALPHABET) for _ in range(length))


def _clean_name(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _rejected(context: str, message: str) -> ValidationError:
    logger.warning(f"{context}: rejected ({message})")
    return ValidationError(message)


class SessionStore:
    """Holds every live game session for the lifetime of the process."""

    def __init__(self, code_length: Optional[int] = None):
        """Initialize an empty store.

        Args:
            code_length: Session code length (uses config default if not provided).
        """
        self.code_length = code_length or config.session_code_length
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def _new_code(self) -> str:
        code = generate_session_code(self.code_length)
        while code in self._sessions:
            code = generate_session_code(self.code_length)
        return code

    def get_session(self, code: Optional[str]) -> GameSession:
        """Look up a session by code (case-insensitive).

        Raises:
            NotFoundError: If no live session has this code.
        """
        session = self._sessions.get(code.strip().upper()) if isinstance(code, str) else None
        if session is None:
            logger.warning(f"Unknown session code: {code!r}")
            raise NotFoundError("Invalid game code.")
        return session

    def create_session(self, players: Any) -> GameSession:
        """Create a session from the new-game player list.

        Each entry is a mapping with a ``name`` and an optional ``extra``
        mapping ({amount, from, paymentType}) describing chips the player
        starts with. Entries without a name are skipped.

        Args:
            players: List of player entries.

        Returns:
            The new session.

        Raises:
            ValidationError: If players is not a non-empty list, or names repeat.
        """
        if not isinstance(players, list) or not players:
            raise _rejected("New session", "A non-empty players array is required.")

        entries = []
        seen: set[str] = set()
        for entry in players:
            if not isinstance(entry, dict):
                continue
            name = _clean_name(entry.get("name"))
            if not name:
                continue
            if name.lower() in seen:
                raise _rejected("New session", f"Duplicate player name: {name}.")
            seen.add(name.lower())
            entries.append((name, entry.get("extra")))

        with self._lock:
            session = GameSession(code=self._new_code())
            for name, _ in entries:
                session.append_player(name)

            for name, extra in entries:
                if not isinstance(extra, dict) or not _is_positive_int(extra.get("amount")):
                    continue
                payment_type = PaymentType.parse(extra.get("paymentType")) or PaymentType.CASH
                source = _clean_name(extra.get("from")) or BANK
                if source.lower() == BANK:
                    session.append_transaction(
                        TransactionType.BUY, BANK, name, extra["amount"], payment_type
                    )
                else:
                    session.append_transaction(
                        TransactionType.TRANSFER, source, name, extra["amount"], payment_type
                    )

            self._sessions[session.code] = session

        logger.info(
            f"Created session {session.code} with {len(session.players)} players "
            f"and {len(session.transactions)} opening transactions"
        )
        return session

    def add_player(self, code: Optional[str], name: Any) -> Player:
        """Register a new player in an existing session.

        Raises:
            NotFoundError: If the session is unknown.
            ValidationError: If the name is empty or already taken.
        """
        session = self.get_session(code)
        name = _clean_name(name)
        if not name:
            raise _rejected(f"Session {session.code}", "Name is required.")

        with session.lock:
            if session.has_player(name):
                raise _rejected(f"Session {session.code}", "Player already exists.")
            player = session.append_player(name)

        logger.info(f"Session {session.code}: added player {player.name} (id {player.id})")
        return player

    def record_transaction(
        self,
        code: Optional[str],
        type: Any,
        from_: Any,
        to: Any,
        amount: Any,
        payment_type: Any = None,
    ) -> Transaction:
        """Append a buy or transfer to a session's log.

        Buys always come from the bank and fall back to cash when the payment
        type is missing or unknown. Transfers must name a source and a valid
        payment type. Player names are not checked against the roster.

        Args:
            code: Session code.
            type: "buy" or "transfer".
            from_: Source player (ignored for buys).
            to: Receiving player.
            amount: Positive chip count.
            payment_type: "cash" or "iou".

        Returns:
            The recorded transaction.

        Raises:
            NotFoundError: If the session is unknown.
            ValidationError: If any field is missing or invalid.
        """
        session = self.get_session(code)
        to = _clean_name(to)
        if not type or not to or amount is None:
            raise _rejected(f"Session {session.code}", "Missing required fields.")
        if not _is_positive_int(amount):
            raise _rejected(f"Session {session.code}", "Amount must be a positive integer.")

        if type == TransactionType.BUY.value:
            transaction_type = TransactionType.BUY
            source = BANK
            payment = PaymentType.parse(payment_type) or PaymentType.CASH
        elif type == TransactionType.TRANSFER.value:
            transaction_type = TransactionType.TRANSFER
            source = _clean_name(from_)
            if not source:
                raise _rejected(f"Session {session.code}", 'Transfer transactions require "from".')
            payment = PaymentType.parse(payment_type)
            if payment is None:
                raise _rejected(f"Session {session.code}", 'paymentType must be either "cash" or "iou".')
        else:
            raise _rejected(f"Session {session.code}", "Invalid transaction type.")

        with session.lock:
            transaction = session.append_transaction(
                transaction_type, source, to, amount, payment
            )

        logger.info(
            f"Session {session.code}: recorded {transaction.type.value} #{transaction.id} "
            f"{transaction.from_} -> {transaction.to} {transaction.amount} "
            f"({transaction.payment_type.value})"
        )
        return transaction

    def list_transactions(self, code: Optional[str]) -> list[Transaction]:
        """Get a copy of a session's transaction log, oldest first."""
        return list(self.get_session(code).transactions)

    def get_summary(self, code: Optional[str]) -> LedgerSummary:
        """Compute the current summary for a session."""
        session = self.get_session(code)
        with session.lock:
            players = list(session.players)
            transactions = list(session.transactions)
        return compute_summary(players, transactions)
