"""Errors raised by the session store."""


class LedgerError(Exception):
    """Base class for request errors reported back to the caller."""


class ValidationError(LedgerError):
    """Malformed or semantically invalid request."""


class NotFoundError(LedgerError):
    """Unknown session code."""
