"""State management module."""
from .session_store import SessionStore, generate_session_code

__all__ = ["SessionStore", "generate_session_code"]
