"""Session handling for the chat API"""

from .sessions import Session, SessionStore

__all__ = ["Session", "SessionStore"]
