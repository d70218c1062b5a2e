"""
Session tokens for the chat API.

Login and signup mint an opaque token bound to a user id. Tokens live in
memory only and expire after ``expiry_hours``. Whether routes demand a
token is decided by the web layer (``auth.require_session``).
"""

from __future__ import annotations

import secrets
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..models import User, new_id, utcnow
from ..storage.base import Storage
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_EXPIRY_HOURS = 24


class Session(BaseModel):
    """Session record (opaque token)"""

    id: str = Field(default_factory=new_id)
    user_id: str
    token: str
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime


class SessionStore:
    """In-memory token registry resolving tokens to users of a Storage"""

    def __init__(self, storage: Storage, expiry_hours: int = DEFAULT_EXPIRY_HOURS):
        self.storage = storage
        self.expiry = timedelta(hours=expiry_hours)
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, user_id: str) -> str:
        """Create a new session and return its token"""
        token = secrets.token_urlsafe(32)
        session = Session(user_id=user_id, token=token, expires_at=utcnow() + self.expiry)
        with self._lock:
            self._sweep_expired(session.created_at)
            self._sessions[token] = session
        return token

    def _sweep_expired(self, now: datetime) -> None:
        # Caller holds the lock
        expired = [token for token, s in self._sessions.items() if now > s.expires_at]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug("Expired sessions removed", count=len(expired))

    def validate_session(self, token: Optional[str]) -> Optional[User]:
        """Return the user behind a live token, or None"""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if utcnow() > session.expires_at:
                del self._sessions[token]
                logger.info("Session expired", user_id=session.user_id)
                return None
        user = self.storage.get_user(session.user_id)
        if user is None:
            # Stale session pointing to a missing user
            self.logout(token)
        return user

    def logout(self, token: Optional[str]) -> None:
        """Invalidate a token (idempotent)"""
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
