"""
In-memory data store.

Users and messages live in insertion-ordered dicts keyed by id; the admin
status is a single record replaced on every update. Nothing is persisted:
a new instance starts with only the seeded admin.

Each method holds the store lock while touching the containers, so single
operations are atomic. Sequences of operations are not: ``create_user``
after ``get_user_by_password`` can race with a concurrent signup, which is
what ``create_user_if_password_free`` exists for.
"""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Dict, List, Optional

from ..core.config import DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_PASSWORD
from ..models import AdminStatus, Message, User, utcnow
from ..utils.exceptions import PasswordTakenError, StorageError
from ..utils.logger import get_logger
from .base import Storage

logger = get_logger(__name__)


class MemStorage(Storage):
    """Process-local store seeded with one admin user"""

    def __init__(self, admin_name: str = DEFAULT_ADMIN_NAME, admin_password: str = DEFAULT_ADMIN_PASSWORD):
        self._lock = threading.RLock()
        self._users: Dict[str, User] = {}
        self._messages: Dict[str, Message] = {}
        self._admin_status = AdminStatus()
        self._closed = False
        self._create_default_admin(admin_name, admin_password)

    def _create_default_admin(self, name: str, password: str) -> None:
        admin = User(name=name, password=password, is_admin=True)
        self._users[admin.id] = admin
        logger.info("Seeded admin user", user_id=admin.id, name=name)

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("Storage is closed")

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            self._check_open()
            return self._users.get(user_id)

    def get_user_by_password(self, password: str) -> Optional[User]:
        with self._lock:
            self._check_open()
            return next((u for u in self._users.values() if u.password == password), None)

    def create_user(self, name: str, password: str) -> User:
        user = User(name=name, password=password, is_admin=False)
        with self._lock:
            self._check_open()
            self._users[user.id] = user
        logger.info("User created", user_id=user.id)
        return user

    def create_user_if_password_free(self, name: str, password: str) -> User:
        with self._lock:
            existing = self.get_user_by_password(password)
            if existing is not None:
                raise PasswordTakenError(user_id=existing.id)
            return self.create_user(name, password)

    def get_all_users(self) -> List[User]:
        with self._lock:
            self._check_open()
            return list(self._users.values())

    # Messages

    def create_message(self, sender_id: str, receiver_id: str, content: str) -> Message:
        message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
        with self._lock:
            self._check_open()
            self._messages[message.id] = message
        logger.debug("Message stored", message_id=message.id, sender_id=sender_id, receiver_id=receiver_id)
        return message

    def get_messages_between_users(self, user_id1: str, user_id2: str) -> List[Message]:
        with self._lock:
            self._check_open()
            found = [m for m in self._messages.values() if m.is_between(user_id1, user_id2)]
        # sorted() is stable, equal timestamps keep insertion order
        return sorted(found, key=lambda m: m.created_at)

    def get_user_messages(self, user_id: str) -> List[Message]:
        with self._lock:
            self._check_open()
            found = [m for m in self._messages.values() if m.involves(user_id)]
        return sorted(found, key=lambda m: m.created_at)

    # Admin status

    def get_admin_status(self) -> AdminStatus:
        with self._lock:
            self._check_open()
            return self._admin_status

    def update_admin_status(self, **fields) -> AdminStatus:
        """
        Merge ``fields`` into the status record.

        ``id`` and ``updated_at`` cannot be set by callers. ``updated_at`` is
        always strictly newer than the previous value.

        Raises:
            pydantic.ValidationError: ``status`` is not an AdminState
        """
        fields.pop("id", None)
        fields.pop("updated_at", None)
        with self._lock:
            self._check_open()
            current = self._admin_status
            now = utcnow()
            if now <= current.updated_at:
                now = current.updated_at + timedelta(microseconds=1)
            merged = {**current.model_dump(), **fields, "updated_at": now}
            self._admin_status = AdminStatus.model_validate(merged)
            updated = self._admin_status
        logger.info("Admin status updated", status=updated.status)
        return updated

    def close(self) -> None:
        with self._lock:
            self._users.clear()
            self._messages.clear()
            self._closed = True
        logger.info("Storage closed")
