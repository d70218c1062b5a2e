"""
Storage interface for users, messages and the admin status record.

Lookups return ``None`` for absent records; absence is not an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import AdminStatus, Message, User


class Storage(ABC):
    """Data store contract consumed by the API layer"""

    # Users

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_password(self, password: str) -> Optional[User]:
        """First user (insertion order) whose password equals ``password``"""

    @abstractmethod
    def create_user(self, name: str, password: str) -> User:
        """Create a non-admin user. Password uniqueness is the caller's job."""

    @abstractmethod
    def create_user_if_password_free(self, name: str, password: str) -> User:
        """
        Atomic check-and-insert variant of ``create_user``.

        Raises:
            PasswordTakenError: another user already has ``password``
        """

    @abstractmethod
    def get_all_users(self) -> List[User]:
        ...

    # Messages

    @abstractmethod
    def create_message(self, sender_id: str, receiver_id: str, content: str) -> Message:
        ...

    @abstractmethod
    def get_messages_between_users(self, user_id1: str, user_id2: str) -> List[Message]:
        """Conversation in both directions, oldest first"""

    @abstractmethod
    def get_user_messages(self, user_id: str) -> List[Message]:
        """Messages sent or received by ``user_id``, oldest first"""

    # Admin status

    @abstractmethod
    def get_admin_status(self) -> AdminStatus:
        ...

    @abstractmethod
    def update_admin_status(self, **fields) -> AdminStatus:
        """Merge ``fields`` into the status record and refresh ``updated_at``"""

    def close(self) -> None:
        """Release resources held by the store"""
