"""
Domain records held by the data store.

Records are immutable; JSON field names are camelCase on the wire
(``isAdmin``, ``createdAt``, ``senderId`` ...), snake_case in Python.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


ADMIN_STATUS_ID = "admin_status"

AdminState = Literal["available", "busy"]
ADMIN_STATES = ("available", "busy")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self) -> dict:
        """Wire representation (camelCase keys, ISO timestamps)"""
        return self.model_dump(mode="json", by_alias=True)


class User(Record):
    """Chat participant. ``password`` is the login credential and is stored as-is."""

    id: str = Field(default_factory=new_id)
    name: str
    password: str
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class Message(Record):
    """Direct message between two users; sender/receiver are not checked for existence"""

    id: str = Field(default_factory=new_id)
    sender_id: str
    receiver_id: str
    content: str
    created_at: datetime = Field(default_factory=utcnow)

    def involves(self, user_id: str) -> bool:
        return self.sender_id == user_id or self.receiver_id == user_id

    def is_between(self, user_a: str, user_b: str) -> bool:
        return (self.sender_id == user_a and self.receiver_id == user_b) or (
            self.sender_id == user_b and self.receiver_id == user_a
        )


class AdminStatus(Record):
    """Singleton availability flag broadcast by the admin"""

    id: str = ADMIN_STATUS_ID
    status: AdminState = "available"
    updated_at: datetime = Field(default_factory=utcnow)
