"""
Request payload schemas.

Payloads are validated before the store is touched; any failure becomes a
400 with the route's message. String fields are strict (no number or bool
coercion) and unknown keys are ignored.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from chatdesk.models import AdminState


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(Payload):
    password: StrictStr = Field(..., min_length=1)


class SignupRequest(Payload):
    name: StrictStr
    password: StrictStr


class SendMessageRequest(Payload):
    sender_id: StrictStr
    receiver_id: StrictStr
    content: StrictStr


class AdminStatusUpdate(Payload):
    """``status`` may be omitted (only ``updatedAt`` moves) but not null"""

    status: Optional[AdminState] = None

    @field_validator("status", mode="before")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("status cannot be null")
        return value


P = TypeVar("P", bound=BaseModel)


async def parse_payload(request: Request, model: Type[P], message: str) -> P:
    """Read the JSON body and validate it, raising 400 with ``message`` on failure"""
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    try:
        return model.model_validate(data)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
