"""
Direct message routes.

Prefix: /api/messages

Clients poll the conversation route to pick up new messages. Any caller
that knows a user id can read that user's messages unless session
enforcement is on.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from chatdesk.storage.base import Storage
from chatdesk.utils.logger import get_logger

from .deps import get_storage, session_guard
from .errors import INVALID_MESSAGE, MESSAGES_UNAVAILABLE
from .schemas import SendMessageRequest, parse_payload

logger = get_logger(__name__)

router = APIRouter(prefix="/api/messages", tags=["messages"], dependencies=[Depends(session_guard)])


@router.get("/between/{user_id1}/{user_id2}")
def get_conversation(user_id1: str, user_id2: str, storage: Storage = Depends(get_storage)) -> List[Dict[str, Any]]:
    """Messages exchanged between two users in either direction, oldest first"""
    try:
        messages = storage.get_messages_between_users(user_id1, user_id2)
    except Exception:
        logger.exception("Failed to load conversation", user_id1=user_id1, user_id2=user_id2)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=MESSAGES_UNAVAILABLE)
    return [m.to_json() for m in messages]


@router.get("/{user_id}")
def get_user_messages(user_id: str, storage: Storage = Depends(get_storage)) -> List[Dict[str, Any]]:
    """Every message the user sent or received, oldest first"""
    try:
        messages = storage.get_user_messages(user_id)
    except Exception:
        logger.exception("Failed to load messages", user_id=user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=MESSAGES_UNAVAILABLE)
    return [m.to_json() for m in messages]


@router.post("")
async def send_message(request: Request, storage: Storage = Depends(get_storage)) -> Dict[str, Any]:
    """
    Store a message.

    Request: {"senderId": "...", "receiverId": "...", "content": "..."}

    Sender and receiver ids are not checked against the user list.
    """
    payload = await parse_payload(request, SendMessageRequest, INVALID_MESSAGE)
    try:
        message = storage.create_message(payload.sender_id, payload.receiver_id, payload.content)
    except Exception:
        logger.exception("Failed to store message", sender_id=payload.sender_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_MESSAGE)
    return message.to_json()
