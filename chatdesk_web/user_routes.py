"""
User directory routes.

Prefix: /api/users
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from chatdesk.storage.base import Storage
from chatdesk.utils.logger import get_logger

from .deps import get_storage, session_guard
from .errors import USER_NOT_FOUND, USER_UNAVAILABLE, USERS_UNAVAILABLE

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(session_guard)])


@router.get("")
def list_users(storage: Storage = Depends(get_storage)) -> List[Dict[str, Any]]:
    """All non-admin users, in creation order"""
    try:
        users = storage.get_all_users()
    except Exception:
        logger.exception("Failed to list users")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=USERS_UNAVAILABLE)
    return [u.to_json() for u in users if not u.is_admin]


@router.get("/{user_id}")
def get_user(user_id: str, storage: Storage = Depends(get_storage)) -> Dict[str, Any]:
    try:
        user = storage.get_user(user_id)
    except Exception:
        logger.exception("Failed to load user", user_id=user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=USER_UNAVAILABLE)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return user.to_json()
