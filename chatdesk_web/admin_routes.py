"""
Admin availability status.

Prefix: /api/admin

Everyone may read the status; updating it requires an admin session only
when ``auth.require_session`` is on.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from chatdesk.storage.base import Storage
from chatdesk.utils.logger import get_logger

from .deps import admin_guard, get_storage
from .errors import ADMIN_STATUS_UNAVAILABLE, INVALID_STATUS
from .schemas import AdminStatusUpdate, parse_payload

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/status")
def get_admin_status(storage: Storage = Depends(get_storage)) -> Dict[str, Any]:
    try:
        return storage.get_admin_status().to_json()
    except Exception:
        logger.exception("Failed to read admin status")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=ADMIN_STATUS_UNAVAILABLE)


@router.put("/status", dependencies=[Depends(admin_guard)])
async def update_admin_status(request: Request, storage: Storage = Depends(get_storage)) -> Dict[str, Any]:
    """
    Set the admin status.

    Request: {"status": "available" | "busy"}
    """
    payload = await parse_payload(request, AdminStatusUpdate, INVALID_STATUS)
    try:
        updated = storage.update_admin_status(**payload.model_dump(exclude_unset=True))
    except Exception:
        logger.exception("Failed to update admin status")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_STATUS)
    return updated.to_json()
