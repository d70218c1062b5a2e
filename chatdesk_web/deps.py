"""
FastAPI dependencies: injected store/session objects and session checks.

The store, session registry and settings are attached to ``app.state`` by
``create_app``; routes reach them only through these dependencies.

Session enforcement is opt-in (``auth.require_session``). When it is off,
``session_guard`` and ``admin_guard`` let every request through, matching
the unauthenticated API the web client was built against.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from chatdesk.auth.sessions import SessionStore
from chatdesk.core.config import Settings
from chatdesk.models import User
from chatdesk.storage.base import Storage

from .errors import ADMIN_ONLY, SESSION_INVALID

SESSION_COOKIE = "chatdesk_session"


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def extract_token(request: Request) -> Optional[str]:
    """Session token from ``Authorization: Bearer`` or the session cookie"""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    return None


async def require_login(
    request: Request,
    sessions: SessionStore = Depends(get_sessions),
) -> User:
    """Raise 401 unless the request carries a live session token"""
    user = sessions.validate_session(extract_token(request))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=SESSION_INVALID,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def session_guard(
    request: Request,
    settings: Settings = Depends(get_settings),
    sessions: SessionStore = Depends(get_sessions),
) -> Optional[User]:
    if not settings.auth.require_session:
        return None
    return await require_login(request, sessions)


async def admin_guard(
    request: Request,
    settings: Settings = Depends(get_settings),
    current_user: Optional[User] = Depends(session_guard),
) -> Optional[User]:
    if settings.auth.require_session and not (current_user and current_user.is_admin):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ADMIN_ONLY)
    return current_user
