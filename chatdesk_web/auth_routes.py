"""
Password-only authentication routes.

Prefix: /api/auth

A user is identified by password alone, so signup refuses a password that
another user already has. Both login and signup return the full user record
plus a session token; the token is only checked by routes when
``auth.require_session`` is enabled.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from chatdesk.auth.sessions import SessionStore
from chatdesk.core.config import Settings
from chatdesk.models import User
from chatdesk.storage.base import Storage
from chatdesk.utils.exceptions import PasswordTakenError
from chatdesk.utils.logger import get_logger

from .deps import SESSION_COOKIE, extract_token, get_sessions, get_settings, get_storage, require_login
from .errors import INVALID_DATA, INVALID_PASSWORD, PASSWORD_TAKEN
from .schemas import LoginRequest, SignupRequest, parse_payload

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=settings.auth.session_expiry_hours * 60 * 60,
        httponly=True,
        secure=settings.app.environment.lower() == "production",
        samesite="lax",
    )


def _auth_response(user: User, sessions: SessionStore, settings: Settings) -> JSONResponse:
    token = sessions.create_session(user.id)
    response = JSONResponse(content={"user": user.to_json(), "token": token})
    _set_session_cookie(response, token, settings)
    return response


def _create_user(storage: Storage, settings: Settings, payload: SignupRequest) -> User:
    if settings.auth.atomic_signup:
        return storage.create_user_if_password_free(payload.name, payload.password)
    # Check-then-create: two concurrent signups may both pass the check
    existing = storage.get_user_by_password(payload.password)
    if existing:
        raise PasswordTakenError(user_id=existing.id)
    return storage.create_user(payload.name, payload.password)


@router.post("/login")
async def login(
    request: Request,
    storage: Storage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    Log in with a password.

    Request: {"password": "..."}
    Response: {"user": {...}, "token": "..."}
    """
    payload = await parse_payload(request, LoginRequest, INVALID_DATA)
    try:
        user = storage.get_user_by_password(payload.password)
    except Exception:
        logger.exception("Login lookup failed")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_DATA)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_PASSWORD)
    logger.info("User logged in", user_id=user.id, is_admin=user.is_admin)
    return _auth_response(user, sessions, settings)


@router.post("/signup")
async def signup(
    request: Request,
    storage: Storage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    Register a non-admin user.

    Request: {"name": "...", "password": "..."}
    Response: same shape as /login.
    """
    payload = await parse_payload(request, SignupRequest, INVALID_DATA)

    try:
        user = _create_user(storage, settings, payload)
    except PasswordTakenError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=PASSWORD_TAKEN)
    except Exception:
        logger.exception("Signup failed")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_DATA)

    return _auth_response(user, sessions, settings)


@router.post("/logout")
async def logout(
    request: Request,
    sessions: SessionStore = Depends(get_sessions),
) -> JSONResponse:
    """Revoke the caller's session token, if any"""
    sessions.logout(extract_token(request))
    response = JSONResponse({"status": "success"})
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/me")
async def me(current_user: User = Depends(require_login)) -> Dict[str, Any]:
    """Return the user bound to the session token"""
    return current_user.to_json()
