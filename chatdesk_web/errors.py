"""
User-facing error messages and the app-wide exception handlers.

Every error response body has the shape ``{"message": "..."}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatdesk.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_DATA = "Geçersiz veri"
INVALID_PASSWORD = "Geçersiz şifre"
PASSWORD_TAKEN = "Bu şifre zaten kullanılıyor"
USERS_UNAVAILABLE = "Kullanıcılar alınamadı"
USER_NOT_FOUND = "Kullanıcı bulunamadı"
USER_UNAVAILABLE = "Kullanıcı alınamadı"
MESSAGES_UNAVAILABLE = "Mesajlar alınamadı"
INVALID_MESSAGE = "Geçersiz mesaj verisi"
ADMIN_STATUS_UNAVAILABLE = "Admin durumu alınamadı"
INVALID_STATUS = "Geçersiz durum verisi"
SESSION_INVALID = "Oturum geçersiz"
ADMIN_ONLY = "Yetkisiz işlem"
INTERNAL_ERROR = "Internal Server Error"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": INVALID_DATA},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: answer with JSON instead of dropping the connection"""
    logger.opt(exception=exc).error(
        "Unhandled error while serving request",
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
