"""FastAPI application factory for the chatdesk API"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatdesk import __version__
from chatdesk.auth.sessions import SessionStore
from chatdesk.core.config import Settings
from chatdesk.storage.base import Storage
from chatdesk.storage.memory import MemStorage
from chatdesk.utils.logger import get_logger

from .admin_routes import router as admin_router
from .auth_routes import router as auth_router
from .errors import register_exception_handlers
from .message_routes import router as message_router
from .request_logging import RequestLogMiddlewareASGI
from .user_routes import router as user_router

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Build the API around an explicitly constructed store.

    When ``storage`` is omitted a fresh MemStorage is seeded from
    ``settings.admin``. The store is closed when the app shuts down.
    """
    settings = settings or Settings()
    if storage is None:
        storage = MemStorage(admin_name=settings.admin.name, admin_password=settings.admin.password)
    if sessions is None:
        sessions = SessionStore(storage, expiry_hours=settings.auth.session_expiry_hours)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Chat API started",
            environment=settings.app.environment,
            require_session=settings.auth.require_session,
            atomic_signup=settings.auth.atomic_signup,
        )
        yield
        logger.info("Shutdown event triggered - closing storage")
        sessions.clear()
        storage.close()

    app = FastAPI(
        title="chatdesk",
        description="Direct messaging between users and a single admin",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.sessions = sessions

    is_production = settings.app.environment.lower() == "production"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins if is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddlewareASGI)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(message_router)
    app.include_router(admin_router)

    @app.get("/api/health")
    async def health():
        """Readiness endpoint for orchestration tooling."""
        return {"status": "ok"}

    return app
