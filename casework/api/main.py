"""FastAPI application entrypoint for Casework."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

from casework.api.middleware.logging import LoggingMiddleware
from casework.api.routes import admin, ai, analytics, auth, complaints, meetings, notifications, scenarios, users
from casework.core.config import Settings, get_settings
from casework.core.database import DatabaseManager
from casework.core.exceptions import ApplicationError
from casework.models import UserCreate, UserRole
from casework.services.annotation import AnnotationService
from casework.storage import MemoryStorage, MongoStorage
from casework.storage.base import Storage
from casework.utils.llm import LLMClient
from casework.utils.monitoring import render_metrics

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

DEFAULT_USERS = [
    UserCreate(
        username="sarah.johnson",
        password="password123",
        email="sarah.johnson@company.com",
        phone="+1234567890",
        name="Sarah Johnson",
        role=UserRole.HR_MANAGER,
        department="Human Resources",
    ),
]

VALIDATION_MESSAGES = {
    "users": "Invalid user data",
    "complaints": "Invalid complaint data",
    "meetings": "Invalid meeting data",
    "scenarios": "Invalid scenario data",
    "notifications": "Invalid notification data",
    "auth": "Invalid account data",
}


async def seed_default_users(storage: Storage) -> None:
    """Create the bootstrap HR manager unless its phone is already registered."""

    for account in DEFAULT_USERS:
        if await storage.get_user_by_phone(account.phone) is None:
            user = await storage.create_user(account)
            logger.info("Seeded default user %s (%s)", user.username, user.role)


def create_app(
    config: Optional[Settings] = None,
    *,
    storage: Optional[Storage] = None,
    annotator: Optional[AnnotationService] = None,
) -> FastAPI:
    """Build the API. Anything not injected is constructed from ``config`` at startup."""

    config = config or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize shared resources on startup and tear them down on shutdown."""

        database_manager: Optional[DatabaseManager] = None
        if getattr(app.state, "storage", None) is None:
            if config.STORAGE_BACKEND == "mongodb":
                database_manager = DatabaseManager(config)
                await database_manager.initialize()
                app.state.storage = MongoStorage(database_manager.database)
            else:
                app.state.storage = MemoryStorage()
            logger.info("Record store ready (%s)", config.STORAGE_BACKEND)

        if config.SEED_DEFAULT_USERS:
            await seed_default_users(app.state.storage)

        try:
            yield
        finally:
            if database_manager is not None:
                await database_manager.close()

    app = FastAPI(
        title=config.API_TITLE,
        version=config.API_VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.storage = storage
    app.state.annotator = annotator or AnnotationService(
        LLMClient(config),
        timeout_seconds=config.LLM_TIMEOUT_SECONDS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routers
    for module in (users, complaints, meetings, scenarios, ai, auth, admin, analytics, notifications):
        app.include_router(module.router, prefix=API_PREFIX)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        payload, content_type = render_metrics()
        return Response(content=payload, media_type=content_type)

    @app.exception_handler(ApplicationError)
    async def handle_application_error(request: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(status_code=exc.status_code, content={"message": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _validation_message(request.url.path)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    return app


def _validation_message(path: str) -> str:
    segments = path[len(API_PREFIX) :].strip("/").split("/") if path.startswith(API_PREFIX) else []
    if segments and segments[0] in VALIDATION_MESSAGES:
        return VALIDATION_MESSAGES[segments[0]]
    return "Invalid request data"


app = create_app()
