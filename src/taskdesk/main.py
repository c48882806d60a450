"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskdesk.admin.router import router as admin_router
from taskdesk.client.demo import demo_profiles
from taskdesk.config import Settings, get_settings
from taskdesk.shared.correlation import CorrelationIdMiddleware
from taskdesk.shared.exceptions import ConflictError, NotFoundError
from taskdesk.shared.logging import get_logger, setup_logging
from taskdesk.stats.router import router as stats_router
from taskdesk.storage.memory import MemStorage, StorageProtocol
from taskdesk.storage.table import Clock, utcnow
from taskdesk.tasks.router import router as tasks_router
from taskdesk.users.router import router as users_router

logger = get_logger(__name__)


def seed_demo_users(storage: StorageProtocol) -> int:
    """Create the demo profiles that are not present yet. Returns how many were added.

    A profile is skipped when its uid or its email is already taken.
    """
    created = 0
    for profile in demo_profiles():
        if storage.get_user_by_uid(profile.uid) is not None:
            continue
        if storage.get_user_by_email(profile.email) is not None:
            logger.warning(
                "Demo email already in use, skipping",
                extra={"uid": profile.uid, "field": "email"},
            )
            continue
        storage.create_user(profile.model_dump())
        created += 1
    return created


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    settings: Settings = app.state.settings

    logger.info("Application starting", extra={"env": settings.app_env})

    if settings.seed_demo_users:
        created = seed_demo_users(app.state.storage)
        logger.info("Demo users seeded", extra={"created_count": created})

    yield

    logger.info("Application shutdown complete")


def create_app(
    storage: StorageProtocol | None = None,
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        storage: Backing store; a fresh in-memory store when omitted.
        settings: Application settings; read from the environment when omitted.
        clock: Source of server timestamps.
    """
    settings = settings or get_settings()
    clock = clock or utcnow

    app = FastAPI(
        title="TaskDesk API",
        description="Role-based task assignment for newsroom teams",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.storage = storage if storage is not None else MemStorage(clock)

    # Map domain exceptions to HTTP responses
    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(ConflictError)
    async def _conflict(_: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"message": exc.message, "field": exc.field},
        )

    # Request validation (FastAPI/Pydantic) -> 400 with the list of violations
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append(
                {
                    "field": field,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )
        logger.debug(
            "Request validation failed",
            extra={"path": request.url.path, "error_count": len(errors)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request data", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    app.add_middleware(CorrelationIdMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(users_router)
    app.include_router(tasks_router)
    app.include_router(admin_router)
    app.include_router(stats_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
