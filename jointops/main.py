"""Jointops API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jointops.core.config import settings
from jointops.core.exceptions import register_exception_handlers
from jointops.db.base import create_all, dispose_engine, get_engine
from jointops.middleware.request_log import RequestLogMiddleware
from jointops.schemas.common import HealthResponse

from jointops.routers.v1.assignments import router as assignments_v1_router
from jointops.routers.v1.dashboard import router as dashboard_v1_router
from jointops.routers.v1.events import router as events_v1_router
from jointops.routers.v1.ledger import router as ledger_v1_router
from jointops.routers.v1.reference import router as reference_v1_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.is_development and settings.database_url.startswith("sqlite"):
        # local dev convenience; real deployments migrate with alembic
        await create_all(get_engine())
        logger.info("SQLite schema ensured at %s", settings.database_url)
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(assignments_v1_router, prefix="/api/v1")
    app.include_router(dashboard_v1_router, prefix="/api/v1")
    app.include_router(ledger_v1_router, prefix="/api/v1")
    app.include_router(events_v1_router, prefix="/api/v1")
    app.include_router(reference_v1_router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
