"""Users REST API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ApiError → {"error": message} responses
    - CORS configured from settings (not hardcoded)
    - The storage client is built in the lifespan, placed on app.state, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - An unreachable database at startup is logged, not fatal: the process
      keeps serving while entity routes retry the index build per request
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import groups, health, users
from app.config import get_settings
from app.core.entity_schemas import ENTITY_SCHEMAS
from app.core.errors import DatabaseError
from app.infrastructure.database import MongoStore
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = MongoStore.from_settings(settings)
    app.state.store = store
    try:
        await store.ensure_indexes(ENTITY_SCHEMAS)
        logger.info("MongoDB Connected")
    except DatabaseError as e:
        logger.error(f"MongoDB setup failed: {e.message}", extra={"error_code": e.code})
    logger.info("Users REST API started")
    yield
    store.close()
    app.state.store = None
    logger.info("Users REST API shutting down")


app = FastAPI(
    title="Users REST API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(groups.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
