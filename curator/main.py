"""Curator API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CuratorError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup, shared clients closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from curator.api.dependencies import close_clients
from curator.api.error_handlers import register_error_handlers
from curator.api.routes import (
    analyze,
    auth,
    chat,
    contact,
    exhibitions,
    generate,
    health,
    notices,
    notifications,
)
from curator.config import get_settings
from curator.infrastructure.database import close_db, init_db
from curator.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Curator API started")
    yield
    logger.info("Curator API shutting down")
    await close_clients()
    await close_db()


app = FastAPI(title="Curator API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(generate.router)
app.include_router(analyze.router)
app.include_router(exhibitions.router)
app.include_router(auth.router)
app.include_router(contact.router)
app.include_router(notices.router)
app.include_router(notifications.router)

register_error_handlers(app)
