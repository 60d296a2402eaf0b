"""Opal Tools API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map OpalToolError -> structured JSON responses
    - Shared outbound HTTP client opened on startup and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from opal_tools.api.error_handlers import register_error_handlers
from opal_tools.api.routes import discovery, health, tools
from opal_tools.config import get_settings
from opal_tools.infrastructure.http_client import close_http_client, init_http_client
from opal_tools.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.service_name)
    init_http_client(settings.http_timeout_seconds)
    logger.info("Opal tools API started")
    yield
    await close_http_client()
    logger.info("Opal tools API shutting down")


app = FastAPI(
    title="Opal Optimizely Tools", version=get_settings().service_version,
    lifespan=lifespan,
)

register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(discovery.router)
app.include_router(tools.router)
