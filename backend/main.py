"""
Lumina FastAPI application.

Entry point for the API server the canvas client talks to.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import settings
from backend.routes import editor as editor_routes
from backend.routes import suggestions as suggestion_routes
from backend.services.editor_session import editor_session

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Startup: load the saved page (or the default document).
    Shutdown: nothing is saved implicitly; saving is an explicit user action.
    """
    await editor_session.load()
    logger.info(
        "Editor session ready: env=%s key=%s suggestions=%s",
        settings.ENVIRONMENT,
        editor_session.storage_key,
        "on" if editor_session.suggestions else "off",
    )
    yield


app = FastAPI(
    title="Lumina Builder",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(editor_routes.router)
app.include_router(suggestion_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
