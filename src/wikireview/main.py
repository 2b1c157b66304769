# src/wikireview/main.py
"""Main entry point for the WikiReview application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from wikireview.api.errors import register_exception_handlers
from wikireview.api.v1 import (
    auth_router,
    comments_router,
    pages_router,
    ratings_router,
)
from wikireview.core.settings import settings
from wikireview.db.session import database
from wikireview.services.mediawiki import get_mediawiki_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="WikiReview API",
    description="Accounts, threaded comments, votes and ratings layered over a wiki",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(ratings_router, prefix="/api/v1")
app.include_router(pages_router, prefix="/api/v1")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_mediawiki_client().close()
    database.dispose()
    logger.info("%s shut down", settings.app_name)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Accounts, threaded comments, votes and ratings layered over a wiki",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("wikireview.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
