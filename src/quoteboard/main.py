# src/quoteboard/main.py
"""Main entry point for the Quoteboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from quoteboard.api.v1 import (
    authors_router,
    engagement_router,
    feed_router,
    moderation_router,
    quotes_router,
    system_router,
)
from quoteboard.api.v1.dependencies import view_tracker_registry
from quoteboard.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Quoteboard API",
    description="Quote-sharing feed with permalinks, search and engagement counters",
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

# Include API routers
app.include_router(feed_router, prefix="/api/v1")
app.include_router(quotes_router, prefix="/api/v1")
app.include_router(engagement_router, prefix="/api/v1")
app.include_router(authors_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    pending = len(view_tracker_registry)
    await view_tracker_registry.shutdown()
    if pending:
        logger.info("Cancelled %d pending impressions on shutdown", pending)


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
        "description": "Quote-sharing feed with permalinks, search and engagement counters",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quoteboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
