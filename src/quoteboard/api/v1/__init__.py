# src/quoteboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    authors_router,
    engagement_router,
    feed_router,
    moderation_router,
    quotes_router,
    system_router,
)

__all__ = [
    "feed_router",
    "quotes_router",
    "engagement_router",
    "authors_router",
    "moderation_router",
    "system_router",
]
