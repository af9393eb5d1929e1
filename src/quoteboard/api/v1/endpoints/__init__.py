# src/quoteboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .authors import router as authors_router
from .engagement import router as engagement_router
from .feed import router as feed_router
from .moderation import router as moderation_router
from .quotes import router as quotes_router
from .system import router as system_router

__all__ = [
    "feed_router",
    "quotes_router",
    "engagement_router",
    "authors_router",
    "moderation_router",
    "system_router",
]
