# src/quoteboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .author import AuthorRef, AuthorStatsResponse
from .comment import CommentCreate, CommentResponse
from .engagement import (
    ImpressionResponse,
    LikeStateResponse,
    ShareCreate,
    ShareResponse,
    ViewResponse,
)
from .feed import FeedPageResponse
from .moderation import ModerationQueueResponse, ModerationTotalsResponse
from .quote import QuoteCreate, QuoteResponse, ShareLinksResponse

__all__ = [
    "AuthorRef", "AuthorStatsResponse",
    "CommentCreate", "CommentResponse",
    "FeedPageResponse",
    "ImpressionResponse", "LikeStateResponse", "ShareCreate", "ShareResponse", "ViewResponse",
    "ModerationQueueResponse", "ModerationTotalsResponse",
    "QuoteCreate", "QuoteResponse", "ShareLinksResponse",
]
