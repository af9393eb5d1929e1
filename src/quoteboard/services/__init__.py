# src/quoteboard/services/__init__.py
"""Business logic services for the Quoteboard application."""

from .comments import CommentService
from .engagement import EngagementStore, LikeResult
from .feed import FeedAssembler, FeedPage, FeedSession
from .moderation import ModerationService
from .quotes import QuoteService
from .view_tracker import ViewTracker, ViewTrackerRegistry

__all__ = [
    "CommentService",
    "EngagementStore", "LikeResult",
    "FeedAssembler", "FeedPage", "FeedSession",
    "ModerationService",
    "QuoteService",
    "ViewTracker", "ViewTrackerRegistry",
]
