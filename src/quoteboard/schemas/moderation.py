"""Moderation Pydantic schemas."""

from pydantic import BaseModel

from .comment import CommentResponse
from .quote import QuoteResponse


class ModerationTotalsResponse(BaseModel):
    total_authors: int
    total_quotes: int
    total_comments: int
    pending_quotes: int
    pending_comments: int


class ModerationQueueResponse(BaseModel):
    """Items waiting for a moderator, oldest first."""

    quotes: list[QuoteResponse]
    comments: list[CommentResponse]
    totals: ModerationTotalsResponse
