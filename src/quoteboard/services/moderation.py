# src/quoteboard/services/moderation.py
"""Moderation actions on quotes, comments and authors."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from quoteboard.core.errors import AuthorNotFoundError, CommentNotFoundError, QuoteNotFoundError
from quoteboard.models import Author, Comment, Quote
from quoteboard.repositories.author_repo import AuthorRepository
from quoteboard.repositories.base import unit_of_work
from quoteboard.repositories.comment_repo import CommentRepository
from quoteboard.repositories.quote_repo import QuoteRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModerationTotals:
    """Counts shown on the moderation dashboard."""

    total_authors: int
    total_quotes: int
    total_comments: int
    pending_quotes: int
    pending_comments: int


class ModerationService:
    """State transitions driven by moderators."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.quotes = QuoteRepository(session)
        self.comments = CommentRepository(session)
        self.authors = AuthorRepository(session)

    def approve_quote(self, quote_id: str) -> Quote:
        """Make a pending quote visible in the feed."""
        quote = self._quote(quote_id)
        with unit_of_work(self.session):
            quote.is_approved = True
        logger.info("Quote %s approved", quote_id)
        return quote

    def reject_quote(self, quote_id: str) -> Quote:
        """Soft-delete a quote; the row stays but no read path returns it."""
        quote = self._quote(quote_id)
        with unit_of_work(self.session):
            quote.is_active = False
        logger.info("Quote %s rejected", quote_id)
        return quote

    def approve_comment(self, comment_id: str) -> Comment:
        comment = self.comments.get_by_id(comment_id)
        if comment is None:
            raise CommentNotFoundError(f"Comment {comment_id} not found")
        with unit_of_work(self.session):
            comment.is_approved = True
        logger.info("Comment %s approved", comment_id)
        return comment

    def toggle_author_active(self, author_id: str) -> Author:
        author = self.authors.get_by_id(author_id)
        if author is None:
            raise AuthorNotFoundError(f"Author {author_id} not found")
        with unit_of_work(self.session):
            author.is_active = not author.is_active
        logger.info("Author %s %s", author_id, "activated" if author.is_active else "deactivated")
        return author

    def pending_quotes(self) -> list[Quote]:
        return self.quotes.list_pending()

    def pending_comments(self) -> list[Comment]:
        return self.comments.list_pending()

    def totals(self) -> ModerationTotals:
        return ModerationTotals(
            total_authors=self.authors.count(),
            total_quotes=self.quotes.count(approved=True),
            total_comments=self.comments.count(approved=True),
            pending_quotes=self.quotes.count(approved=False),
            pending_comments=self.comments.count(approved=False),
        )

    def _quote(self, quote_id: str) -> Quote:
        quote = self.quotes.get_by_id(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote
