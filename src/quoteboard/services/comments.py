# src/quoteboard/services/comments.py
"""Comment submission and listing."""

from __future__ import annotations

from typing import Final

from sqlalchemy.orm import Session

from quoteboard.core.errors import QuoteNotFoundError
from quoteboard.models import Comment
from quoteboard.repositories.base import unit_of_work
from quoteboard.repositories.comment_repo import CommentRepository
from quoteboard.repositories.quote_repo import QuoteRepository

from .viewer import AuthenticatedViewer

MAX_COMMENT_LENGTH: Final[int] = 500


class CommentService:
    """Comments on visible quotes. New comments wait for moderation."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.comments = CommentRepository(session)
        self.quotes = QuoteRepository(session)

    def list_approved(self, quote_id: str) -> list[Comment]:
        self._require_visible(quote_id)
        return self.comments.list_approved(quote_id)

    def count_approved(self, quote_id: str) -> int:
        return self.comments.count(quote_id=quote_id, approved=True)

    def submit(self, quote_id: str, viewer: AuthenticatedViewer, content: str) -> Comment:
        """Store a pending comment.

        Raises:
            ValueError: If the trimmed content is empty or too long.
            QuoteNotFoundError: If the quote is not visible.
        """
        text = content.strip()
        if not text:
            raise ValueError("Comment cannot be empty")
        if len(text) > MAX_COMMENT_LENGTH:
            raise ValueError(f"Comment must have at most {MAX_COMMENT_LENGTH} characters")
        self._require_visible(quote_id)
        with unit_of_work(self.session):
            comment = self.comments.create(
                quote_id=quote_id,
                author_id=viewer.author_id,
                content=text,
            )
        return comment

    def _require_visible(self, quote_id: str) -> None:
        if self.quotes.get_visible(quote_id) is None:
            raise QuoteNotFoundError(quote_id)
