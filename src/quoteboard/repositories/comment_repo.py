"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quoteboard.models import Comment

from .base import store_call

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, comment_id: str) -> Comment | None:
        with store_call("get comment"):
            return self.session.get(Comment, comment_id)

    def list_approved(self, quote_id: str) -> list[Comment]:
        """Return approved comments on a quote, oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.quote_id == quote_id, Comment.is_approved.is_(True))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        with store_call("list comments"):
            return list(self.session.execute(stmt).scalars())

    def list_pending(self) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.is_approved.is_(False))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        with store_call("list pending comments"):
            return list(self.session.execute(stmt).scalars())

    def count(self, *, quote_id: str | None = None, approved: bool = True) -> int:
        stmt = select(func.count()).select_from(Comment).where(Comment.is_approved.is_(approved))
        if quote_id is not None:
            stmt = stmt.where(Comment.quote_id == quote_id)
        with store_call("count comments"):
            return int(self.session.execute(stmt).scalar() or 0)

    def create(self, *, quote_id: str, author_id: str, content: str) -> Comment:
        """Insert a pending comment."""
        comment = Comment(
            quote_id=quote_id,
            author_id=author_id,
            content=content,
            is_approved=False,
        )
        with store_call("create comment"):
            self.session.add(comment)
            self.session.flush()
        return comment
