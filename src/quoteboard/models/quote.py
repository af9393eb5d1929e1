# src/quoteboard/models/quote.py
"""SQLAlchemy model for quotes, the central content entity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quoteboard.db.session import Base
from quoteboard.db.time import utcnow

from .author import Author
from .ids import new_id


class Quote(Base):
    """Short text attributed to an author.

    Quotes are created pending (``is_approved`` false) and only reach the feed
    once approved while still active. Rejection clears ``is_active`` and keeps
    the row.
    """

    __tablename__ = "quote"
    __table_args__ = (
        CheckConstraint("views_count >= 0", name="ck_quote_views_count"),
        CheckConstraint("likes_count >= 0", name="ck_quote_likes_count"),
        CheckConstraint("shares_count >= 0", name="ck_quote_shares_count"),
        Index("ix_quote_visible_created", "is_approved", "is_active", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("author.id"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    # Counters only ever move through single UPDATE statements (see QuoteRepository).
    views_count: Mapped[int] = mapped_column(default=0, nullable=False)
    likes_count: Mapped[int] = mapped_column(default=0, nullable=False)
    shares_count: Mapped[int] = mapped_column(default=0, nullable=False)

    is_approved: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    author: Mapped[Author] = relationship("Author", lazy="joined")

    @property
    def is_visible(self) -> bool:
        """Return True when the quote may appear on any public read path."""
        return bool(self.is_approved and self.is_active)
