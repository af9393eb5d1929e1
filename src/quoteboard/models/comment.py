# src/quoteboard/models/comment.py
"""Comments left on quotes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quoteboard.db.session import Base
from quoteboard.db.time import utcnow

from .author import Author
from .ids import new_id


class Comment(Base):
    """Reader comment; hidden until a moderator approves it."""

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_quote_id", "quote_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    quote_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("quote.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("author.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_approved: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    author: Mapped[Author] = relationship("Author", lazy="joined")
