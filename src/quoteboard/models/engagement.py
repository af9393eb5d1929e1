# src/quoteboard/models/engagement.py
"""Models capturing reactions, impressions and shares on quotes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from quoteboard.db.session import Base
from quoteboard.db.time import utcnow

from .ids import new_id


class Reaction(Base):
    """Like left by an authenticated author on a quote.

    The row's existence is the like state; there is no cached flag.
    """

    __tablename__ = "reaction"
    __table_args__ = (
        # One like per author and quote.
        UniqueConstraint("quote_id", "author_id", name="uq_reaction_quote_author"),
        Index("ix_reaction_quote_id", "quote_id"),
    )

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
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class QuoteView(Base):
    """One registered impression. Views are not deduplicated per viewer."""

    __tablename__ = "quote_view"
    __table_args__ = (Index("ix_quote_view_quote_id", "quote_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    quote_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("quote.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("author.id", ondelete="SET NULL"),
        nullable=True,
    )
    viewer_ip: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class QuoteShare(Base):
    """One registered share of a quote to an external platform."""

    __tablename__ = "quote_share"
    __table_args__ = (Index("ix_quote_share_quote_id", "quote_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    quote_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("quote.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("author.id", ondelete="SET NULL"),
        nullable=True,
    )
    platform: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
