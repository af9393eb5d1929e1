"""Data access helpers for author profiles."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quoteboard.models import Author, Quote

from .base import store_call

__all__ = ["AuthorRepository"]


class AuthorRepository:
    """Thin wrapper around database access for authors."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, author_id: str) -> Author | None:
        with store_call("get author"):
            return self.session.get(Author, author_id)

    def get_by_account(self, account_id: str) -> Author | None:
        """Return the author profile linked to a login account."""
        with store_call("get author by account"):
            result = self.session.execute(
                select(Author).where(Author.account_id == account_id)
            )
            return result.scalars().first()

    def count(self) -> int:
        with store_call("count authors"):
            return int(self.session.execute(select(func.count()).select_from(Author)).scalar() or 0)

    def approved_quote_totals(self, author_id: str) -> tuple[list[str], int, int]:
        """Return approved quote ids, summed views and summed shares for an author."""
        stmt = select(Quote.id, Quote.views_count, Quote.shares_count).where(
            Quote.author_id == author_id,
            Quote.is_approved.is_(True),
        )
        with store_call("author totals"):
            rows = self.session.execute(stmt).all()
        quote_ids = [row.id for row in rows]
        total_views = sum(row.views_count or 0 for row in rows)
        total_shares = sum(row.shares_count or 0 for row in rows)
        return quote_ids, total_views, total_shares

    def list_active(self) -> list[Author]:
        """Return active authors, newest profile first."""
        stmt = (
            select(Author)
            .where(Author.is_active.is_(True))
            .order_by(Author.created_at.desc(), Author.id.asc())
        )
        with store_call("list authors"):
            return list(self.session.execute(stmt).scalars())

    def visible_quote_counts(self, author_ids: list[str]) -> dict[str, int]:
        """Return the number of approved, active quotes per author id."""
        if not author_ids:
            return {}
        stmt = (
            select(Quote.author_id, func.count(Quote.id))
            .where(
                Quote.author_id.in_(author_ids),
                Quote.is_approved.is_(True),
                Quote.is_active.is_(True),
            )
            .group_by(Quote.author_id)
        )
        with store_call("count author quotes"):
            rows = self.session.execute(stmt).all()
        return {author_id: int(count) for author_id, count in rows}
