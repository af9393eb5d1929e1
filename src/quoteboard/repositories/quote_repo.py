"""Data access helpers for working with quotes."""
from __future__ import annotations

from typing import Literal

from sqlalchemy import ColumnElement, and_, case, func, select, update
from sqlalchemy.orm import Session

from quoteboard.models import Author, Quote

from .base import store_call

__all__ = ["CounterName", "QuoteRepository"]

CounterName = Literal["views_count", "likes_count", "shares_count"]


def visible_filter() -> ColumnElement[bool]:
    """Return the predicate every public read path applies."""
    return and_(Quote.is_approved.is_(True), Quote.is_active.is_(True))


class QuoteRepository:
    """Thin wrapper around database access for quote entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, quote_id: str) -> Quote | None:
        """Return a quote by identifier regardless of visibility."""
        with store_call("get quote"):
            return self.session.get(Quote, quote_id)

    def get_visible(self, quote_id: str) -> Quote | None:
        """Return a quote only if it is approved and active."""
        with store_call("get visible quote"):
            result = self.session.execute(
                select(Quote).where(Quote.id == quote_id, visible_filter())
            )
            return result.scalars().first()

    def list_visible(self, *, offset: int, limit: int) -> list[Quote]:
        """Return one page of visible quotes, newest first."""
        stmt = self._visible_page(offset=offset, limit=limit)
        with store_call("list quotes"):
            return list(self.session.execute(stmt).scalars())

    def search_content(self, term: str, *, offset: int, limit: int) -> list[Quote]:
        """Return one page of visible quotes whose content contains ``term``."""
        stmt = self._visible_page(offset=offset, limit=limit).where(
            Quote.content.icontains(term, autoescape=True)
        )
        with store_call("search quote content"):
            return list(self.session.execute(stmt).scalars())

    def search_author_name(self, term: str, *, offset: int, limit: int) -> list[Quote]:
        """Return one page of visible quotes whose author name contains ``term``."""
        stmt = (
            self._visible_page(offset=offset, limit=limit)
            .join(Author, Author.id == Quote.author_id)
            .where(Author.name.icontains(term, autoescape=True))
        )
        with store_call("search author names"):
            return list(self.session.execute(stmt).scalars())

    def list_for_code_scan(self) -> list[Quote]:
        """Return every visible quote in the fixed permalink scan order.

        Oldest first, then id, so that an existing permalink keeps resolving to
        the same quote when a newer quote collides with its code.
        """
        stmt = (
            select(Quote)
            .where(visible_filter())
            .order_by(Quote.created_at.asc(), Quote.id.asc())
        )
        with store_call("scan quotes"):
            return list(self.session.execute(stmt).scalars())

    def list_popular(self, limit: int) -> list[Quote]:
        """Return the most viewed visible quotes."""
        stmt = (
            select(Quote)
            .where(visible_filter())
            .order_by(Quote.views_count.desc(), Quote.created_at.desc(), Quote.id.asc())
            .limit(limit)
        )
        with store_call("list popular quotes"):
            return list(self.session.execute(stmt).scalars())

    def list_visible_by_author(self, author_id: str) -> list[Quote]:
        """Return an author's visible quotes, newest first."""
        stmt = (
            select(Quote)
            .where(Quote.author_id == author_id, visible_filter())
            .order_by(Quote.created_at.desc(), Quote.id.asc())
        )
        with store_call("list author quotes"):
            return list(self.session.execute(stmt).scalars())

    def list_by_author(self, author_id: str) -> list[Quote]:
        """Return every quote of an author, pending and rejected included."""
        stmt = (
            select(Quote)
            .where(Quote.author_id == author_id)
            .order_by(Quote.created_at.desc(), Quote.id.asc())
        )
        with store_call("list own quotes"):
            return list(self.session.execute(stmt).scalars())

    def list_pending(self) -> list[Quote]:
        """Return quotes awaiting moderation, oldest first."""
        stmt = (
            select(Quote)
            .where(Quote.is_approved.is_(False), Quote.is_active.is_(True))
            .order_by(Quote.created_at.asc(), Quote.id.asc())
        )
        with store_call("list pending quotes"):
            return list(self.session.execute(stmt).scalars())

    def create(self, *, author_id: str, content: str, notes: str | None = None) -> Quote:
        """Insert a new pending quote and return the persisted ORM instance."""
        quote = Quote(author_id=author_id, content=content, notes=notes, is_approved=False)
        with store_call("create quote"):
            self.session.add(quote)
            self.session.flush()
        return quote

    def add_to_counter(self, quote_id: str, counter: CounterName, delta: int) -> None:
        """Apply ``delta`` to a counter in a single UPDATE statement.

        The arithmetic happens in the store, so concurrent callers never
        overwrite each other's changes. Decrements are floored at zero.
        """
        column = getattr(Quote, counter)
        if delta >= 0:
            new_value = column + delta
        else:
            new_value = case((column + delta < 0, 0), else_=column + delta)
        stmt = (
            update(Quote)
            .where(Quote.id == quote_id)
            .values({counter: new_value})
            .execution_options(synchronize_session="fetch")
        )
        with store_call(f"update {counter}"):
            self.session.execute(stmt)

    def read_counter(self, quote_id: str, counter: CounterName) -> int:
        """Read a counter straight from the store, bypassing the identity map."""
        column = getattr(Quote, counter)
        with store_call(f"read {counter}"):
            value = self.session.execute(
                select(column).where(Quote.id == quote_id)
            ).scalar_one_or_none()
        return int(value or 0)

    def count(self, *, approved: bool) -> int:
        """Return the number of active quotes with the given approval state."""
        stmt = select(func.count()).select_from(Quote).where(
            Quote.is_approved.is_(approved),
            Quote.is_active.is_(True),
        )
        with store_call("count quotes"):
            return int(self.session.execute(stmt).scalar() or 0)

    @staticmethod
    def _visible_page(*, offset: int, limit: int):  # type: ignore[no-untyped-def]
        return (
            select(Quote)
            .where(visible_filter())
            .order_by(Quote.created_at.desc(), Quote.id.asc())
            .offset(offset)
            .limit(limit)
        )
