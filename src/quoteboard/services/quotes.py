# src/quoteboard/services/quotes.py
"""Quote submission, lookup and permalink resolution."""

from __future__ import annotations

from typing import Final

from sqlalchemy.orm import Session

from quoteboard.core.errors import QuoteNotFoundError
from quoteboard.models import Quote
from quoteboard.repositories.base import unit_of_work
from quoteboard.repositories.quote_repo import QuoteRepository

from . import short_code
from .viewer import AuthenticatedViewer

MIN_QUOTE_LENGTH: Final[int] = 10
MAX_QUOTE_LENGTH: Final[int] = 5000


class QuoteService:
    """Read and write paths for quotes outside of the feed."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = QuoteRepository(session)

    def submit(self, viewer: AuthenticatedViewer, content: str, notes: str | None = None) -> Quote:
        """Store a new quote pending moderation.

        Raises:
            ValueError: If the trimmed content is shorter than 10 or longer
                than 5000 characters.
        """
        text = content.strip()
        if len(text) < MIN_QUOTE_LENGTH:
            raise ValueError(f"Quote must have at least {MIN_QUOTE_LENGTH} characters")
        if len(text) > MAX_QUOTE_LENGTH:
            raise ValueError(f"Quote must have at most {MAX_QUOTE_LENGTH} characters")
        cleaned_notes = notes.strip() if notes else None
        with unit_of_work(self.session):
            quote = self.repo.create(
                author_id=viewer.author_id,
                content=text,
                notes=cleaned_notes or None,
            )
        return quote

    def get_visible(self, quote_id: str) -> Quote:
        quote = self.repo.get_visible(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    def resolve_code(self, code: str) -> Quote | None:
        """Return the visible quote addressed by a public code, if any."""
        if not short_code.is_valid_code(code):
            return None
        return short_code.resolve(code, self.repo.list_for_code_scan())

    def popular(self, limit: int) -> list[Quote]:
        return self.repo.list_popular(limit)
