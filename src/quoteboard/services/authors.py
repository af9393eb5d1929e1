# src/quoteboard/services/authors.py
"""Author directory, public profiles and self-service profile edits."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from quoteboard.core.errors import AuthorNotFoundError, ProfileNotFoundError
from quoteboard.models import Author, Quote
from quoteboard.repositories.author_repo import AuthorRepository
from quoteboard.repositories.base import unit_of_work
from quoteboard.repositories.engagement_repo import EngagementRepository
from quoteboard.repositories.quote_repo import QuoteRepository

from .viewer import AuthenticatedViewer


@dataclass(frozen=True)
class AuthorStats:
    """Aggregates over an author's approved quotes."""

    total_quotes: int
    total_views: int
    total_shares: int
    total_reactions: int


@dataclass(frozen=True)
class AuthorSummary:
    """Directory entry: an active author and the number of visible quotes."""

    author: Author
    quotes_count: int


def author_stats(session: Session, author_id: str) -> AuthorStats:
    """Return totals for an author.

    ``total_reactions`` counts reaction rows only; anonymous likes are device
    local and therefore not attributable.
    """
    authors = AuthorRepository(session)
    if authors.get_by_id(author_id) is None:
        raise AuthorNotFoundError(f"Author {author_id} not found")
    quote_ids, total_views, total_shares = authors.approved_quote_totals(author_id)
    return AuthorStats(
        total_quotes=len(quote_ids),
        total_views=total_views,
        total_shares=total_shares,
        total_reactions=EngagementRepository(session).count_reactions(quote_ids),
    )


class AuthorService:
    """Public author reads and the logged-in author's own profile."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.authors = AuthorRepository(session)
        self.quotes = QuoteRepository(session)

    def directory(self) -> list[AuthorSummary]:
        """List active authors, newest first, with their visible quote counts."""
        authors = self.authors.list_active()
        counts = self.authors.visible_quote_counts([author.id for author in authors])
        return [AuthorSummary(author=author, quotes_count=counts.get(author.id, 0)) for author in authors]

    def get_active(self, author_id: str) -> Author:
        """Return a public profile.

        Raises:
            AuthorNotFoundError: If the author is missing or deactivated.
        """
        author = self.authors.get_by_id(author_id)
        if author is None or not author.is_active:
            raise AuthorNotFoundError(f"Author {author_id} not found")
        return author

    def public_quotes(self, author_id: str) -> list[Quote]:
        self.get_active(author_id)
        return self.quotes.list_visible_by_author(author_id)

    def own_profile(self, viewer: AuthenticatedViewer) -> Author:
        """Return the viewer's profile, whether or not it is active."""
        author = self.authors.get_by_id(viewer.author_id)
        if author is None:
            raise ProfileNotFoundError(viewer.account_id or viewer.author_id)
        return author

    def own_quotes(self, viewer: AuthenticatedViewer) -> list[Quote]:
        """Return all of the viewer's quotes, including pending ones."""
        return self.quotes.list_by_author(viewer.author_id)

    def update_profile(
        self,
        viewer: AuthenticatedViewer,
        *,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
    ) -> Author:
        """Apply the given fields to the viewer's own profile.

        ``None`` leaves a field unchanged. A blank bio or avatar URL clears it.

        Raises:
            ValueError: If the trimmed name is empty.
        """
        cleaned_name = name.strip() if name is not None else None
        if cleaned_name == "":
            raise ValueError("Name must not be empty")
        author = self.own_profile(viewer)
        with unit_of_work(self.session):
            if cleaned_name is not None:
                author.name = cleaned_name
            if bio is not None:
                author.bio = bio.strip() or None
            if avatar_url is not None:
                author.avatar_url = avatar_url.strip() or None
        return author
