# src/quoteboard/services/feed.py
"""Feed assembly: searchable, deduplicated, paginated quote pages.

Searches run two independent queries (quote content and author name) with the
same offset and limit, then merge them. ``has_more`` for a search is true when
either source filled its page. That can over-report near the end of the
result set (one extra empty "load more"), but it never hides results; exact
pagination over the merged stream would need a server-side union or cursor
bookkeeping per source.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from quoteboard.models import Quote
from quoteboard.repositories.quote_repo import QuoteRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedPage:
    """One page of feed results."""

    items: list[Quote] = field(default_factory=list)
    has_more: bool = False


def normalize_term(search_term: str | None) -> str:
    """Return the effective search term; blank input means no search."""
    return (search_term or "").strip()


def _as_aware(moment: datetime) -> datetime:
    # SQLite hands back naive timestamps; they are stored as UTC.
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def merge_by_recency(*sources: Iterable[Quote]) -> list[Quote]:
    """Concatenate, drop repeated ids (first wins) and sort newest first.

    Equal timestamps are ordered by id ascending so repeated calls agree.
    """
    seen: set[str] = set()
    merged: list[Quote] = []
    for source in sources:
        for quote in source:
            if quote.id in seen:
                continue
            seen.add(quote.id)
            merged.append(quote)
    merged.sort(key=lambda quote: quote.id)
    merged.sort(key=lambda quote: _as_aware(quote.created_at), reverse=True)
    return merged


class FeedAssembler:
    """Build feed pages from the quote repository."""

    def __init__(self, repo: QuoteRepository) -> None:
        self.repo = repo

    def fetch_page(self, search_term: str | None, page: int, page_size: int) -> FeedPage:
        """Return one page of visible quotes matching ``search_term``.

        Args:
            search_term: Case-insensitive substring; empty means the plain feed.
            page: Zero-based page index.
            page_size: Maximum items per source query.

        Raises:
            ValueError: If ``page`` is negative or ``page_size`` is not positive.
        """
        if page < 0:
            raise ValueError("page must be >= 0")
        if page_size <= 0:
            raise ValueError("page_size must be > 0")

        offset = page * page_size
        term = normalize_term(search_term)
        if not term:
            items = self.repo.list_visible(offset=offset, limit=page_size)
            return FeedPage(items=items, has_more=len(items) == page_size)

        by_content = self.repo.search_content(term, offset=offset, limit=page_size)
        by_author = self.repo.search_author_name(term, offset=offset, limit=page_size)
        return FeedPage(
            items=merge_by_recency(by_content, by_author),
            has_more=len(by_content) == page_size or len(by_author) == page_size,
        )


PageFetcher = Callable[[str, int, int], Awaitable[FeedPage]]


def threaded_fetcher(
    session_factory: Callable[[], AbstractContextManager[Session]],
) -> PageFetcher:
    """Return a page fetcher running each request in a worker thread."""

    def _fetch_sync(term: str, page: int, page_size: int) -> FeedPage:
        with session_factory() as session:
            return FeedAssembler(QuoteRepository(session)).fetch_page(term, page, page_size)

    async def _fetch(term: str, page: int, page_size: int) -> FeedPage:
        return await asyncio.to_thread(_fetch_sync, term, page, page_size)

    return _fetch


class FeedSession:
    """Incrementally loaded feed for one viewer.

    Every response is appended and deduplicated against everything already
    loaded, since the two-source search can surface an id again on a later
    page when concurrent writes shift the result boundaries. Responses are
    keyed by the search they were issued for; a response that arrives after a
    newer search started is dropped.
    """

    def __init__(self, fetch: PageFetcher, page_size: int = 10) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be > 0")
        self._fetch = fetch
        self.page_size = page_size
        self.search_term = ""
        self.items: list[Quote] = []
        self.has_more = True
        self.next_page = 0
        self.dropped_responses = 0
        self._seen: set[str] = set()
        self._generation = 0
        self._loading = False

    @property
    def loading(self) -> bool:
        return self._loading

    async def search(self, search_term: str | None) -> bool:
        """Start a new search and load its first page.

        Returns:
            True if the response was applied, False if a newer search
            superseded it while in flight.
        """
        self._generation += 1
        self.search_term = normalize_term(search_term)
        self.items = []
        self._seen = set()
        self.has_more = True
        self.next_page = 0
        return await self._load(self.search_term, 0, self._generation)

    async def load_more(self) -> bool:
        """Load the next page of the current search, if there is one."""
        if self._loading or not self.has_more:
            return False
        return await self._load(self.search_term, self.next_page, self._generation)

    async def _load(self, term: str, page: int, generation: int) -> bool:
        self._loading = True
        try:
            result = await self._fetch(term, page, self.page_size)
        finally:
            if generation == self._generation:
                self._loading = False

        if generation != self._generation or term != self.search_term:
            self.dropped_responses += 1
            logger.debug("Dropping stale feed response for %r page %d", term, page)
            return False

        for quote in result.items:
            if quote.id in self._seen:
                continue
            self._seen.add(quote.id)
            self.items.append(quote)
        self.has_more = result.has_more
        self.next_page = page + 1
        return True
