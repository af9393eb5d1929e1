# src/quoteboard/services/engagement.py
"""Likes, impressions and shares on quotes.

Counter consistency: every counter change is a single store-side
``UPDATE quote SET <counter> = <counter> + delta`` (decrements floored at 0),
never a client read-modify-write, so concurrent viewers cannot lose each
other's updates. For authenticated likes the reaction row change and the
counter change commit together. Anonymous likes have no rows; the counter is
committed first and the device set is written only after that succeeds, so a
failed store call leaves the viewer's local state untouched. The device set
is read and written without a lock, so two concurrent toggles from the same
device can both see "not liked" and bump the counter twice while the set gains
the id once; a later unlike then leaves the counter one too high. Anonymous
like counts are approximate for that reason.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quoteboard.core.errors import QuoteNotFoundError
from quoteboard.models import Quote
from quoteboard.repositories.base import unit_of_work
from quoteboard.repositories.engagement_repo import EngagementRepository
from quoteboard.repositories.quote_repo import QuoteRepository

from .like_store import AnonymousLikeSet, KeyValueStore
from .viewer import AnonymousViewer, AuthenticatedViewer, Viewer, viewer_author_id

logger = logging.getLogger(__name__)

SHARE_PLATFORMS: Final[tuple[str, ...]] = (
    "copy",
    "copy-quote",
    "twitter",
    "facebook",
    "whatsapp",
    "telegram",
)


@dataclass(frozen=True)
class LikeResult:
    """Outcome of a like toggle."""

    liked: bool
    likes_count: int


class EngagementStore:
    """Per-viewer like state and the view/like/share counters of quotes."""

    def __init__(self, session: Session, device_store: KeyValueStore | None = None) -> None:
        """Create the store.

        Args:
            session: Unit of work against the relational store.
            device_store: Local persistence for anonymous viewers' like sets.
        """
        self.session = session
        self.device_store = device_store
        self.quotes = QuoteRepository(session)
        self.engagement = EngagementRepository(session)

    def has_reacted(self, quote_id: str, viewer: Viewer | None) -> bool:
        """Return the viewer's like state; an unresolved viewer has not liked."""
        if isinstance(viewer, AuthenticatedViewer):
            return self.engagement.reaction_exists(quote_id, viewer.author_id)
        if isinstance(viewer, AnonymousViewer):
            return self._anonymous_likes().contains(quote_id)
        return False

    def toggle_like(self, quote_id: str, viewer: Viewer) -> LikeResult:
        """Flip the viewer's like on a visible quote.

        Raises:
            QuoteNotFoundError: If the quote is missing or not visible.
            StoreUnavailableError: If the store fails; nothing is changed.
        """
        self._require_visible(quote_id)
        if isinstance(viewer, AuthenticatedViewer):
            liked = self._toggle_authenticated(quote_id, viewer)
        else:
            liked = self._toggle_anonymous(quote_id)
        return LikeResult(liked=liked, likes_count=self.quotes.read_counter(quote_id, "likes_count"))

    def register_view(
        self,
        quote_id: str,
        viewer: Viewer | None = None,
        viewer_ip: str | None = None,
    ) -> int:
        """Record one impression and bump ``views_count`` by exactly one.

        Views are impressions, not unique viewers: repeated calls for the same
        viewer each count.

        Returns:
            The views count read back after the commit.
        """
        self._require_visible(quote_id)
        with unit_of_work(self.session):
            self.engagement.add_view(quote_id, viewer_author_id(viewer), viewer_ip)
            self.quotes.add_to_counter(quote_id, "views_count", 1)
        return self.quotes.read_counter(quote_id, "views_count")

    def register_share(self, quote_id: str, platform: str, viewer: Viewer | None = None) -> int:
        """Record a share and bump ``shares_count``; returns the new count."""
        if platform not in SHARE_PLATFORMS:
            raise ValueError(f"Unsupported share platform: {platform}")
        self._require_visible(quote_id)
        with unit_of_work(self.session):
            self.engagement.add_share(quote_id, viewer_author_id(viewer), platform)
            self.quotes.add_to_counter(quote_id, "shares_count", 1)
        return self.quotes.read_counter(quote_id, "shares_count")

    def _toggle_authenticated(self, quote_id: str, viewer: AuthenticatedViewer) -> bool:
        # Truth comes from the reaction row on every call, never from a cached flag.
        try:
            with unit_of_work(self.session):
                if self.engagement.reaction_exists(quote_id, viewer.author_id):
                    removed = self.engagement.delete_reaction(quote_id, viewer.author_id)
                    if removed:
                        self.quotes.add_to_counter(quote_id, "likes_count", -removed)
                    return False
                self.engagement.add_reaction(quote_id, viewer.author_id)
                self.quotes.add_to_counter(quote_id, "likes_count", 1)
                return True
        except IntegrityError:
            # A concurrent request from the same author inserted the row first.
            logger.info(
                "Reaction by %s on %s already recorded; keeping existing like",
                viewer.author_id,
                quote_id,
            )
            return True

    def _toggle_anonymous(self, quote_id: str) -> bool:
        likes = self._anonymous_likes()
        liked_before = likes.contains(quote_id)
        with unit_of_work(self.session):
            self.quotes.add_to_counter(quote_id, "likes_count", -1 if liked_before else 1)
        if liked_before:
            likes.remove(quote_id)
        else:
            likes.add(quote_id)
        return not liked_before

    def _anonymous_likes(self) -> AnonymousLikeSet:
        if self.device_store is None:
            raise ValueError("Anonymous viewers need a device store")
        return AnonymousLikeSet(self.device_store)

    def _require_visible(self, quote_id: str) -> Quote:
        quote = self.quotes.get_visible(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote
