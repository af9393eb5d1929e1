"""Data access helpers for reactions, impressions and shares."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from quoteboard.models import QuoteShare, QuoteView, Reaction

from .base import store_call

__all__ = ["EngagementRepository"]


class EngagementRepository:
    """Row-level access to the engagement relations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def reaction_exists(self, quote_id: str, author_id: str) -> bool:
        """Return True if the author has a reaction row on the quote."""
        stmt = select(func.count()).select_from(Reaction).where(
            Reaction.quote_id == quote_id,
            Reaction.author_id == author_id,
        )
        with store_call("check reaction"):
            return bool(self.session.execute(stmt).scalar())

    def add_reaction(self, quote_id: str, author_id: str) -> Reaction:
        """Insert a reaction row; raises IntegrityError on a duplicate."""
        reaction = Reaction(quote_id=quote_id, author_id=author_id)
        with store_call("insert reaction"):
            self.session.add(reaction)
            self.session.flush()
        return reaction

    def delete_reaction(self, quote_id: str, author_id: str) -> int:
        """Delete the author's reaction row and return the number removed."""
        stmt = delete(Reaction).where(
            Reaction.quote_id == quote_id,
            Reaction.author_id == author_id,
        )
        with store_call("delete reaction"):
            result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def count_reactions(self, quote_ids: Sequence[str]) -> int:
        """Return the number of authenticated reactions across ``quote_ids``."""
        if not quote_ids:
            return 0
        stmt = select(func.count()).select_from(Reaction).where(
            Reaction.quote_id.in_(list(quote_ids))
        )
        with store_call("count reactions"):
            return int(self.session.execute(stmt).scalar() or 0)

    def add_view(self, quote_id: str, author_id: str | None, viewer_ip: str | None) -> QuoteView:
        """Insert an impression row."""
        view = QuoteView(quote_id=quote_id, author_id=author_id, viewer_ip=viewer_ip)
        with store_call("insert view"):
            self.session.add(view)
            self.session.flush()
        return view

    def add_share(self, quote_id: str, author_id: str | None, platform: str) -> QuoteShare:
        """Insert a share row."""
        share = QuoteShare(quote_id=quote_id, author_id=author_id, platform=platform)
        with store_call("insert share"):
            self.session.add(share)
            self.session.flush()
        return share
