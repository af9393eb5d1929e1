"""Tests for likes, views and shares on quotes."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from quoteboard.core.errors import QuoteNotFoundError, StoreUnavailableError
from quoteboard.models import QuoteShare, QuoteView, Reaction
from quoteboard.repositories.engagement_repo import EngagementRepository
from quoteboard.repositories.quote_repo import QuoteRepository
from quoteboard.services.engagement import EngagementStore
from quoteboard.services.like_store import AnonymousLikeSet, MemoryKeyValueStore
from quoteboard.services.viewer import AnonymousViewer, AuthenticatedViewer


@pytest.fixture()
def device_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(db_session: Session, device_store: MemoryKeyValueStore) -> EngagementStore:
    return EngagementStore(db_session, device_store=device_store)


@pytest.fixture()
def viewer(test_author) -> AuthenticatedViewer:
    return AuthenticatedViewer(author_id=test_author.id, account_id=test_author.account_id)


def _likes(db_session: Session, quote) -> int:
    db_session.refresh(quote)
    return quote.likes_count


class TestAuthenticatedLikes:
    def test_toggle_on_then_off(self, store, db_session, test_quote, viewer) -> None:
        first = store.toggle_like(test_quote.id, viewer)
        assert first.liked is True
        assert first.likes_count == 1
        assert store.has_reacted(test_quote.id, viewer) is True

        second = store.toggle_like(test_quote.id, viewer)
        assert second.liked is False
        assert second.likes_count == 0
        assert store.has_reacted(test_quote.id, viewer) is False
        assert _likes(db_session, test_quote) == 0

    def test_state_comes_from_reaction_rows(self, store, db_session, test_quote, viewer) -> None:
        """A row written elsewhere is seen by the next toggle."""
        db_session.add(Reaction(quote_id=test_quote.id, author_id=viewer.author_id))
        db_session.flush()

        result = store.toggle_like(test_quote.id, viewer)

        assert result.liked is False

    def test_two_authors_count_independently(
        self, store, db_session, test_quote, viewer, make_author
    ) -> None:
        other = AuthenticatedViewer(author_id=make_author("Other Reader").id)

        store.toggle_like(test_quote.id, viewer)
        result = store.toggle_like(test_quote.id, other)

        assert result.likes_count == 2
        assert store.has_reacted(test_quote.id, other) is True

    def test_duplicate_insert_counts_as_already_liked(
        self, store, db_session, test_quote, viewer, mocker
    ) -> None:
        """A concurrent insert by the same author is absorbed, not double counted."""
        db_session.add(Reaction(quote_id=test_quote.id, author_id=viewer.author_id))
        db_session.commit()
        QuoteRepository(db_session).add_to_counter(test_quote.id, "likes_count", 1)
        db_session.commit()
        mocker.patch.object(EngagementRepository, "reaction_exists", return_value=False)

        result = store.toggle_like(test_quote.id, viewer)

        assert result.liked is True
        assert result.likes_count == 1
        rows = db_session.execute(select(func.count()).select_from(Reaction)).scalar()
        assert rows == 1


class TestAnonymousLikes:
    def test_toggle_persists_across_reload(
        self, db_session, test_quote, device_store
    ) -> None:
        viewer = AnonymousViewer(device_id="device-1")
        result = EngagementStore(db_session, device_store=device_store).toggle_like(
            test_quote.id, viewer
        )
        assert result.liked is True

        reloaded = EngagementStore(db_session, device_store=device_store)
        assert reloaded.has_reacted(test_quote.id, viewer) is True
        assert AnonymousLikeSet(device_store).ids() == {test_quote.id}

        result = reloaded.toggle_like(test_quote.id, viewer)
        assert result.liked is False
        assert result.likes_count == 0
        assert reloaded.has_reacted(test_quote.id, viewer) is False

    def test_no_reaction_rows_written(self, store, db_session, test_quote) -> None:
        store.toggle_like(test_quote.id, AnonymousViewer(device_id="device-1"))

        rows = db_session.execute(select(func.count()).select_from(Reaction)).scalar()
        assert rows == 0
        assert _likes(db_session, test_quote) == 1

    def test_failed_counter_update_leaves_local_state(
        self, store, db_session, test_quote, device_store, mocker
    ) -> None:
        mocker.patch.object(
            QuoteRepository,
            "add_to_counter",
            side_effect=StoreUnavailableError("update likes_count failed"),
        )

        with pytest.raises(StoreUnavailableError):
            store.toggle_like(test_quote.id, AnonymousViewer(device_id="device-1"))

        assert AnonymousLikeSet(device_store).ids() == set()

    def test_unresolved_viewer_has_not_reacted(self, store, test_quote) -> None:
        assert store.has_reacted(test_quote.id, None) is False


class TestCounters:
    def test_concurrent_likes_are_not_lost(
        self, store, db_session, test_quote, viewer
    ) -> None:
        """Another writer's increment survives even if our object holds a stale count."""
        stale_count = test_quote.likes_count
        QuoteRepository(db_session).add_to_counter(test_quote.id, "likes_count", 1)
        db_session.commit()

        result = store.toggle_like(test_quote.id, viewer)

        assert stale_count == 0
        assert result.likes_count == 2

    def test_decrement_floors_at_zero(self, db_session, test_quote) -> None:
        repo = QuoteRepository(db_session)
        repo.add_to_counter(test_quote.id, "likes_count", -1)
        db_session.commit()

        assert repo.read_counter(test_quote.id, "likes_count") == 0

    def test_views_count_every_call(self, store, db_session, test_quote, viewer) -> None:
        counts = [
            store.register_view(test_quote.id),
            store.register_view(test_quote.id, viewer),
            store.register_view(test_quote.id, viewer, "10.0.0.1"),
        ]

        assert counts == [1, 2, 3]
        rows = db_session.execute(select(func.count()).select_from(QuoteView)).scalar()
        assert rows == 3
        db_session.refresh(test_quote)
        assert test_quote.views_count == 3

    def test_share_records_platform(self, store, db_session, test_quote, viewer) -> None:
        assert store.register_share(test_quote.id, "twitter", viewer) == 1
        assert store.register_share(test_quote.id, "copy") == 2

        platforms = db_session.execute(select(QuoteShare.platform)).scalars().all()
        assert sorted(platforms) == ["copy", "twitter"]

    def test_unknown_share_platform(self, store, test_quote) -> None:
        with pytest.raises(ValueError):
            store.register_share(test_quote.id, "myspace")

    def test_store_outage_surfaces_as_unavailable(
        self, store, db_session, test_quote, mocker
    ) -> None:
        original_execute = db_session.execute

        def failing_execute(statement, *args, **kwargs):
            if getattr(statement, "is_dml", False):
                raise OperationalError("UPDATE quote", {}, Exception("database is locked"))
            return original_execute(statement, *args, **kwargs)

        mocker.patch.object(db_session, "execute", side_effect=failing_execute)

        with pytest.raises(StoreUnavailableError):
            store.register_view(test_quote.id)

        mocker.stopall()
        assert QuoteRepository(db_session).read_counter(test_quote.id, "views_count") == 0


class TestVisibility:
    @pytest.mark.parametrize("state", [{"approved": False}, {"active": False}])
    def test_hidden_quote_rejects_engagement(self, store, make_quote, viewer, state) -> None:
        quote = make_quote("Hidden from everyone", **state)

        with pytest.raises(QuoteNotFoundError):
            store.toggle_like(quote.id, viewer)
        with pytest.raises(QuoteNotFoundError):
            store.register_view(quote.id)
        with pytest.raises(QuoteNotFoundError):
            store.register_share(quote.id, "copy")

    def test_missing_quote(self, store, viewer) -> None:
        with pytest.raises(QuoteNotFoundError):
            store.toggle_like("no-such-quote", viewer)
