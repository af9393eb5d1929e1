"""Tests for device-local anonymous like storage."""

from unittest.mock import MagicMock

import pytest
import redis

from quoteboard.core.errors import StoreUnavailableError
from quoteboard.services import like_store
from quoteboard.services.like_store import (
    LIKED_QUOTES_KEY,
    AnonymousLikeSet,
    MemoryKeyValueStore,
    RedisKeyValueStore,
)


class TestAnonymousLikeSet:
    def test_add_and_remove(self) -> None:
        likes = AnonymousLikeSet(MemoryKeyValueStore())

        likes.add("q1")
        likes.add("q2")
        likes.add("q1")
        assert likes.ids() == {"q1", "q2"}

        likes.remove("q1")
        assert not likes.contains("q1")
        assert likes.contains("q2")

    def test_state_survives_reload(self) -> None:
        """A new set over the same store sees earlier likes."""
        store = MemoryKeyValueStore()
        AnonymousLikeSet(store).add("q1")

        assert AnonymousLikeSet(store).contains("q1")

    def test_stored_as_json_list(self) -> None:
        store = MemoryKeyValueStore()
        likes = AnonymousLikeSet(store)
        likes.add("b")
        likes.add("a")

        assert store.get_item(LIKED_QUOTES_KEY) == '["a", "b"]'

    def test_empty_set_removes_key(self) -> None:
        store = MemoryKeyValueStore()
        likes = AnonymousLikeSet(store)
        likes.add("q1")
        likes.remove("q1")

        assert store.get_item(LIKED_QUOTES_KEY) is None

    @pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "42"])
    def test_unreadable_content_counts_as_empty(self, raw: str) -> None:
        store = MemoryKeyValueStore({LIKED_QUOTES_KEY: raw})

        assert AnonymousLikeSet(store).ids() == set()


class TestRedisKeyValueStore:
    def test_keys_are_namespaced(self) -> None:
        client = MagicMock()
        client.get.return_value = b'["q1"]'
        store = RedisKeyValueStore(client, namespace="device:abc")

        assert store.get_item(LIKED_QUOTES_KEY) == '["q1"]'
        store.set_item(LIKED_QUOTES_KEY, "[]")
        store.remove_item(LIKED_QUOTES_KEY)

        client.get.assert_called_once_with("device:abc:liked_quotes")
        client.set.assert_called_once_with("device:abc:liked_quotes", "[]")
        client.delete.assert_called_once_with("device:abc:liked_quotes")

    def test_connection_errors_become_store_unavailable(self) -> None:
        client = MagicMock()
        client.get.side_effect = redis.exceptions.ConnectionError("down")
        client.set.side_effect = redis.exceptions.TimeoutError("slow")
        store = RedisKeyValueStore(client, namespace="device:abc")

        with pytest.raises(StoreUnavailableError):
            store.get_item(LIKED_QUOTES_KEY)
        with pytest.raises(StoreUnavailableError):
            store.set_item(LIKED_QUOTES_KEY, "[]")


def test_memory_backend_shares_data_per_device(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(like_store.settings, "like_store_backend", "memory")

    AnonymousLikeSet(like_store.get_device_store("device-x")).add("q9")

    assert AnonymousLikeSet(like_store.get_device_store("device-x")).contains("q9")
    assert not AnonymousLikeSet(like_store.get_device_store("device-y")).contains("q9")
