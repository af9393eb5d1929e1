# src/quoteboard/services/like_store.py
"""Device-local persistence for anonymous like state.

Anonymous viewers have no server-side identity, so the set of quotes they
liked lives in a key-value store scoped to their device. The store is injected
into :class:`~quoteboard.services.engagement.EngagementStore`; production uses
Redis namespaced per device id, tests and local runs use process memory.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from threading import Lock
from typing import Final, Protocol

import redis

from quoteboard.core.errors import StoreUnavailableError
from quoteboard.core.settings import settings

logger = logging.getLogger(__name__)

LIKED_QUOTES_KEY: Final[str] = "liked_quotes"


class KeyValueStore(Protocol):
    """String-keyed persistence with ``localStorage``-like semantics."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store. Survives "reloads" as long as the instance lives."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data = data if data is not None else {}
        self._lock = Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class RedisKeyValueStore:
    """Redis-backed store where every key is prefixed with a namespace."""

    def __init__(self, client: redis.Redis, namespace: str) -> None:
        self._redis = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get_item(self, key: str) -> str | None:
        try:
            value = self._redis.get(self._key(key))
        except redis.exceptions.RedisError as exc:
            raise StoreUnavailableError("device store read failed") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            self._redis.set(self._key(key), value)
        except redis.exceptions.RedisError as exc:
            raise StoreUnavailableError("device store write failed") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except redis.exceptions.RedisError as exc:
            raise StoreUnavailableError("device store write failed") from exc


class AnonymousLikeSet:
    """Set of quote ids liked from one device, stored as a JSON list."""

    def __init__(self, store: KeyValueStore, key: str = LIKED_QUOTES_KEY) -> None:
        self._store = store
        self._key = key

    def ids(self) -> set[str]:
        """Return the liked ids; unreadable content counts as empty."""
        raw = self._store.get_item(self._key)
        if not raw:
            return set()
        try:
            loaded = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable anonymous like set under %r", self._key)
            return set()
        if not isinstance(loaded, list):
            return set()
        return {str(item) for item in loaded}

    def contains(self, quote_id: str) -> bool:
        return quote_id in self.ids()

    def add(self, quote_id: str) -> None:
        ids = self.ids()
        ids.add(quote_id)
        self._write(ids)

    def remove(self, quote_id: str) -> None:
        ids = self.ids()
        ids.discard(quote_id)
        self._write(ids)

    def _write(self, ids: set[str]) -> None:
        if ids:
            self._store.set_item(self._key, json.dumps(sorted(ids)))
        else:
            self._store.remove_item(self._key)


_MEMORY_DEVICES: dict[str, dict[str, str]] = defaultdict(dict)
_MEMORY_LOCK = Lock()
_REDIS_CLIENT: redis.Redis | None = None


def _redis_client() -> redis.Redis:
    global _REDIS_CLIENT
    if _REDIS_CLIENT is None:
        _REDIS_CLIENT = redis.from_url(settings.redis_url)  # type: ignore[no-untyped-call]
    return _REDIS_CLIENT


def get_device_store(device_id: str) -> KeyValueStore:
    """Return the configured key-value store for a device."""
    if settings.like_store_backend == "memory":
        with _MEMORY_LOCK:
            data = _MEMORY_DEVICES[device_id]
        return MemoryKeyValueStore(data)
    return RedisKeyValueStore(_redis_client(), namespace=f"device:{device_id}")
