"""Shared helpers for repository classes."""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from quoteboard.core.errors import StoreUnavailableError

__all__ = ["store_call", "unit_of_work"]


@contextmanager
def store_call(operation: str) -> Iterator[None]:
    """Translate connectivity failures of the relational store.

    Integrity and programming errors propagate untouched; only failures that
    mean "the store did not answer" become :class:`StoreUnavailableError`.
    """
    try:
        yield
    except (OperationalError, PoolTimeoutError) as exc:
        raise StoreUnavailableError(f"{operation} failed: store unavailable") from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            raise StoreUnavailableError(f"{operation} failed: connection lost") from exc
        raise


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit the session when the block succeeds, roll back otherwise."""
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    try:
        with store_call("commit"):
            session.commit()
    except Exception:
        session.rollback()
        raise
