# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from contextlib import nullcontext
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LIKE_STORE_BACKEND", "memory")
os.environ.setdefault("ADMIN_ACCOUNT_IDS", '["admin-account"]')

from quoteboard.api.v1 import dependencies as api_dependencies
from quoteboard.core.security import create_access_token
from quoteboard.db.session import Base
from quoteboard.db.session import get_db as app_get_session
from quoteboard.main import app as fastapi_app
from quoteboard.models import Author, Quote
from quoteboard.services.like_store import MemoryKeyValueStore
from quoteboard.services.site_config import site_config_provider

TEST_DB_URL = "sqlite://"
ADMIN_ACCOUNT_ID = "admin-account"
BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

_QUOTE_CLOCK = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    def _session_factory_override() -> Callable[[], nullcontext[Session]]:
        return lambda: nullcontext(db_session)

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[api_dependencies.get_session_factory] = _session_factory_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(api_dependencies.get_session_factory, None)


@pytest.fixture(autouse=True)
def reset_site_config() -> Iterator[None]:
    """Drop the cached site config so every test reads its own rows."""
    site_config_provider.invalidate()
    yield
    site_config_provider.invalidate()


@pytest.fixture()
def device_stores(app: FastAPI) -> Iterator[dict[str, MemoryKeyValueStore]]:
    """Back every device id with its own in-memory store, shared across requests."""
    stores: dict[str, MemoryKeyValueStore] = {}

    def _device_store_override(
        device_id: api_dependencies.DeviceIdDep,
    ) -> MemoryKeyValueStore | None:
        if device_id is None:
            return None
        return stores.setdefault(device_id, MemoryKeyValueStore())

    app.dependency_overrides[api_dependencies.get_device_store_dep] = _device_store_override
    try:
        yield stores
    finally:
        app.dependency_overrides.pop(api_dependencies.get_device_store_dep, None)


@pytest.fixture()
def client(app: FastAPI, device_stores: dict[str, MemoryKeyValueStore]) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_author(db_session: Session) -> Callable[..., Author]:
    """Return a factory persisting author profiles."""

    def _make_author(name: str = "Test Author", account_id: str | None = None) -> Author:
        author = Author(name=name, account_id=account_id)
        db_session.add(author)
        db_session.flush()
        return author

    return _make_author


@pytest.fixture()
def make_quote(db_session: Session, make_author: Callable[..., Author]) -> Callable[..., Quote]:
    """Return a factory persisting quotes; each call is one minute newer by default."""
    default_author: list[Author] = []

    def _make_quote(
        content: str = "A quote worth sharing",
        *,
        author: Author | None = None,
        created_at: datetime | None = None,
        approved: bool = True,
        active: bool = True,
        quote_id: str | None = None,
        **counters: int,
    ) -> Quote:
        if author is None:
            if not default_author:
                default_author.append(make_author("Default Author"))
            author = default_author[0]
        quote = Quote(
            author_id=author.id,
            content=content,
            created_at=created_at or BASE_TIME + timedelta(minutes=next(_QUOTE_CLOCK)),
            is_approved=approved,
            is_active=active,
            **counters,
        )
        if quote_id is not None:
            quote.id = quote_id
        db_session.add(quote)
        db_session.flush()
        return quote

    return _make_quote


@pytest.fixture()
def test_author(make_author: Callable[..., Author]) -> Author:
    """Author profile linked to the primary test account."""
    return make_author("Ada Lovelace", account_id="account-ada")


@pytest.fixture()
def test_quote(make_quote: Callable[..., Quote], test_author: Author) -> Quote:
    """Approved, active quote by the primary test author."""
    return make_quote("Imagination is the discovering faculty", author=test_author)


@pytest.fixture()
def auth_headers(test_author: Author) -> dict[str, str]:
    """Return authorization headers for the primary test account."""
    token = create_access_token(test_author.account_id or "")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    """Return authorization headers for an administrator account."""
    return {"Authorization": f"Bearer {create_access_token(ADMIN_ACCOUNT_ID)}"}


@pytest.fixture()
def device_headers() -> dict[str, str]:
    """Return headers identifying an anonymous device."""
    return {"X-Device-Id": "device-1"}
