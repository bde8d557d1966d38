# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("IDENTITY_JWT_SECRET", "test-identity-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from inkwell.core.security import create_identity_token
from inkwell.db.session import Base
from inkwell.db.session import get_db as app_get_session
from inkwell.main import app as fastapi_app
from inkwell.models import Post, User
from inkwell.models.post import POST_STATUS_DRAFT, POST_STATUS_PUBLISHED

TEST_DB_URL = "sqlite://"

# Fixed clock for time-dependent service calls.
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)

_EXTERNAL_ID_COUNTER = count(1)


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
    # Service commits release savepoints; the outer transaction is rolled back.
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

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

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db: Session, name: str, username: str | None) -> User:
    user = User(
        external_id=f"idp|user-{next(_EXTERNAL_ID_COUNTER)}",
        name=name,
        email=f"{(username or name).lower().replace(' ', '.')}@example.com",
        username=username,
        created_at=NOW,
        last_active_at=NOW,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def user_factory(db_session: Session) -> Callable[..., User]:
    """Return a helper that persists users with unique external ids."""

    def _factory(name: str = "Reader", username: str | None = None) -> User:
        return _create_user(db_session, name, username)

    return _factory


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return the primary persisted user."""
    return _create_user(db_session, "Test User", "test_user")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, "Other User", "other_user")


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_identity_token(user.external_id, name=user.name, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers_for(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers_for(other_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a helper inserting posts directly, bypassing the draft rules."""

    def _factory(
        author: User,
        *,
        title: str = "A post",
        content: str = "<p>Body</p>",
        status: str = POST_STATUS_PUBLISHED,
        created_at: datetime = NOW,
        published_at: datetime | None = None,
        view_count: int = 0,
        like_count: int = 0,
        tags: list[str] | None = None,
    ) -> Post:
        if status == POST_STATUS_PUBLISHED and published_at is None:
            published_at = created_at
        post = Post(
            author_id=author.id,
            title=title,
            content=content,
            status=status,
            tags=tags or [],
            created_at=created_at,
            updated_at=created_at,
            published_at=published_at if status != POST_STATUS_DRAFT else None,
            view_count=view_count,
            like_count=like_count,
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _factory


@pytest.fixture()
def now() -> datetime:
    """Return the fixed clock used by time-dependent tests."""
    return NOW


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for any user."""
    return auth_headers_for
