# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("NOTIFICATIONS_ENABLED", "true")

from forum_karma.core.security import create_access_token
from forum_karma.db.session import build_engine, create_tables, drop_tables
from forum_karma.db.session import get_db as app_get_session
from forum_karma.main import app as fastapi_app
from forum_karma.models import Comment, Post, User

_USER_COUNTER = count(1)


@pytest.fixture()
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    # File-backed so that threads in concurrency tests get their own connections.
    engine = build_engine(f"sqlite:///{tmp_path / 'forum_karma_test.db'}")
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    session_factory: sessionmaker[Session],
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with unique usernames."""

    def _make_user(username: str | None = None, *, is_admin: bool = False) -> User:
        user = User(
            username=username or f"user{next(_USER_COUNTER)}",
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    """Author of the baseline post and comment."""
    return make_user("author")


@pytest.fixture()
def voter(make_user: Callable[..., User]) -> User:
    """Primary voting user, distinct from the author."""
    return make_user("voter")


@pytest.fixture()
def other_voter(make_user: Callable[..., User]) -> User:
    """Second voting user."""
    return make_user("other_voter")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    """Administrator allowed to retract votes and reconcile."""
    return make_user("admin", is_admin=True)


@pytest.fixture()
def test_post(db_session: Session, author: User) -> Post:
    """Create a baseline post with zeroed counters."""
    post = Post(author_id=author.id, title="Test post", body_md="Test post content")
    db_session.add(post)
    db_session.commit()
    return post


@pytest.fixture()
def test_comment(db_session: Session, author: User, test_post: Post) -> Comment:
    """Create a comment by the same author on the baseline post."""
    comment = Comment(post_id=test_post.id, author_id=author.id, body_md="Test comment")
    db_session.add(comment)
    db_session.commit()
    return comment


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
