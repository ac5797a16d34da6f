# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from quorum_stage.core.security import Actor, create_access_token
from quorum_stage.db.session import Base
from quorum_stage.db.session import get_db as app_get_session
from quorum_stage.main import app as fastapi_app
from quorum_stage.models import Answer, Question, User
from quorum_stage.models.enums import UserRole
from quorum_stage.services import content as content_service

TEST_DB_URL = "sqlite://"

_EMAIL_COUNTER = count(1)


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
    # Services commit their own transactions, so each test gets a plain
    # session and the tables are emptied afterwards.
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

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


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with a given role."""

    def _make_user(role: UserRole = UserRole.USER, name: str = "User") -> User:
        user = User(
            name=name,
            email=f"user{next(_EMAIL_COUNTER)}@example.test",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary regular user."""
    return make_user(UserRole.USER, "Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second regular user."""
    return make_user(UserRole.USER, "Other User")


@pytest.fixture()
def moderator(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.MODERATOR, "Moderator")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.ADMIN, "Admin")


@pytest.fixture()
def user_actor(test_user: User) -> Actor:
    return Actor.from_user(test_user)


@pytest.fixture()
def other_actor(other_user: User) -> Actor:
    return Actor.from_user(other_user)


@pytest.fixture()
def moderator_actor(moderator: User) -> Actor:
    return Actor.from_user(moderator)


@pytest.fixture()
def admin_actor(admin: User) -> Actor:
    return Actor.from_user(admin)


def _bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _bearer(other_user)


@pytest.fixture()
def moderator_token(moderator: User) -> dict[str, str]:
    return _bearer(moderator)


@pytest.fixture()
def admin_token(admin: User) -> dict[str, str]:
    return _bearer(admin)


@pytest.fixture()
def question(db_session: Session, test_user: User) -> Question:
    """Create an open question authored by the primary test user."""
    return content_service.create_question(
        db_session,
        author_id=test_user.id,
        title="How do I reset a stuck build?",
        description="The pipeline hangs on the cache step.",
        category="tooling",
        tags=["ci", "cache"],
    )


@pytest.fixture()
def answer(db_session: Session, question: Question, other_user: User) -> Answer:
    """Create an answer by the second user on ``question``."""
    return content_service.create_answer(
        db_session,
        author_id=other_user.id,
        question_id=question.id,
        content="Clear the cache key and re-run.",
    )
