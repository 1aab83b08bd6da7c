# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest

# Configure before importing the application so settings pick the values up.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from askhub.api.v1.dependencies import get_notification_dispatcher
from askhub.core.security import create_access_token
from askhub.db.session import Base, create_db_engine
from askhub.db.session import get_db as app_get_session
from askhub.main import app as fastapi_app
from askhub.models import Answer, Question, User, UserRole
from askhub.services.notifications import NotificationDispatcher

_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_db_engine("sqlite://", serialize_writes=False, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
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


@pytest.fixture()
def dispatcher(session_factory: sessionmaker[Session]) -> NotificationDispatcher:
    return NotificationDispatcher(session_factory)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    dispatcher: NotificationDispatcher,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_notification_dispatcher, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(name: str | None = None, role: UserRole = UserRole.USER) -> User:
        n = next(_USER_COUNTER)
        user = User(
            name=name or f"user{n}",
            email=f"user{n}@example.com",
            role=role.value,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user("asker")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("answerer")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("admin", role=UserRole.ADMIN)


@pytest.fixture()
def test_question(db_session: Session, test_user: User) -> Question:
    question = Question(
        owner_id=test_user.id,
        title="How do I read a file in Python?",
        description="I want to read a text file line by line.",
        tags=["python", "io"],
    )
    db_session.add(question)
    db_session.commit()
    db_session.refresh(question)
    return question


@pytest.fixture()
def make_answer(db_session: Session, test_question: Question) -> Callable[..., Answer]:
    def _make_answer(owner: User, body: str = "Use open() in a with block.") -> Answer:
        answer = Answer(question_id=test_question.id, owner_id=owner.id, body=body)
        db_session.add(answer)
        db_session.commit()
        db_session.refresh(answer)
        return answer

    return _make_answer


@pytest.fixture()
def test_answer(make_answer: Callable[..., Answer], other_user: User) -> Answer:
    return make_answer(other_user)


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    return auth_headers(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers


@pytest.fixture()
def file_session_factory(tmp_path) -> Iterator[sessionmaker[Session]]:
    """Sessions on a file-backed database, one connection per thread.

    Used by the concurrency tests; writers serialize on ``BEGIN IMMEDIATE``.
    """
    engine = create_db_engine(f"sqlite:///{tmp_path / 'concurrency.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()
