import os

# Настройки окружения должны быть выставлены до импорта src.*
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("INVITE_BASE_URL", None)

from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.db import Base, get_db, make_engine
from src.main import app
from src.models.friendship import Friendship
from src.models.user import User
from src.utils.security import encode_access


@pytest.fixture
def engine(tmp_path):
    # Файловая SQLite: у каждой сессии своё соединение, как у воркеров в проде
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    def _make(username: str, email: Optional[str] = None) -> User:
        user = User(
            email=email or f"{username}@example.com",
            username=username,
            password_hash="not-a-real-hash",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def edges(db):
    """Все рёбра между парой пользователей: {(requester, recipient): status}."""
    def _edges(a: int, b: int) -> dict:
        db.expire_all()
        rows = db.query(Friendship).filter(
            Friendship.requester_id.in_([a, b]),
            Friendship.recipient_id.in_([a, b]),
        ).all()
        return {(r.requester_id, r.recipient_id): r.status.value for r in rows}

    return _edges


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {encode_access(user.id, user.email, user.username)}"}

    return _headers
