# src/db.py
# Инициализация SQLAlchemy: движок, сессии, Base и явные импорты моделей.

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from src.config import DATABASE_URL


def make_engine(url: str):
    """
    Движок под конкретную БД.
    Для SQLite (локально и в тестах) пул не настраиваем и разрешаем доступ из разных потоков.
    """
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=20,
        max_overflow=20,
        pool_timeout=60,
        pool_recycle=1800,
        pool_pre_ping=True,
    )


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

from src.models import (  # noqa: E402,F401
    user,
    friendship,
    invite_link,
    recommendation,
)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
