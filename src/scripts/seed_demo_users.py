"""
Идемпотентный сидинг демо-пользователей (пароль у всех одинаковый). Запуск:
  $ python -m src.scripts.seed_demo_users
Пользователи, у которых email уже занят, пропускаются.
"""
from __future__ import annotations

import logging
import os

from src.db import SessionLocal
from src.models.user import User
from src.utils.security import hash_password

log = logging.getLogger(__name__)

DEMO_PASSWORD = os.getenv("DEMO_PASSWORD") or "recommendo123"

DEMO_USERS = [
    {"email": "john@example.com", "username": "john"},
    {"email": "jane@example.com", "username": "jane"},
    {"email": "bob@example.com", "username": "bob"},
]


def seed() -> int:
    created = 0
    db = SessionLocal()
    try:
        existing = {row[0] for row in db.query(User.email).all()}
        for u in DEMO_USERS:
            if u["email"] in existing:
                continue
            db.add(User(email=u["email"], username=u["username"], password_hash=hash_password(DEMO_PASSWORD)))
            created += 1
        db.commit()
    finally:
        db.close()
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    log.info("Seeded demo users: %s", seed())
