# src/services/auth.py
# Хранилище пользователей: регистрация, вход, поиск по id.

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user import User
from src.schemas.auth import AuthResponse
from src.schemas.user import UserOut
from src.utils.security import encode_access, hash_password, verify_password

log = logging.getLogger(__name__)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        token=encode_access(user.id, user.email, user.username),
    )


def register(db: Session, email: str, username: str, password: str) -> Optional[AuthResponse]:
    """
    Регистрирует пользователя и сразу выдаёт токен.
    None — если поля пустые или email/username уже заняты.
    """
    email = (email or "").strip()
    username = (username or "").strip()
    if not email or not username or not password:
        return None

    taken = (
        db.query(User.id)
        .filter(or_(User.email == email, User.username == username))
        .first()
    )
    if taken:
        log.debug("register rejected: email or username taken (%s / %s)", email, username)
        return None

    user = User(email=email, username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # параллельная регистрация с тем же email/username
        db.rollback()
        return None
    db.refresh(user)

    log.info("user registered: id=%s username=%s", user.id, user.username)
    return _auth_response(user)


def login(db: Session, email: str, password: str) -> Optional[AuthResponse]:
    user = db.query(User).filter(User.email == (email or "").strip()).first()
    if not user or not verify_password(user.password_hash, password):
        return None
    return _auth_response(user)


def get_user(db: Session, user_id: int) -> Optional[UserOut]:
    user = db.get(User, user_id)
    return UserOut.model_validate(user) if user else None


def exists(db: Session, user_id: int) -> bool:
    return db.query(User.id).filter(User.id == user_id).first() is not None
