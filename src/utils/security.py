# src/utils/security.py
"""
Пароли и access-токены.
- hash_password / verify_password: argon2id через argon2-cffi (хэш для нас — непрозрачная строка)
- encode_access / decode_access: JWT HS256 с iss/aud/exp
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from src import config
from src.utils.dt import utc_now

log = logging.getLogger(__name__)

_DEV_SECRET = "recommendo-dev-secret-change-me"

PASSWORD_HASHER = PasswordHasher()


def _secret() -> str:
    if config.JWT_SECRET:
        return config.JWT_SECRET
    log.warning("JWT_SECRET is not set, using development secret")
    return _DEV_SECRET


def hash_password(password: str) -> str:
    return PASSWORD_HASHER.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """True, если пароль подходит к хэшу."""
    try:
        return PASSWORD_HASHER.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def encode_access(user_id: int, email: str, username: str) -> str:
    now = utc_now()
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "username": username,
        "iss": config.JWT_ISSUER,
        "aud": config.JWT_AUDIENCE,
        "iat": now,
        "exp": now + timedelta(minutes=config.JWT_EXPIRY_MINUTES),
    }
    return jwt.encode(payload, _secret(), algorithm="HS256")


def decode_access(token: str) -> int:
    """
    Проверяет подпись и стандартные claims, возвращает id пользователя.
    Бросает jwt.InvalidTokenError (и наследников) при любой ошибке.
    """
    payload = jwt.decode(
        token,
        _secret(),
        algorithms=["HS256"],
        audience=config.JWT_AUDIENCE,
        issuer=config.JWT_ISSUER,
        options={"require": ["exp", "iat", "iss", "aud", "sub"]},
    )
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError("bad_sub")
