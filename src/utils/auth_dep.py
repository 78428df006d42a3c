# src/utils/auth_dep.py
"""
FastAPI-зависимость авторизации по JWT:
- достаёт токен из заголовка 'Authorization: Bearer <token>'
- валидирует его
- находит пользователя (не создаёт)
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from src.db import get_db
from src.models.user import User
from src.utils.security import decode_access


def _get_bearer_token(request: Request) -> Optional[str]:
    header_v = request.headers.get("authorization")
    if not header_v:
        return None
    scheme, _, value = header_v.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = _get_bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Bearer token required")

    try:
        user_id = decode_access(token)
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Auth error: {str(e)}")

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User is not registered")
    return user
