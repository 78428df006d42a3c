# src/routers/auth.py
"""
Роутер авторизации: регистрация, вход по email+паролю, текущий пользователь.
Токен отдаётся в ответе, дальше фронт шлёт его в 'Authorization: Bearer <token>'.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from src.db import get_db
from src.models.user import User
from src.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from src.schemas.user import UserOut
from src.services import auth as auth_service
from src.utils.auth_dep import get_current_user

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    if not payload.email.strip() or not payload.username.strip() or not payload.password.strip():
        raise HTTPException(400, detail={"code": "fields_required", "message": "All fields are required"})

    result = auth_service.register(db, payload.email, payload.username, payload.password)
    if result is None:
        raise HTTPException(400, detail={"code": "user_exists", "message": "Email or username already taken"})
    return result


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    if not payload.email.strip() or not payload.password:
        raise HTTPException(400, detail={"code": "fields_required", "message": "Email and password are required"})

    result = auth_service.login(db, payload.email, payload.password)
    if result is None:
        raise HTTPException(401, detail={"code": "invalid_credentials", "message": "Invalid credentials"})
    return result


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    """Данные текущего пользователя по токену."""
    return UserOut.model_validate(current_user)
