# src/config.py
# Настройки приложения из переменных окружения (.env подхватывается через python-dotenv).

from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    return int(raw)


def _list_env(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite:///./recommendo.db"

# --- JWT ---
JWT_SECRET = os.getenv("JWT_SECRET") or ""
JWT_ISSUER = os.getenv("JWT_ISSUER") or "recommendo-api"
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or "recommendo-fe"
JWT_EXPIRY_MINUTES = _int_env("JWT_EXPIRY_MINUTES", 60 * 24 * 7)

# --- Инвайт-ссылки ---
INVITE_TTL_DAYS = _int_env("INVITE_TTL_DAYS", 7)
INVITE_BASE_URL = (os.getenv("INVITE_BASE_URL") or "").rstrip("/")

CORS_ORIGINS = _list_env(
    "CORS_ORIGINS",
    [
        "http://localhost:5001",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "https://recommendo.norn.uk",
    ],
)

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()

# Создавать таблицы по моделям при старте (только для локальной разработки)
DB_AUTO_CREATE = os.getenv("DB_AUTO_CREATE") == "1"
