# src/main.py
# Главная точка входа FastAPI для Recommendo.

from __future__ import annotations

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src import config
from src.db import Base, engine  # инициализация БД/пула соединений

from src.routers.auth import router as auth_router
from src.routers.friends import router as friends_router
from src.routers.recommendations import router as recommendations_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Recommendo Backend",
    description="Backend для Recommendo: пользователи, друзья, инвайт-ссылки и рекомендации.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Подключение роутеров ---
app.include_router(auth_router,            prefix="/api/auth",            tags=["Авторизация"])
app.include_router(friends_router,         prefix="/api/friends",         tags=["Друзья"])
app.include_router(recommendations_router, prefix="/api/recommendations", tags=["Рекомендации"])

# Ошибки отдаём в формате фронта: {"message": ..., "code": ...} на верхнем уровне, без обёртки "detail".
@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = dict(exc.detail)
        content.setdefault("message", content.get("code") or "Error")
    else:
        content = {"message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

@app.get("/")
def root():
    """Простой healthcheck."""
    return {"message": "Recommendo backend работает!", "docs": "/docs"}

# Локальный запуск без Alembic (SQLite): создаём таблицы по моделям.
# Включается переменной окружения DB_AUTO_CREATE=1, в проде схему ведут миграции.
@app.on_event("startup")
def _startup_schema():
    if config.DB_AUTO_CREATE:
        log.info("DB_AUTO_CREATE=1: creating tables from models")
        Base.metadata.create_all(bind=engine)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, reload=False)
