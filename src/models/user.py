# src/models/user.py

from sqlalchemy import Column, Integer, String, DateTime
from src.db import Base
from src.utils.dt import utc_now

class User(Base):
    """
    Пользователь Recommendo: email и username уникальны,
    пароль хранится только в виде хэша (argon2).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(64), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, username={self.username})>"
