# src/schemas/user.py

from src.schemas.base import CamelModel, UtcDatetime

class UserOut(CamelModel):
    id: int
    email: str
    username: str
    created_at: UtcDatetime
