# src/schemas/auth.py

from pydantic import Field
from src.schemas.base import CamelModel

class RegisterRequest(CamelModel):
    email: str = Field(..., max_length=255)
    username: str = Field(..., max_length=64)
    password: str

class LoginRequest(CamelModel):
    email: str
    password: str

class AuthResponse(CamelModel):
    id: int
    email: str
    username: str
    token: str
