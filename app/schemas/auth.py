# File: app/schemas/auth.py

from pydantic import EmailStr, Field

from app.models.user import Role
from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    token: str
    user_id: int
    email: str
    first_name: str
    last_name: str
    role: Role
