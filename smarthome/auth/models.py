from __future__ import annotations

from pydantic import BaseModel, Field

from ..listings.models import UserRole


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)
    role: UserRole
    name: str | None = None
