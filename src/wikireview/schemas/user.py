"""User and authentication Pydantic schemas."""

import re

from pydantic import Field, field_validator

from .common import CamelModel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    username: str = Field(..., description="Unique login name")
    password: str = Field(..., description="Plaintext password, hashed before storage")
    email: str = Field(..., description="Unique contact address")
    realname: str | None = Field(None, description="Optional display name")

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Username must be at least 3 characters long")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email format")
        return value

    @field_validator("realname")
    @classmethod
    def _strip_realname(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Public view of an account."""

    id: int
    username: str
    email: str
    realname: str | None = None


class AuthResponse(CamelModel):
    """Returned by register and login alongside the session cookie."""

    success: bool = True
    user: UserResponse


class CurrentUserResponse(CamelModel):
    """Who the session cookie belongs to, if anyone."""

    logged_in: bool
    user: UserResponse | None = None
