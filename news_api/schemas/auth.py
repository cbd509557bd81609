"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field, field_validator

from news_api.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

# Shape check only: one "@" with something on each side and a dot in the domain.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    """New account details."""

    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN, description="Email")
    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Display name",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        # Length bounds apply to the trimmed name; the password is taken as typed.
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class UserSummary(BaseModel):
    """Public view of a user (never the password hash)."""

    username: str
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: UserSummary


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    message: str
    user: UserSummary
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
