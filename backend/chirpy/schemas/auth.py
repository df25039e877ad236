"""Authentication schemas."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserCredentials(BaseModel):
    """Registration or credential update request."""

    email: EmailStr
    password: str


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr
    password: str
    expires_in_seconds: int | None = Field(
        None,
        description="Requested access token lifetime; capped by the server",
    )


class UserResponse(BaseModel):
    """Public user view. Never includes the password hash."""

    id: str
    created_at: datetime
    updated_at: datetime
    email: str
    is_chirpy_red: bool

    class Config:
        from_attributes = True


class LoginResponse(UserResponse):
    """User view plus the issued tokens."""

    token: str
    refresh_token: str


class Token(BaseModel):
    """Token refresh response."""

    token: str
