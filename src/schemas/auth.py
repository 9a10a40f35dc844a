"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserLogin(BaseModel):
    """User login request. The email is only looked up, not format-checked."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=72)


class Token(BaseModel):
    """Login response payload."""

    token: str


class TokenClaims(BaseModel):
    """Verified claims extracted from a bearer token."""

    user_id: str
    issuer: str
    expires_at: datetime
