"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import Token, TokenClaims, UserLogin
from src.schemas.envelope import Envelope, envelope
from src.schemas.user import UserCreate, UserRecord, UserResponse, UserUpdate

__all__ = [
    "Envelope",
    "envelope",
    "UserLogin",
    "Token",
    "TokenClaims",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserRecord",
]
