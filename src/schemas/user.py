"""User schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """User registration request."""

    name: str = Field(..., max_length=255)
    email: EmailStr = Field(..., max_length=255)
    # bcrypt only considers the first 72 bytes
    password: str = Field(..., max_length=72)


class UserUpdate(BaseModel):
    """User update request. Only the name is mutable."""

    name: str = Field(..., max_length=255)


class UserResponse(BaseModel):
    """Public projection of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class UserRecord(UserResponse):
    """Full user row, including the password hash. Never returned by the API."""

    password_hash: str
