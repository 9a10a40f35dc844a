"""User model."""

from sqlalchemy import Column, String

from src.database import Base


class User(Base):
    """User account used for authentication and management."""

    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    # Indexed for login lookups; uniqueness is checked by UserService.register
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
