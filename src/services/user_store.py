"""Persistence for user rows."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import InternalError, NotFoundError
from src.models.user import User
from src.schemas.user import UserRecord, UserResponse

logger = logging.getLogger(__name__)


def _to_public(user: User) -> UserResponse:
    return UserResponse(id=user.user_id, name=user.name, email=user.email)


class UserStore:
    """
    CRUD operations against the ``users`` table.

    Each database failure is rolled back and re-raised as ``InternalError``
    prefixed with the operation name; a missing row raises ``NotFoundError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, operation: str, error: SQLAlchemyError) -> InternalError:
        self.db.rollback()
        logger.error(f"{operation} failed: {error}")
        return InternalError(f"{operation}: {error}")

    def list_users(self) -> list[UserResponse]:
        """Return every user's public projection in storage order."""
        try:
            users = self.db.query(User).all()
        except SQLAlchemyError as e:
            raise self._fail("list_users", e) from e
        return [_to_public(user) for user in users]

    def create(self, user_id: str, name: str, email: str, password_hash: str) -> None:
        """Insert a user. The id and password hash are prepared by the caller."""
        user = User(user_id=user_id, name=name, email=email, password_hash=password_hash)
        try:
            self.db.add(user)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("create", e) from e

    def get_by_id(self, user_id: str) -> UserResponse:
        try:
            user = self.db.query(User).filter(User.user_id == user_id).first()
        except SQLAlchemyError as e:
            raise self._fail("get_by_id", e) from e
        if user is None:
            raise NotFoundError("user not found")
        return _to_public(user)

    def get_by_email(self, email: str) -> UserRecord:
        """Fetch the full record, password hash included, for login and duplicate checks."""
        try:
            user = self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise self._fail("get_by_email", e) from e
        if user is None:
            raise NotFoundError("user not found")
        return UserRecord(
            id=user.user_id,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
        )

    def update(self, user_id: str, name: str) -> None:
        """Change a user's name. Does not check that the user exists."""
        try:
            self.db.query(User).filter(User.user_id == user_id).update(
                {User.name: name}, synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e

    def delete(self, user_id: str) -> bool:
        """Delete a user, returning True only if exactly one row was removed."""
        try:
            deleted = (
                self.db.query(User)
                .filter(User.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e
        return deleted == 1
