"""User management and login orchestration."""

import logging
import uuid

from src.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from src.schemas.auth import Token
from src.schemas.user import UserResponse
from src.services.auth import TokenService, hash_password, verify_password
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)


def _require(*values: str) -> None:
    if any(not value or not value.strip() for value in values):
        raise ValidationError("fields cannot be empty")


def _require_id(user_id: str) -> None:
    if not user_id or not user_id.strip():
        raise ValidationError("user id not provided")


class UserService:
    """Combines the user store, password hashing and token issuance per operation."""

    def __init__(self, store: UserStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    def register(self, name: str, email: str, password: str) -> UserResponse:
        """
        Create a user and return its public projection.

        The duplicate-email check and the insert are separate statements, so
        two concurrent registrations with the same email can both succeed.
        """
        _require(name, email, password)

        user_id = str(uuid.uuid4())
        password_hash = hash_password(password)

        try:
            self.store.get_by_email(email)
        except NotFoundError:
            pass
        else:
            raise ConflictError("email already exists")

        self.store.create(user_id, name, email, password_hash)
        logger.info(f"Registered user {user_id}")
        return self.store.get_by_id(user_id)

    def login(self, email: str, password: str) -> Token:
        """Verify credentials and issue a bearer token."""
        _require(email, password)

        user = self.store.get_by_email(email)
        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for user {user.id}")
            raise UnauthorizedError("unauthorized user.")

        return Token(token=self.tokens.issue(user.id, user.email))

    def list_users(self) -> list[UserResponse]:
        return self.store.list_users()

    def get_user(self, user_id: str) -> UserResponse:
        _require_id(user_id)
        return self.store.get_by_id(user_id)

    def update_user(self, user_id: str, name: str) -> UserResponse:
        _require_id(user_id)
        _require(name)

        self.store.get_by_id(user_id)
        self.store.update(user_id, name)
        return self.store.get_by_id(user_id)

    def delete_user(self, user_id: str) -> None:
        _require_id(user_id)

        self.store.get_by_id(user_id)
        if not self.store.delete(user_id):
            # Removed by a concurrent request between the check and the delete
            raise NotFoundError("user not found")
        logger.info(f"Deleted user {user_id}")
