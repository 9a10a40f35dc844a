"""FastAPI dependencies for authentication and database."""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.exceptions import (
    MalformedHeaderError,
    MissingHeaderError,
    NotFoundError,
    UnauthorizedError,
)
from src.schemas.user import UserResponse
from src.services.auth import TokenService
from src.services.user_service import UserService
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

BodyT = TypeVar("BodyT", bound=BaseModel)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    """Get a user store bound to the request's session."""
    return UserStore(db)


def get_token_service() -> TokenService:
    """Get a token service configured from settings."""
    return TokenService.from_settings(get_settings())


def get_user_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(store, tokens)


def require_auth(
    request: Request,
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> UserResponse:
    """
    Guard for protected routes.

    Admits the request only when the Authorization header carries a valid
    Bearer token, the token's subject still exists, and that user's current
    email matches the token's issuer. The admitted user is placed on
    ``request.state.user``.

    Raises:
        MissingHeaderError: no Authorization header (400)
        MalformedHeaderError: header is not ``Bearer <token>`` (400)
        UnauthorizedError: token rejected or issuer mismatch (401)
        NotFoundError: the token's user no longer exists (404)
    """
    if authorization is None:
        logger.warning("Rejected request without Authorization header")
        raise MissingHeaderError("Authorization header missing.")

    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("Rejected request with non-Bearer Authorization header")
        raise MalformedHeaderError("Wrong type of authorization header.")

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise MalformedHeaderError("Wrong type of authorization header.")

    try:
        claims = tokens.validate(token)
    except UnauthorizedError as e:
        logger.warning(f"Rejected token: {e.message}")
        raise UnauthorizedError(e.message) from e

    try:
        user = store.get_by_id(claims.user_id)
    except NotFoundError as e:
        logger.warning(f"Token subject {claims.user_id} no longer exists")
        raise NotFoundError("user not found") from e

    if user.email != claims.issuer:
        logger.warning(f"Token issuer does not match current email of user {user.id}")
        raise UnauthorizedError("wrong data provided.")

    request.state.user = user
    return user


CurrentUser = Annotated[UserResponse, Depends(require_auth)]


def authenticated_body(model: type[BodyT]) -> Callable[..., Awaitable[BodyT]]:
    """
    Build a dependency that parses the JSON body into ``model`` after ``require_auth``.

    FastAPI decodes declared body parameters before solving dependencies, so
    protected routes take their body through this instead. A request with a
    bad token is then rejected before its body is looked at.
    """

    async def parse_body(request: Request, _user: CurrentUser) -> BodyT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except SchemaValidationError as e:
            raise RequestValidationError(e.errors(include_url=False)) from e

    return parse_body
