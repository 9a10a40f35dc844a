"""User API endpoints. Every route requires a bearer token."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import authenticated_body, get_user_service, require_auth
from src.schemas.envelope import Envelope
from src.schemas.user import UserCreate, UserResponse, UserUpdate
from src.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_auth)])

Service = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=Envelope[list[UserResponse]])
def get_users(service: Service):
    """List all users."""
    logger.info("Listing users")
    users = service.list_users()
    message = "users fetched" if users else "users not found"
    return Envelope[list[UserResponse]](status=True, data=users, message=message)


@router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def add_user(
    user_data: Annotated[UserCreate, Depends(authenticated_body(UserCreate))],
    service: Service,
):
    """Create a new user."""
    logger.info("Adding user")
    user = service.register(user_data.name, user_data.email, user_data.password)
    return Envelope[UserResponse](status=True, data=user, message="user added.")


@router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(user_id: str, service: Service):
    """Get a specific user."""
    logger.info(f"Fetching user {user_id}")
    user = service.get_user(user_id)
    return Envelope[UserResponse](status=True, data=user, message="user found")


@router.put("/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: str,
    user_data: Annotated[UserUpdate, Depends(authenticated_body(UserUpdate))],
    service: Service,
):
    """Update a user's name."""
    logger.info(f"Updating user {user_id}")
    user = service.update_user(user_id, user_data.name)
    return Envelope[UserResponse](status=True, data=user, message="user updated.")


@router.delete("/{user_id}", response_model=Envelope)
def delete_user(user_id: str, service: Service):
    """Delete a user."""
    logger.info(f"Deleting user {user_id}")
    service.delete_user(user_id)
    return Envelope(status=True, data=None, message="user deleted.")
