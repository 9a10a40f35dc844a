"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_user_service
from src.schemas.auth import Token, UserLogin
from src.schemas.envelope import Envelope
from src.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=Envelope[Token])
def login(
    credentials: UserLogin,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    logger.info("Login attempt")
    token = service.login(credentials.email, credentials.password)
    return Envelope[Token](status=True, data=token, message="login success")
