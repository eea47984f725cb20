"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from marketplace.api.dependencies import (
    get_password_hasher,
    get_token_service,
    get_user_repository,
)
from marketplace.exceptions import ValidationError
from marketplace.repositories.users import UserRepository
from marketplace.schemas.auth import (
    LoginResponse,
    LogoutResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
)
from marketplace.services.passwords import PasswordHasher
from marketplace.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
async def register(
    user_data: UserRegister,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Register a new user."""
    # bcrypt is deliberately slow; keep it off the event loop
    password_hash = await run_in_threadpool(hasher.hash, user_data.password)
    user_id = await users.create(user_data.name, user_data.email, password_hash)

    logger.info(f"Registered user {user_id}")
    return RegisterResponse(user_id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = await users.find_by_email(credentials.email)
    if user is None:
        logger.info("Login failed: unknown email")
        raise ValidationError("Invalid credentials")

    is_valid = await run_in_threadpool(hasher.verify, credentials.password, user.password_hash)
    if not is_valid:
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise ValidationError("Invalid credentials")

    token = tokens.issue(user.id, user.name, user.email)
    logger.info(f"User {user.id} logged in")
    return LoginResponse(token=token)


@router.post("/logout", response_model=LogoutResponse)
async def logout():
    """Logout (client should discard token)."""
    return LogoutResponse()
