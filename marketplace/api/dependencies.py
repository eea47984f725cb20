"""FastAPI dependencies for authentication, services and repositories."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import get_settings
from marketplace.database import get_db
from marketplace.exceptions import AuthError
from marketplace.repositories.listings import ListingRepository
from marketplace.repositories.users import UserRepository
from marketplace.services.passwords import PasswordHasher
from marketplace.services.storage import LocalImageStore
from marketplace.services.tokens import TokenClaims, TokenService

# Missing or non-bearer headers are reported by get_current_claims, not HTTPBearer.
security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    """Get the token service built from settings."""
    return TokenService.from_settings(get_settings())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the password hasher built from settings."""
    return PasswordHasher.from_settings(get_settings())


@lru_cache
def get_image_store() -> LocalImageStore:
    """Get the image store built from settings."""
    return LocalImageStore.from_settings(get_settings())


def get_user_repository(db: Annotated[AsyncSession, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_listing_repository(db: Annotated[AsyncSession, Depends(get_db)]) -> ListingRepository:
    return ListingRepository(db)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """Verify the bearer token and return its claims."""
    if credentials is None:
        raise AuthError()
    return tokens.verify(credentials.credentials)
