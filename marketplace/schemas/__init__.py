"""Pydantic schemas for API requests and responses."""

from marketplace.schemas.auth import (
    LoginResponse,
    LogoutResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
)
from marketplace.schemas.listing import (
    ListingCreateResponse,
    ListingDeleteResponse,
    ListingPageResponse,
    ListingResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "RegisterResponse",
    "LoginResponse",
    "LogoutResponse",
    "ListingResponse",
    "ListingPageResponse",
    "ListingCreateResponse",
    "ListingDeleteResponse",
]
