"""SQLAlchemy models."""

from marketplace.models.listing import Listing
from marketplace.models.user import User

__all__ = [
    "User",
    "Listing",
]
