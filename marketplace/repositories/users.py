"""User persistence."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.exceptions import DuplicateEmailError, StoreError, ValidationError
from marketplace.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Create and look up user records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, email: str, password_hash: str) -> int:
        """Insert a user and return its id.

        The unique constraint on ``email`` decides duplicates, so two
        concurrent registrations for the same address cannot both succeed.
        """
        if not name or not email or not password_hash:
            raise ValidationError("Name, email, and password are required")

        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create user: {e}")
            raise StoreError() from e
        return user.id

    async def find_by_email(self, email: str) -> User | None:
        try:
            result = await self.db.execute(select(User).where(User.email == email))
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user by email: {e}")
            raise StoreError() from e
        return result.scalar_one_or_none()

