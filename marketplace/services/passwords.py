"""Password hashing and verification."""

from passlib.context import CryptContext

from marketplace.config import Settings
from marketplace.exceptions import CorruptHashError


class PasswordHasher:
    """Salted bcrypt hashing with a configurable work factor."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.bcrypt_rounds)

    def hash(self, password: str) -> str:
        """Hash a password. Every call draws a fresh salt."""
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        Returns False on a mismatch. Raises CorruptHashError when the stored
        hash is not something bcrypt can read.
        """
        try:
            return self._context.verify(password, password_hash)
        except (TypeError, ValueError) as e:
            raise CorruptHashError() from e
