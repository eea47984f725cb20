"""Signed, time-limited bearer tokens.

Tokens are HS256 JWTs carrying the user's id, name and email plus ``iat`` and
``exp`` timestamps. They are stateless: there is no revocation list, so a token
with a valid signature is accepted until it expires.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from marketplace.config import Settings
from marketplace.exceptions import InvalidTokenError


@dataclass(frozen=True)
class TokenClaims:
    """Identity payload embedded in a bearer token."""

    user_id: int
    name: str
    email: str
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies bearer tokens with a server-held secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(minutes=settings.jwt_expiration_minutes),
            **kwargs,
        )

    def build_claims(self, user_id: int, name: str, email: str) -> TokenClaims:
        """Create claims issued now, truncated to whole seconds."""
        issued_at = self._clock().replace(microsecond=0)
        return TokenClaims(
            user_id=user_id,
            name=name,
            email=email,
            issued_at=issued_at,
            expires_at=issued_at + self._lifetime,
        )

    def encode(self, claims: TokenClaims) -> str:
        """Sign claims into a compact token string."""
        payload = {
            "user_id": claims.user_id,
            "name": claims.name,
            "email": claims.email,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue(self, user_id: int, name: str, email: str) -> str:
        """Create a token for a user that expires after the configured lifetime."""
        return self.encode(self.build_claims(user_id, name, email))

    def verify(self, token: str) -> TokenClaims:
        """Check signature, payload shape and expiry, and return the claims."""
        try:
            # Expiry is checked below against our own clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenError() from e

        try:
            claims = TokenClaims(
                user_id=int(payload["user_id"]),
                name=str(payload["name"]),
                email=str(payload["email"]),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise InvalidTokenError() from e

        if self._clock() > claims.expires_at:
            raise InvalidTokenError()
        return claims
