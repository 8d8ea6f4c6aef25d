"""JWT token and password hashing utilities."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import Settings, get_settings
from app.exceptions import ExpiredTokenError, InvalidTokenError
from app.models.user import Identity, UserRole

TOKEN_TYPE_ACCESS = "access"

# bcrypt only looks at the first 72 bytes and bcrypt>=5 refuses longer input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password with bcrypt."""
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except ValueError:
        # Malformed stored hash or over-long candidate
        return False


def _utcnow() -> datetime:
    return datetime.now(UTC)


_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MICROSECOND = timedelta(microseconds=1)


def _epoch_micros(moment: datetime) -> int:
    return (moment - _EPOCH) // _MICROSECOND


class TokenService:
    """Issues and verifies signed, time-bounded identity tokens.

    Tokens are HS256 JWTs signed with a single shared secret. The claims are
    a frozen copy of the identity at issuance; verification never consults
    the user directory. Expiry is the only invalidation mechanism.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "TokenService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_access_token_expire_minutes),
            **kwargs,
        )

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self.ttl.total_seconds())

    def issue(self, identity: Identity) -> str:
        # exp keeps microseconds so the window is exactly [issued, issued + ttl).
        issued_us = _epoch_micros(self._clock())
        expires_us = issued_us + self.ttl // _MICROSECOND
        payload = {
            "sub": identity.id,
            "username": identity.username,
            "role": str(identity.role),
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "type": TOKEN_TYPE_ACCESS,
            "iat": issued_us // 1_000_000,
            "exp": expires_us / 1_000_000,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Check the signature and return the raw claims. Expiry is not checked here."""
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as err:
            raise InvalidTokenError() from err

    def verify(self, token: str) -> Identity:
        if not token:
            raise InvalidTokenError()
        claims = self.decode(token)

        expires_at = claims.get("exp")
        if not isinstance(expires_at, int | float):
            raise InvalidTokenError("Invalid token: missing expiry")
        if _epoch_micros(self._clock()) >= round(expires_at * 1_000_000):
            raise ExpiredTokenError()

        if claims.get("type") != TOKEN_TYPE_ACCESS:
            raise InvalidTokenError("Invalid token type")

        user_id = claims.get("sub")
        username = claims.get("username")
        if not user_id or not username:
            raise InvalidTokenError("Invalid token: missing subject")
        try:
            role = UserRole(claims.get("role"))
        except ValueError as err:
            raise InvalidTokenError("Invalid token: unknown role") from err

        return Identity(
            id=user_id,
            username=username,
            role=role,
            first_name=claims.get("first_name") or "",
            last_name=claims.get("last_name") or "",
        )
