"""Password hashing and JWT issuance/validation for authentication."""

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings, get_settings
from app.models.user import Role

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Claims every token must carry; anything missing makes it invalid.
REQUIRED_CLAIMS = ("sub", "role", "jti", "iss", "aud", "iat", "exp")


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    rounds defaults to the configured BCRYPT_ROUNDS.
    """
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class TokenClaims:
    """Claims extracted from a validated session token."""

    username: str
    role: Role
    token_id: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and validates signed session tokens.

    The signing key and token parameters are fixed at construction; the
    instance holds no mutable state and may be shared across requests.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        issuer: str,
        audience: str,
        lifetime: timedelta = timedelta(hours=2),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience
        self._lifetime = lifetime
        self._clock = clock

    @classmethod
    def from_settings(
        cls, settings: Settings, clock: Callable[[], datetime] = _utcnow
    ) -> "TokenService":
        return cls(
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            lifetime=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
            clock=clock,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, username: str, role: Role) -> str:
        """Create a signed token for username/role, expiring exactly one lifetime after issue."""
        # JWT timestamps are whole seconds; truncate so exp - iat == lifetime exactly.
        now = self._clock().replace(microsecond=0)
        payload: dict[str, Any] = {
            "sub": username,
            "role": Role(role).value,
            "jti": uuid.uuid4().hex,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str | None) -> TokenClaims | None:
        """
        Verify signature, issuer, audience, issue time and expiry; return claims or None.

        Never raises. Expiry is exact: a token is valid up to and including
        its exp instant and invalid any time after it. Both bounds are
        compared against the service clock only.
        """
        if not token or not isinstance(token, str):
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                audience=self._audience,
                # iat and exp are checked below against the injected clock, with no leeway.
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": list(REQUIRED_CLAIMS),
                },
            )
        except jwt.PyJWTError:
            return None

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            role = Role(payload["role"])
        except (TypeError, ValueError, OverflowError, OSError):
            return None

        username = payload["sub"]
        if not isinstance(username, str) or not username:
            return None
        now = self._clock()
        if now < issued_at or now > expires_at:
            return None

        return TokenClaims(
            username=username,
            role=role,
            token_id=str(payload["jti"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )
