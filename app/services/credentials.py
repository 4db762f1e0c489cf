"""Account registration, login and token-based authorization."""

import logging
from collections.abc import Iterable
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.security import (
    TokenClaims,
    TokenService,
    hash_password,
    verify_password,
)
from app.models.user import Role, User
from app.services.errors import DuplicateUsernameError, InvalidCredentialsError

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash checked when the username is unknown so both failure paths cost one bcrypt check."""
    return hash_password("not-a-real-password", rounds=rounds)


def authorize(claims: TokenClaims | None, required_roles: Iterable[Role]) -> bool:
    """
    Allow only when the claimed role is one of required_roles.

    Exact membership; roles carry no hierarchy.
    """
    if claims is None:
        return False
    return claims.role in frozenset(required_roles)


class CredentialService:
    """Registers accounts, authenticates logins and validates session tokens."""

    def __init__(
        self,
        session: Session,
        tokens: TokenService,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self._session = session
        self._tokens = tokens
        self._bcrypt_rounds = (
            bcrypt_rounds if bcrypt_rounds is not None else get_settings().BCRYPT_ROUNDS
        )

    def register(self, username: str, password: str) -> User:
        """
        Create a USER account with a salted bcrypt hash of password.

        Raises DuplicateUsernameError if the username exists; nothing is persisted then.
        """
        return self.create_account(username, password, Role.USER)

    def create_account(self, username: str, password: str, role: Role) -> User:
        """
        Persist an account with the given role. Usernames are stored exactly as given.

        Self-registration goes through register(); other roles are only
        reachable from operator tooling.
        """
        exists = (
            self._session.query(User.id).filter(User.username == username).first()
        )
        if exists is not None:
            logger.info("Account creation rejected: duplicate username")
            raise DuplicateUsernameError(username)

        user = User(
            username=username,
            password_hash=hash_password(password, rounds=self._bcrypt_rounds),
            role=Role(role).value,
        )
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name.
            self._session.rollback()
            raise DuplicateUsernameError(username) from e
        self._session.refresh(user)
        logger.info("Created user id=%s role=%s", user.id, user.role)
        return user

    def authenticate(self, username: str, password: str) -> tuple[str, User]:
        """
        Verify credentials and issue a session token.

        Returns (token, user). Raises InvalidCredentialsError for an unknown
        username and for a wrong password alike.
        """
        user = self._session.query(User).filter(User.username == username).first()
        if user is None:
            verify_password(password, _dummy_hash(self._bcrypt_rounds))
            logger.warning("Login failed")
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.warning("Login failed")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.username, Role(user.role))
        logger.info("Issued token for user id=%s", user.id)
        return token, user

    def validate_token(self, token: str | None) -> TokenClaims | None:
        """Return the token's claims, or None if it is invalid for any reason."""
        return self._tokens.validate(token)

    @staticmethod
    def authorize(claims: TokenClaims | None, required_roles: Iterable[Role]) -> bool:
        return authorize(claims, required_roles)
