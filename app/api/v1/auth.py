"""Registration, login and auth dependencies (get_current_user, require_roles)."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import TokenClaims, TokenService
from app.models.user import Role
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from app.services.credentials import CredentialService, authorize
from app.services.errors import DuplicateUsernameError, InvalidCredentialsError

router = APIRouter()
security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    return TokenService.from_settings(get_settings())


def get_credential_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CredentialService:
    return CredentialService(db, tokens)


@router.post("/register", response_model=MessageResponse)
def register(
    body: RegisterRequest,
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
) -> MessageResponse:
    """Create a USER account. Returns 400 if the username is taken."""
    try:
        credentials.register(body.username, body.password)
    except DuplicateUsernameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token, user = credentials.authenticate(body.username, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e
    return LoginResponse(token=token, username=user.username, role=Role(user.role))


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = tokens.validate(credentials.credentials)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> CurrentUser:
    return CurrentUser(username=claims.username, role=claims.role)


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """
    Build a dependency that admits only callers whose role is in roles.

    Roles are matched exactly; list every role a route accepts.
    """
    allowed = frozenset(roles)

    def dependency(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
    ) -> CurrentUser:
        if not authorize(claims, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return CurrentUser(username=claims.username, role=claims.role)

    return dependency


require_admin = require_roles(Role.ADMIN)
require_member = require_roles(Role.USER, Role.ADMIN)


@router.get("/me", response_model=CurrentUser)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the username and role carried by the caller's token."""
    return current_user
