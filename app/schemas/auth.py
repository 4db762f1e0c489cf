"""Request/response schemas for auth and admin user endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.models.user import Role


class RegisterRequest(BaseModel):
    """Credentials for a new account. Role is always USER."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """Bearer token returned after successful login."""

    token: str = Field(..., description="JWT bearer token, valid for two hours")
    username: str
    role: Role


class CurrentUser(BaseModel):
    """Authenticated caller (from token claims) for dependency injection."""

    username: str
    role: Role


class UserListItem(BaseModel):
    """User entry for admin list (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role
