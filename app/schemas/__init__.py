"""Pydantic request/response schemas."""

from app.schemas.admin import BrandCount, StatsResponse
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserListItem,
)
from app.schemas.car import CarPatch, CarRead, CarWrite
from app.schemas.health import HealthResponse
from app.schemas.owner import OwnedCar, OwnerCreate, OwnerRead, OwnerSummary

__all__ = [
    "BrandCount",
    "CarPatch",
    "CarRead",
    "CarWrite",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "OwnedCar",
    "OwnerCreate",
    "OwnerRead",
    "OwnerSummary",
    "RegisterRequest",
    "StatsResponse",
    "UserListItem",
]
