"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.car import Car
from app.models.owner import Owner
from app.models.user import Role, User

__all__ = ["Base", "Car", "Owner", "Role", "User"]
