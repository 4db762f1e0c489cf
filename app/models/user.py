"""ORM model for user accounts (auth and RBAC)."""

import enum

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class Role(str, enum.Enum):
    """
    Account roles. The model is flat: a route lists every role it accepts
    and ADMIN does not inherit USER permissions.
    """

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    username is immutable after registration; role is fixed at creation.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
