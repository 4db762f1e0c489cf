"""Pydantic schemas for owners."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class OwnerCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)


class OwnerSummary(BaseModel):
    """Owner identity and name, embedded in car responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str


class OwnedCar(BaseModel):
    """Car as listed under its owner (no owner back-reference)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    brand: str
    model: str
    color: str
    year: int
    price: Decimal


class OwnerRead(OwnerSummary):
    cars: list[OwnedCar] = Field(default_factory=list)
