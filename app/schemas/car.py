"""Pydantic schemas for car create, full replace, partial update and reads."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.owner import OwnerSummary

PRICE_MAX_DIGITS = 12
PRICE_DECIMAL_PLACES = 2


class CarWrite(BaseModel):
    """
    Full car payload used by POST (create) and PUT (replace).

    Every field is required; PUT overwrites all of them, owner_id included.
    """

    brand: str = Field(..., max_length=255)
    model: str = Field(..., max_length=255)
    color: str = Field(..., max_length=64)
    year: int
    price: Decimal = Field(
        ..., max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    owner_id: int


class CarPatch(BaseModel):
    """
    Partial car payload for PATCH.

    Strings are applied only when non-empty (an empty string means "not
    supplied"). year and price are applied whenever present, zero included.
    """

    brand: str | None = Field(default=None, max_length=255)
    model: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=64)
    year: int | None = None
    price: Decimal | None = Field(
        default=None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    owner_id: int | None = None


class CarRead(BaseModel):
    """Car joined with its owner's identity and name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    brand: str
    model: str
    color: str
    year: int
    price: Decimal
    owner: OwnerSummary
