"""Pydantic schemas for admin statistics."""

from pydantic import BaseModel, Field


class BrandCount(BaseModel):
    brand: str
    count: int


class StatsResponse(BaseModel):
    """Response for GET /admin/stats."""

    total_cars: int = Field(..., ge=0)
    total_owners: int = Field(..., ge=0)
    total_users: int = Field(..., ge=0)
    cars_by_brand: list[BrandCount] = Field(default_factory=list)
