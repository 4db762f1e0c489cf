"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, auth, cars, health, owners

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(cars.router, prefix="/cars", tags=["cars"])
router.include_router(owners.router, prefix="/owners", tags=["owners"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
