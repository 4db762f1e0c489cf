"""Admin-only endpoints: user list, user deletion, statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.admin import StatsResponse
from app.schemas.auth import CurrentUser, UserListItem
from app.services import admin as admin_service
from app.services.errors import NotFoundError

router = APIRouter()


@router.get("/users", response_model=list[UserListItem])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserListItem]:
    """List all users (admin only). Password hashes are never returned."""
    return [UserListItem.model_validate(u) for u in admin_service.list_users(db)]


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> StatsResponse:
    """Counts of cars, owners and users, plus cars per brand."""
    return admin_service.collect_stats(db)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        admin_service.delete_user(db, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
