"""Owner endpoints: list with cars, read, create, delete (admin, restricted)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin, require_member
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.owner import OwnerCreate, OwnerRead
from app.services import owners as owner_service
from app.services.errors import NotFoundError, OwnerHasCarsError

router = APIRouter()


@router.get("", response_model=list[OwnerRead])
def list_owners(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_member)],
) -> list[OwnerRead]:
    """All owners, each with the cars they own."""
    return [OwnerRead.model_validate(o) for o in owner_service.list_owners(db)]


@router.get("/{owner_id}", response_model=OwnerRead)
def get_owner(
    owner_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_member)],
) -> OwnerRead:
    try:
        owner = owner_service.get_owner(db, owner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return OwnerRead.model_validate(owner)


@router.post("", response_model=OwnerRead, status_code=status.HTTP_201_CREATED)
def create_owner(
    body: OwnerCreate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_member)],
) -> OwnerRead:
    owner = owner_service.create_owner(db, body)
    return OwnerRead(id=owner.id, first_name=owner.first_name, last_name=owner.last_name)


@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_owner(
    owner_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    """Delete an owner with no cars. 409 while cars still reference the owner."""
    try:
        owner_service.delete_owner(db, owner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except OwnerHasCarsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
