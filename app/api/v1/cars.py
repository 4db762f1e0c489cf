"""Car endpoints: list, read, create, full replace, partial update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_member
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.car import CarPatch, CarRead, CarWrite
from app.services import cars as car_service
from app.services.errors import NotFoundError, UnknownOwnerError

router = APIRouter()

Member = Annotated[CurrentUser, Depends(require_member)]
DB = Annotated[Session, Depends(get_db)]


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _unknown_owner(e: UnknownOwnerError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("", response_model=list[CarRead])
def list_cars(db: DB, _user: Member) -> list[CarRead]:
    """All cars, each with its owner's id and name."""
    return [CarRead.model_validate(car) for car in car_service.list_cars(db)]


@router.get("/brand/{brand}", response_model=list[CarRead])
def list_cars_by_brand(brand: str, db: DB, _user: Member) -> list[CarRead]:
    """Cars of one brand (exact match). 404 when there are none."""
    cars = car_service.list_cars_by_brand(db, brand)
    if not cars:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No cars of brand '{brand}' found",
        )
    return [CarRead.model_validate(car) for car in cars]


@router.get("/{car_id}", response_model=CarRead)
def get_car(car_id: int, db: DB, _user: Member) -> CarRead:
    try:
        car = car_service.get_car(db, car_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    return CarRead.model_validate(car)


@router.post("", response_model=CarRead, status_code=status.HTTP_201_CREATED)
def create_car(
    body: CarWrite, db: DB, _user: Member, request: Request, response: Response
) -> CarRead:
    """Create a car for an existing owner. 400 if owner_id does not exist."""
    try:
        car = car_service.create_car(db, body)
    except UnknownOwnerError as e:
        raise _unknown_owner(e) from e
    response.headers["Location"] = str(request.url_for("get_car", car_id=car.id))
    return CarRead.model_validate(car)


@router.put("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
def replace_car(car_id: int, body: CarWrite, db: DB, _user: Member) -> Response:
    """Overwrite every field of the car, owner_id included."""
    try:
        car_service.replace_car(db, car_id, body)
    except NotFoundError as e:
        raise _not_found(e) from e
    except UnknownOwnerError as e:
        raise _unknown_owner(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
def patch_car(car_id: int, body: CarPatch, db: DB, _user: Member) -> Response:
    """
    Update only the supplied fields.

    Empty strings for brand/model/color are ignored; year and price are
    applied whenever present, including zero.
    """
    try:
        car_service.patch_car(db, car_id, body)
    except NotFoundError as e:
        raise _not_found(e) from e
    except UnknownOwnerError as e:
        raise _unknown_owner(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_car(car_id: int, db: DB, _user: Member) -> Response:
    try:
        car_service.delete_car(db, car_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
