"""
Car reads and mutations.

Every mutation validates the owner reference before touching any field, so a
rejected owner id leaves the stored car exactly as it was. Each successful
mutation is committed as one transaction; concurrent writers to the same car
resolve as last-writer-wins.
"""

import logging

from sqlalchemy.orm import Session, joinedload

from app.models import Car, Owner
from app.schemas.car import CarPatch, CarWrite
from app.services.errors import NotFoundError, UnknownOwnerError

logger = logging.getLogger(__name__)

# Patch fields where an empty string means "not supplied".
PATCH_STRING_FIELDS = ("brand", "model", "color")
# Patch fields applied whenever a value is present, zero included.
PATCH_VALUE_FIELDS = ("year", "price")


def _car_not_found(car_id: int) -> NotFoundError:
    return NotFoundError(f"Car with id {car_id} not found")


def owner_exists(session: Session, owner_id: int) -> bool:
    return session.query(Owner.id).filter(Owner.id == owner_id).first() is not None


def _require_owner(session: Session, owner_id: int) -> None:
    if not owner_exists(session, owner_id):
        raise UnknownOwnerError(owner_id)


def _require_car(session: Session, car_id: int) -> Car:
    car = session.get(Car, car_id)
    if car is None:
        raise _car_not_found(car_id)
    return car


def list_cars(session: Session) -> list[Car]:
    """All cars with their owner loaded, ordered by id."""
    return (
        session.query(Car).options(joinedload(Car.owner)).order_by(Car.id).all()
    )


def list_cars_by_brand(session: Session, brand: str) -> list[Car]:
    """Cars whose brand equals brand exactly."""
    return (
        session.query(Car)
        .options(joinedload(Car.owner))
        .filter(Car.brand == brand)
        .order_by(Car.id)
        .all()
    )


def get_car(session: Session, car_id: int) -> Car:
    car = (
        session.query(Car)
        .options(joinedload(Car.owner))
        .filter(Car.id == car_id)
        .first()
    )
    if car is None:
        raise _car_not_found(car_id)
    return car


def create_car(session: Session, data: CarWrite) -> Car:
    """
    Insert a car after checking its owner exists.

    Returns the car with owner loaded. Raises UnknownOwnerError if owner_id
    does not resolve.
    """
    _require_owner(session, data.owner_id)
    car = Car(
        brand=data.brand,
        model=data.model,
        color=data.color,
        year=data.year,
        price=data.price,
        owner_id=data.owner_id,
    )
    session.add(car)
    session.commit()
    session.refresh(car)
    logger.info("Created car id=%s owner_id=%s", car.id, car.owner_id)
    return car


def replace_car(session: Session, car_id: int, data: CarWrite) -> Car:
    """
    Overwrite every field of a car, owner_id included.

    Raises NotFoundError for an unknown car and UnknownOwnerError for an
    unknown owner; in both cases nothing is written.
    """
    car = _require_car(session, car_id)
    _require_owner(session, data.owner_id)

    car.brand = data.brand
    car.model = data.model
    car.color = data.color
    car.year = data.year
    car.price = data.price
    car.owner_id = data.owner_id
    session.commit()
    logger.info("Replaced car id=%s", car_id)
    return car


def apply_patch(car: Car, changes: CarPatch) -> list[str]:
    """
    Copy supplied fields from changes onto car; return the names changed.

    Does not validate owner_id; callers check it first.
    """
    applied: list[str] = []
    for field in PATCH_STRING_FIELDS:
        value = getattr(changes, field)
        if value:
            setattr(car, field, value)
            applied.append(field)
    for field in PATCH_VALUE_FIELDS:
        value = getattr(changes, field)
        if value is not None:
            setattr(car, field, value)
            applied.append(field)
    if changes.owner_id is not None:
        car.owner_id = changes.owner_id
        applied.append("owner_id")
    return applied


def patch_car(session: Session, car_id: int, changes: CarPatch) -> Car:
    """
    Update only the supplied fields of a car.

    Raises NotFoundError for an unknown car. If owner_id is supplied and does
    not resolve, raises UnknownOwnerError before any field is modified.
    """
    car = _require_car(session, car_id)
    if changes.owner_id is not None:
        _require_owner(session, changes.owner_id)

    applied = apply_patch(car, changes)
    session.commit()
    logger.info("Patched car id=%s fields=%s", car_id, ",".join(applied) or "-")
    return car


def delete_car(session: Session, car_id: int) -> None:
    car = _require_car(session, car_id)
    session.delete(car)
    session.commit()
    logger.info("Deleted car id=%s", car_id)
