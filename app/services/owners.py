"""Owner reads, creation and restricted deletion."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.models import Car, Owner
from app.schemas.owner import OwnerCreate
from app.services.errors import NotFoundError, OwnerHasCarsError

logger = logging.getLogger(__name__)


def list_owners(session: Session) -> list[Owner]:
    """All owners with their cars loaded, ordered by id."""
    return (
        session.query(Owner).options(selectinload(Owner.cars)).order_by(Owner.id).all()
    )


def get_owner(session: Session, owner_id: int) -> Owner:
    owner = (
        session.query(Owner)
        .options(selectinload(Owner.cars))
        .filter(Owner.id == owner_id)
        .first()
    )
    if owner is None:
        raise NotFoundError(f"Owner with id {owner_id} not found")
    return owner


def create_owner(session: Session, data: OwnerCreate) -> Owner:
    owner = Owner(first_name=data.first_name, last_name=data.last_name)
    session.add(owner)
    session.commit()
    session.refresh(owner)
    logger.info("Created owner id=%s", owner.id)
    return owner


def delete_owner(session: Session, owner_id: int) -> None:
    """
    Delete an owner that has no cars.

    Raises NotFoundError for an unknown owner and OwnerHasCarsError when
    cars still reference it; the owner and its cars are left untouched then.
    """
    owner = session.get(Owner, owner_id)
    if owner is None:
        raise NotFoundError(f"Owner with id {owner_id} not found")

    car_count = (
        session.query(func.count(Car.id)).filter(Car.owner_id == owner_id).scalar() or 0
    )
    if car_count:
        logger.info("Refused to delete owner id=%s with %s car(s)", owner_id, car_count)
        raise OwnerHasCarsError(owner_id, car_count)

    session.delete(owner)
    session.commit()
    logger.info("Deleted owner id=%s", owner_id)
