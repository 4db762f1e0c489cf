"""Administrative views: user management and catalogue statistics."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Car, Owner, User
from app.schemas.admin import BrandCount, StatsResponse
from app.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def list_users(session: Session) -> list[User]:
    return session.query(User).order_by(User.id).all()


def delete_user(session: Session, user_id: int) -> None:
    """Delete an account by id. Raises NotFoundError if it does not exist."""
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    session.delete(user)
    session.commit()
    logger.info("Deleted user id=%s", user_id)


def collect_stats(session: Session) -> StatsResponse:
    """Totals per table plus car counts grouped by brand (brand ascending)."""
    rows = (
        session.query(Car.brand, func.count(Car.id))
        .group_by(Car.brand)
        .order_by(Car.brand)
        .all()
    )
    return StatsResponse(
        total_cars=session.query(func.count(Car.id)).scalar() or 0,
        total_owners=session.query(func.count(Owner.id)).scalar() or 0,
        total_users=session.query(func.count(User.id)).scalar() or 0,
        cars_by_brand=[BrandCount(brand=brand, count=count) for brand, count in rows],
    )
