"""ORM model for cars."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class Car(Base):
    """
    A car always belongs to exactly one existing owner.

    price is stored as NUMERIC so values round-trip as Decimal without float drift.
    owner_id is RESTRICT on delete: owners with cars cannot be removed.
    """

    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, autoincrement=True)
    brand = Column(String(255), nullable=False, index=True)
    model = Column(String(255), nullable=False)
    color = Column(String(64), nullable=False)
    year = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    owner_id = Column(
        Integer,
        ForeignKey("owners.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    owner = relationship("Owner", back_populates="cars")
