"""ORM model for car owners."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class Owner(Base):
    """Owner of zero or more cars."""

    __tablename__ = "owners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)

    cars = relationship("Car", back_populates="owner", order_by="Car.id")
