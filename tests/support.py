"""Shared fixtures for tests: in-memory SQLite database, fixed clock, token service."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import TokenService, hash_password
from app.models import Base, Car, Owner, Role, User

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_ISSUER = "CarDatabaseAPI"
TEST_AUDIENCE = "CarDatabaseClient"
# Low bcrypt cost keeps tests fast; production uses settings.BCRYPT_ROUNDS.
TEST_BCRYPT_ROUNDS = 4


class FixedClock:
    """Callable clock whose time is set explicitly by the test."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def make_token_service(clock=None, secret: str = TEST_SECRET, **kwargs) -> TokenService:
    params = {"issuer": TEST_ISSUER, "audience": TEST_AUDIENCE}
    params.update(kwargs)
    if clock is not None:
        params["clock"] = clock
    return TokenService(secret, **params)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables and SQLite foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def add_owner(session: Session, first_name: str = "John", last_name: str = "Doe") -> Owner:
    owner = Owner(first_name=first_name, last_name=last_name)
    session.add(owner)
    session.commit()
    return owner


def add_car(session: Session, owner: Owner, **overrides: object) -> Car:
    fields = {
        "brand": "Toyota",
        "model": "Corolla",
        "color": "White",
        "year": 2020,
        "price": Decimal("25000"),
    }
    fields.update(overrides)
    car = Car(owner_id=owner.id, **fields)
    session.add(car)
    session.commit()
    return car


def add_user(
    session: Session, username: str, password: str, role: Role = Role.USER
) -> User:
    user = User(
        username=username,
        password_hash=hash_password(password, rounds=TEST_BCRYPT_ROUNDS),
        role=role.value,
    )
    session.add(user)
    session.commit()
    return user


def car_state(session_factory: sessionmaker, car_id: int) -> tuple | None:
    """Stored column values of a car, read through a new session."""
    with session_factory() as session:
        car = session.get(Car, car_id)
        if car is None:
            return None
        return (car.brand, car.model, car.color, car.year, car.price, car.owner_id)
