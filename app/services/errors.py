"""Domain errors raised by the service layer and translated to HTTP by the routers."""


class ServiceError(Exception):
    """Base class for service errors; carries a caller-safe message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when the referenced record does not exist."""


class UnknownOwnerError(ServiceError):
    """Raised when a car references an owner id that does not exist."""

    def __init__(self, owner_id: int) -> None:
        self.owner_id = owner_id
        super().__init__(f"Owner with id {owner_id} not found")


class DuplicateUsernameError(ServiceError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Username already exists")


class InvalidCredentialsError(ServiceError):
    """Raised for any failed login; never says whether the user or the password was wrong."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class OwnerHasCarsError(ServiceError):
    """Raised when deleting an owner that still owns cars."""

    def __init__(self, owner_id: int, car_count: int) -> None:
        self.owner_id = owner_id
        self.car_count = car_count
        super().__init__(
            f"Owner with id {owner_id} still owns {car_count} car(s); "
            "reassign or delete them first"
        )
