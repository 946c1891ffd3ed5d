"""
Exceptions translated into problem details.

Each class maps to one ErrorKind. They do not share a base class so the
translator can classify by concrete type in a fixed precedence order.
"""

from dataclasses import dataclass
from http import HTTPStatus


@dataclass(frozen=True)
class InvalidParam:
    """A single field that failed validation."""

    name: str
    reason: str


class ApiError(Exception):
    """
    Application error carrying its own HTTP status.

    Args:
        status_code: HTTP status to respond with (100-599).
        message: Client-facing message, used as the problem detail.
        title: Optional short title. Defaults to a generic application title.

    Raises:
        ValueError: If status_code is not a valid HTTP status.
    """

    def __init__(self, status_code: int, message: str, title: str | None = None) -> None:
        if not 100 <= status_code <= 599:
            raise ValueError(f"Invalid HTTP status code: {status_code}")
        super().__init__(message)
        self.status_code = int(status_code)
        self.message = message
        self.title = title


class TokenInvalidError(ApiError):
    """Token signature or structure could not be verified."""

    def __init__(self, message: str = "The token is invalid.") -> None:
        super().__init__(HTTPStatus.UNAUTHORIZED, message, title="Invalid Token")


class ValidationParamsError(Exception):
    """One or more request parameters failed validation."""

    def __init__(self, errors: list[InvalidParam]) -> None:
        super().__init__("Validation errors were found.")
        self.errors = list(errors)


class TokenExpiredError(Exception):
    """Token signature is valid but its expiry has passed."""

    def __init__(self, message: str = "The token you are using is no longer valid.") -> None:
        super().__init__(message)
        self.message = message


class DataNotFoundError(Exception):
    """Required data does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
