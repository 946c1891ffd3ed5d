"""
Field validators for request data.

Each validator returns an InvalidParam describing the failure, or None when
the value is acceptable. Collect the results and pass them to
raise_for_invalid to report every failure in one ValidationParamsError.

Usage:
    raise_for_invalid(
        validate_email(payload.email),
        validate_password(payload.password),
    )
"""

import re
from collections.abc import Iterable
from datetime import date
from pathlib import PurePath

from apps.problems.exceptions import InvalidParam, ValidationParamsError

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9-]+(\.[a-zA-Z]{2,})+$",
    re.IGNORECASE,
)

PASSWORD_MIN_LENGTH = 6
# At least two of these character classes must be present
PASSWORD_CHARACTER_CLASSES = (re.compile(r"[a-z]"), re.compile(r"[A-Z]"), re.compile(r"[0-9]"))


def validate_email(value: str | None, field: str = "email") -> InvalidParam | None:
    """None is accepted; mark the field required elsewhere if it must be present."""
    if value is None:
        return None
    if EMAIL_PATTERN.match(value):
        return None
    return InvalidParam(field, f"The email address {value} is not in a valid format.")


def validate_password(value: str | None, field: str = "password") -> InvalidParam | None:
    """
    Require at least six characters and two of: lowercase, uppercase, digit.
    """
    reason = (
        f"The password must be at least {PASSWORD_MIN_LENGTH} characters long and combine "
        "at least two of lowercase letters, uppercase letters and digits."
    )
    if not value or len(value) < PASSWORD_MIN_LENGTH:
        return InvalidParam(field, reason)

    classes_present = sum(1 for pattern in PASSWORD_CHARACTER_CLASSES if pattern.search(value))
    if classes_present < 2:
        return InvalidParam(field, reason)
    return None


def validate_file_extension(
    file_name: str | None, allowed: Iterable[str], field: str = "file"
) -> InvalidParam | None:
    """
    Check the extension case-insensitively. ``allowed`` entries include the
    dot, e.g. ``[".pdf", ".png"]``.
    """
    if file_name is None:
        return None
    allowed_extensions = [extension.lower() for extension in allowed]
    if PurePath(file_name).suffix.lower() in allowed_extensions:
        return None
    return InvalidParam(
        field,
        f"The file '{file_name}' does not have a valid extension. "
        f"Allowed extensions: {', '.join(allowed_extensions)}.",
    )


def validate_file_size(
    size: int | None, max_size: int, field: str = "file", message: str | None = None
) -> InvalidParam | None:
    if size is None or size <= max_size:
        return None
    return InvalidParam(field, message or f"The file must not exceed {max_size} bytes.")


def month_difference(start: date, end: date) -> int:
    """Calendar months between two dates, ignoring the day of month."""
    return (end.year - start.year) * 12 + end.month - start.month


def validate_date_range(
    start: date | None, end: date | None, max_months: int, field: str = "dateRange"
) -> InvalidParam | None:
    """
    Require ``start <= end`` and at most ``max_months`` calendar months between
    them. An open range (either bound missing) is accepted.
    """
    if start is None or end is None:
        return None
    if start > end:
        return InvalidParam(field, "The start date must be before or equal to the end date.")
    if month_difference(start, end) > max_months:
        return InvalidParam(field, f"The difference between the dates must not exceed {max_months} months.")
    return None


def raise_for_invalid(*results: InvalidParam | None) -> None:
    """
    Raises:
        ValidationParamsError: If any result is not None, listing all of them
    """
    errors = [result for result in results if result is not None]
    if errors:
        raise ValidationParamsError(errors)
