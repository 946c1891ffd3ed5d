"""
Lookup helpers that raise DataNotFoundError instead of returning nothing.

Work with plain iterables and Django querysets alike.
"""

from collections.abc import Iterable
from typing import TypeVar

from django.db.models import QuerySet

from apps.problems.exceptions import DataNotFoundError

T = TypeVar("T")

EMPTY_LIST_MESSAGE = "The list is empty."


def first_or_raise(source: Iterable[T], message: str) -> T:
    """Return the first element of ``source`` or raise DataNotFoundError."""
    if isinstance(source, QuerySet):
        result = source.first()
        if result is None:
            raise DataNotFoundError(message)
        return result

    for item in source:
        if item is None:
            break
        return item
    raise DataNotFoundError(message)


def list_or_raise(source: Iterable[T], message: str = EMPTY_LIST_MESSAGE) -> list[T]:
    """Materialize ``source`` into a list, raising DataNotFoundError if empty."""
    items = list(source)
    if not items:
        raise DataNotFoundError(message)
    return items
