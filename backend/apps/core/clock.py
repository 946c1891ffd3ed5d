"""
Clock abstraction.

Components that stamp or compare times take a Clock instead of calling
``datetime.now()`` so tests can pin "now" without sleeping.
"""

from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings


class Clock:
    """
    Current time in a fixed IANA time zone.

    Args:
        time_zone: IANA zone name, e.g. "America/Guatemala".

    Raises:
        ValueError: If the zone name is empty or unknown.
    """

    def __init__(self, time_zone: str = "UTC") -> None:
        if not time_zone:
            raise ValueError("time_zone must not be empty")
        try:
            self.zone = ZoneInfo(time_zone)
        except ZoneInfoNotFoundError:
            raise ValueError(f"Unknown time zone: {time_zone}") from None

    def now(self) -> datetime:
        """Return the current time as an aware datetime in the configured zone."""
        return datetime.now(self.zone)

    def timestamp(self) -> float:
        """Return the current time as POSIX seconds."""
        return self.now().timestamp()

    def from_timestamp(self, value: float) -> datetime:
        """Convert POSIX seconds into an aware datetime in the configured zone."""
        return datetime.fromtimestamp(value, self.zone)


@lru_cache(maxsize=1)
def get_clock() -> Clock:
    """Process-wide clock built from ``settings.TIME_ZONE``."""
    return Clock(settings.TIME_ZONE)
