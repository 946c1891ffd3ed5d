"""
Core utility functions.
"""

from typing import cast

from django.http import HttpRequest

UNAVAILABLE_IP = "unavailable"


def get_client_ip(request: HttpRequest, default: str = UNAVAILABLE_IP) -> str:
    """
    Extract the client IP address.

    Lookup order: X-Real-IP (set by the reverse proxy), the first entry of
    X-Forwarded-For, then REMOTE_ADDR.

    Args:
        request: The Django HTTP request.
        default: Fallback value when no IP can be determined.

    Returns:
        The client IP address, or default if not available.
    """
    real_ip: str | None = request.META.get("HTTP_X_REAL_IP")
    if real_ip:
        return real_ip.strip()
    x_forwarded_for: str | None = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    remote_addr = cast(str | None, request.META.get("REMOTE_ADDR"))
    if remote_addr:
        return remote_addr
    return default


def to_title_case(value: str) -> str:
    """
    Title-case a string after lowering it.

    "JUAN pérez" -> "Juan Pérez"
    """
    return value.lower().title()
