"""
Authorization header parsing.
"""

import base64
import binascii

from django.http import HttpRequest

from apps.problems.exceptions import ApiError
from apps.security.config import get_cookie_config
from apps.security.schemas import Credentials

BEARER_PREFIX = "Bearer "
BASIC_PREFIX = "Basic "


def decode_basic_authorization(authorization: str | None) -> Credentials:
    """
    Decode ``Basic base64(username:password)``.

    The password may itself contain colons; only the first colon separates it
    from the username.

    Raises:
        ApiError: 400 if the scheme, encoding or credential format is invalid
    """
    if not authorization or not authorization[: len(BASIC_PREFIX)].lower() == BASIC_PREFIX.lower():
        raise ApiError(400, "Invalid authorization header format.")

    encoded = authorization[len(BASIC_PREFIX) :].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise ApiError(400, "Invalid authorization header format.") from None

    username, separator, password = decoded.partition(":")
    if not separator:
        raise ApiError(400, "Invalid credentials format.")

    return Credentials(username=username, password=password)


def extract_token(request: HttpRequest, cookie_name: str | None = None) -> str | None:
    """
    Read a bearer token from the Authorization header, falling back to the
    auth cookie.
    """
    authorization = request.headers.get("Authorization", "")
    if authorization[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
        token = authorization[len(BEARER_PREFIX) :].strip()
        if token:
            return token

    name = cookie_name or get_cookie_config().auth_token_cookie_name
    return request.COOKIES.get(name) or None
