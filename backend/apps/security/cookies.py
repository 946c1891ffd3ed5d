"""
Auth cookie helpers.

Tokens can travel in HttpOnly cookies instead of the response body. Cookie
names and flags come from CookieConfig.
"""

from django.http import HttpResponse, JsonResponse

from apps.security.config import CookieConfig, get_cookie_config
from apps.security.schemas import AuthMessageResponse, TokenResponse

SECONDS_PER_DAY = 86400
AUTH_SUCCESS_MESSAGE = "Authentication successful."


def set_token_cookie(
    response: HttpResponse,
    token: str,
    cookie_name: str,
    config: CookieConfig | None = None,
) -> None:
    """Attach ``token`` as a cookie using the configured flags and lifetime."""
    config = config or get_cookie_config()
    response.set_cookie(
        cookie_name,
        token,
        max_age=config.lifetime_days * SECONDS_PER_DAY,
        secure=config.secure,
        httponly=config.http_only,
        samesite=config.same_site_mode,
    )


def remove_token_cookies(response: HttpResponse, config: CookieConfig | None = None) -> None:
    """Expire both the access and refresh token cookies."""
    config = config or get_cookie_config()
    for cookie_name in (config.auth_token_cookie_name, config.refresh_token_cookie_name):
        response.delete_cookie(cookie_name, samesite=config.same_site_mode)


def respond_with_auth_cookies(
    token_response: TokenResponse,
    config: CookieConfig | None = None,
    debug: bool = False,
) -> JsonResponse:
    """
    Build a 200 response that sets both token cookies.

    The token payload is echoed in the body only when ``debug`` is true;
    otherwise the body is a generic success message.
    """
    config = config or get_cookie_config()
    if debug:
        body = token_response.model_dump()
    else:
        body = AuthMessageResponse(message=AUTH_SUCCESS_MESSAGE).model_dump()

    response = JsonResponse(body)
    set_token_cookie(response, token_response.access_token, config.auth_token_cookie_name, config)
    set_token_cookie(response, token_response.refresh_token, config.refresh_token_cookie_name, config)
    return response
