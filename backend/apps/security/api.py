"""
Auth API endpoints.

Handles the token lifecycle over HTTP:
- Basic credentials exchanged for a signed token pair
- Caller identity from a bearer token or auth cookie
- Logout by expiring the token cookies
"""

from django.conf import settings
from django.contrib.auth import authenticate
from django.http import HttpRequest, HttpResponse
from ninja import Router

from apps.core.logging import get_logger
from apps.problems.exceptions import ApiError
from apps.problems.schemas import problem_responses
from apps.security.auth import JWTAuth, get_request_user
from apps.security.cookies import remove_token_cookies, respond_with_auth_cookies
from apps.security.headers import decode_basic_authorization
from apps.security.schemas import RequestUserResponse, TokenResponse
from apps.security.tokens import create_refresh_token, get_token_service

logger = get_logger(__name__)

router = Router(tags=["auth"])
jwt_auth = JWTAuth()


@router.post(
    "/token",
    response=problem_responses(200, TokenResponse),
    auth=None,
    operation_id="issueToken",
    summary="Exchange Basic credentials for a token",
)
def issue_token(request: HttpRequest) -> HttpResponse:
    """
    Authenticate with ``Authorization: Basic ...`` and issue a token pair.

    Tokens are set as cookies. The body carries them only when DEBUG is on.
    """
    credentials = decode_basic_authorization(request.headers.get("Authorization"))
    user = authenticate(request, username=credentials.username, password=credentials.password)
    if user is None:
        logger.info("token_request_rejected", username=credentials.username)
        raise ApiError(401, "Invalid username or password.")

    roles = list(user.groups.order_by("name").values_list("name", flat=True))
    service = get_token_service()
    token_response = TokenResponse(
        access_token=service.create_standard_token(user.get_username(), roles),
        expires_in=service.config.default_lifetime_seconds,
        refresh_token=create_refresh_token(),
        scope=" ".join(roles),
    )
    return respond_with_auth_cookies(token_response, debug=settings.DEBUG)


@router.get(
    "/me",
    response=problem_responses(200, RequestUserResponse),
    auth=jwt_auth,
    operation_id="getRequestUser",
    summary="Get the authenticated caller",
)
def me(request: HttpRequest) -> RequestUserResponse:
    user = get_request_user(request)
    return RequestUserResponse(username=user.username, roles=user.roles)


@router.post(
    "/logout",
    response={204: None},
    auth=None,
    operation_id="logout",
    summary="Clear the token cookies",
)
def logout(request: HttpRequest) -> HttpResponse:
    response = HttpResponse(status=204)
    remove_token_cookies(response)
    return response
