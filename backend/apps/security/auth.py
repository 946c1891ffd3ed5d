"""
Request authentication for django-ninja endpoints.

JWTAuth verifies the bearer token and stores the DecodedToken on
``request.auth``; get_request_user turns it into a RequestUser.
"""

from dataclasses import dataclass, field

from django.http import HttpRequest
from ninja.security import HttpBearer

from apps.core.logging import get_logger
from apps.problems.exceptions import ApiError
from apps.security.headers import extract_token
from apps.security.tokens import DecodedToken, TokenService, get_token_service

logger = get_logger(__name__)

ANONYMOUS_USERNAME = "anonymous"


@dataclass(frozen=True)
class RequestUser:
    """
    Identity of the caller.

    Attributes:
        username: Name claim of the token, or "anonymous"
        roles: Role claims in token order
    """

    username: str = ANONYMOUS_USERNAME
    roles: list[str] = field(default_factory=list)

    @property
    def is_anonymous(self) -> bool:
        return self.username == ANONYMOUS_USERNAME

    def has_role(self, role: str) -> bool:
        return role in self.roles


def get_request_user(request: HttpRequest) -> RequestUser:
    """
    Resolve the caller from ``request.auth``.

    Returns an anonymous user when the request carries no decoded token.

    Raises:
        ApiError: 404 if an authenticated user has no roles
    """
    decoded = getattr(request, "auth", None)
    if not isinstance(decoded, DecodedToken) or decoded.name is None:
        return RequestUser()

    username = decoded.name
    roles = decoded.roles
    if not roles:
        raise ApiError(404, f"No roles were found for user {username}.")

    logger.info("request_user_resolved", username=username)
    return RequestUser(username=username, roles=roles)


class JWTAuth(HttpBearer):
    """
    Bearer token authentication backed by TokenService.

    Reads the token from the Authorization header or the auth cookie. An
    expired token raises TokenExpiredError and a forged one TokenInvalidError;
    both reach the client as problem details.
    """

    def __init__(self, token_service: TokenService | None = None, cookie_name: str | None = None) -> None:
        super().__init__()
        self.token_service = token_service
        self.cookie_name = cookie_name

    def __call__(self, request: HttpRequest) -> DecodedToken | None:
        token = extract_token(request, self.cookie_name)
        if not token:
            return None
        return self.authenticate(request, token)

    def authenticate(self, request: HttpRequest, token: str) -> DecodedToken | None:
        service = self.token_service or get_token_service()
        return service.decode(token)
