"""
Pydantic schemas for authentication endpoints.
"""

from ninja import Schema
from pydantic import Field


class TokenResponse(Schema):
    """OAuth2-style token payload."""

    access_token: str = Field(description="Signed JWT for the Authorization header")
    token_type: str = Field(default="Bearer", description="Always 'Bearer'")
    expires_in: int = Field(description="Seconds until the access token expires")
    refresh_token: str = Field(description="Opaque refresh token")
    scope: str = Field(description="Space-separated roles granted to the token")


class AuthMessageResponse(Schema):
    """Returned instead of the tokens when they travel only in cookies."""

    message: str


class Credentials(Schema):
    """Username and password decoded from a Basic authorization header."""

    username: str
    password: str


class RequestUserResponse(Schema):
    """Identity resolved from the request's token."""

    username: str
    roles: list[str]
