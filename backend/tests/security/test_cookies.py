"""
Tests for auth cookie helpers.
"""

import json
from dataclasses import replace

import pytest
from django.http import HttpResponse

from apps.security.config import CookieConfig, get_cookie_config
from apps.security.cookies import (
    AUTH_SUCCESS_MESSAGE,
    remove_token_cookies,
    respond_with_auth_cookies,
    set_token_cookie,
)
from apps.security.schemas import TokenResponse


@pytest.fixture
def cookie_config() -> CookieConfig:
    return CookieConfig(
        auth_token_cookie_name="X-Auth-Token",
        refresh_token_cookie_name="X-Refresh-Token",
        lifetime_days=7,
        http_only=True,
        secure=True,
        same_site="lax",
    )


@pytest.fixture
def token_response() -> TokenResponse:
    return TokenResponse(access_token="access.jwt.value", expires_in=3600, refresh_token="refresh-value", scope="admin")


class TestSetTokenCookie:
    """Tests for cookie flags."""

    def test_flags_follow_config(self, cookie_config: CookieConfig) -> None:
        response = HttpResponse()

        set_token_cookie(response, "abc", "X-Auth-Token", cookie_config)

        cookie = response.cookies["X-Auth-Token"]
        assert cookie.value == "abc"
        assert cookie["max-age"] == 7 * 86400
        assert cookie["httponly"] is True
        assert cookie["secure"] is True
        assert cookie["samesite"] == "Lax"

    def test_insecure_cookie(self, cookie_config: CookieConfig) -> None:
        config = replace(cookie_config, secure=False, http_only=False)
        response = HttpResponse()

        set_token_cookie(response, "abc", "X-Auth-Token", config)

        cookie = response.cookies["X-Auth-Token"]
        assert not cookie["secure"]
        assert not cookie["httponly"]


class TestSameSiteMode:
    """Tests for SameSite normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("strict", "Strict"), ("LAX", "Lax"), ("None", "None"), ("bogus", "Strict"), ("", "Strict")],
    )
    def test_same_site_mode(self, value: str, expected: str) -> None:
        assert CookieConfig(same_site=value).same_site_mode == expected


class TestRemoveTokenCookies:
    """Tests for logout cookie removal."""

    def test_expires_both_cookies(self, cookie_config: CookieConfig) -> None:
        response = HttpResponse()

        remove_token_cookies(response, cookie_config)

        for name in ("X-Auth-Token", "X-Refresh-Token"):
            assert response.cookies[name].value == ""
            assert response.cookies[name]["max-age"] == 0


class TestRespondWithAuthCookies:
    """Tests for the token response body."""

    def test_debug_returns_tokens(self, cookie_config: CookieConfig, token_response: TokenResponse) -> None:
        response = respond_with_auth_cookies(token_response, cookie_config, debug=True)

        body = json.loads(response.content)
        assert body["access_token"] == "access.jwt.value"
        assert body["refresh_token"] == "refresh-value"
        assert body["token_type"] == "Bearer"

    def test_non_debug_hides_tokens(self, cookie_config: CookieConfig, token_response: TokenResponse) -> None:
        response = respond_with_auth_cookies(token_response, cookie_config, debug=False)

        assert json.loads(response.content) == {"message": AUTH_SUCCESS_MESSAGE}
        assert b"access.jwt.value" not in response.content

    @pytest.mark.parametrize("debug", [True, False])
    def test_cookies_always_set(self, cookie_config: CookieConfig, token_response: TokenResponse, debug: bool) -> None:
        response = respond_with_auth_cookies(token_response, cookie_config, debug=debug)

        assert response.cookies["X-Auth-Token"].value == "access.jwt.value"
        assert response.cookies["X-Refresh-Token"].value == "refresh-value"


class TestGetCookieConfig:
    """Tests for reading cookie settings."""

    def test_reads_settings(self, settings) -> None:
        settings.COOKIE_LIFETIME_DAYS = 2
        settings.COOKIE_SAME_SITE = "none"

        config = get_cookie_config()

        assert config.lifetime_days == 2
        assert config.same_site_mode == "None"
