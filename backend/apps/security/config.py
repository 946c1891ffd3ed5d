"""
Read-only security configuration built from Django settings.

Values are captured once per call to the builder functions; callers that hold
a config object see a consistent snapshot.
"""

from dataclasses import dataclass

from django.conf import settings

SAME_SITE_VALUES = {"strict": "Strict", "lax": "Lax", "none": "None"}


@dataclass(frozen=True)
class TokenConfig:
    """
    JWT signing configuration.

    Attributes:
        secret: Shared secret for HS256 signing
        default_lifetime_seconds: Lifetime used by create_standard_token
        rsa_key_path: PEM private key file for RS256 signing (optional)
        key_id: Value for the ``kid`` header (optional)
    """

    secret: str
    default_lifetime_seconds: int
    rsa_key_path: str = ""
    key_id: str = ""


@dataclass(frozen=True)
class CookieConfig:
    """Auth cookie names and flags."""

    auth_token_cookie_name: str = "X-Auth-Token"
    refresh_token_cookie_name: str = "X-Refresh-Token"
    lifetime_days: int = 30
    http_only: bool = True
    secure: bool = True
    same_site: str = "Strict"

    @property
    def same_site_mode(self) -> str:
        """Normalized SameSite value; unknown values fall back to Strict."""
        return SAME_SITE_VALUES.get(self.same_site.lower(), "Strict")


@dataclass(frozen=True)
class MfaConfig:
    """TOTP parameters."""

    secret_key: str = ""
    totp_size: int = 6
    step: int = 30


def get_token_config() -> TokenConfig:
    return TokenConfig(
        secret=settings.TOKEN_SECRET,
        default_lifetime_seconds=settings.TOKEN_DEFAULT_LIFETIME_SECONDS,
        rsa_key_path=getattr(settings, "TOKEN_RSA_KEY_PATH", ""),
        key_id=getattr(settings, "TOKEN_SIGNING_KEY_ID", ""),
    )


def get_cookie_config() -> CookieConfig:
    return CookieConfig(
        auth_token_cookie_name=settings.COOKIE_AUTH_TOKEN_NAME,
        refresh_token_cookie_name=settings.COOKIE_REFRESH_TOKEN_NAME,
        lifetime_days=settings.COOKIE_LIFETIME_DAYS,
        http_only=settings.COOKIE_HTTP_ONLY,
        secure=settings.COOKIE_SECURE,
        same_site=settings.COOKIE_SAME_SITE,
    )


def get_mfa_config() -> MfaConfig:
    return MfaConfig(
        secret_key=getattr(settings, "MFA_SECRET_KEY", ""),
        totp_size=getattr(settings, "MFA_TOTP_SIZE", 6),
        step=getattr(settings, "MFA_STEP", 30),
    )
