"""
TOTP multi-factor codes (RFC 6238).

Uses the TOTP primitive from ``cryptography`` with SHA-1, which is what
authenticator apps expect. Secrets are base32 strings.
"""

import base64
import binascii
import secrets
from typing import Any

from cryptography.hazmat.primitives.hashes import SHA1
from cryptography.hazmat.primitives.twofactor import InvalidToken
from cryptography.hazmat.primitives.twofactor.totp import TOTP
from django.core.exceptions import ImproperlyConfigured

from apps.core.clock import Clock, get_clock
from apps.core.logging import get_logger
from apps.security.config import MfaConfig, get_mfa_config

# Accept the previous and next step to tolerate drift between devices
VERIFICATION_WINDOW = 1

# 160-bit secrets, the size recommended by RFC 4226
SECRET_SIZE_BYTES = 20


def generate_secret() -> str:
    """Create a new random base32 secret for enrolling an authenticator."""
    return base64.b32encode(secrets.token_bytes(SECRET_SIZE_BYTES)).decode()


def _decode_secret(secret: str) -> bytes:
    cleaned = secret.replace(" ", "").upper()
    padding = "=" * (-len(cleaned) % 8)
    try:
        return base64.b32decode(cleaned + padding)
    except binascii.Error:
        raise ValueError("MFA secret is not valid base32") from None


class MfaService:
    """
    Generates and validates time-based one-time codes.

    Args:
        config: TOTP parameters. Defaults to the values in Django settings.
        clock: Source of the current time.
    """

    def __init__(
        self,
        config: MfaConfig | None = None,
        clock: Clock | None = None,
        logger: Any = None,
    ) -> None:
        self.config = config or get_mfa_config()
        self.clock = clock or get_clock()
        self.logger = logger or get_logger(__name__)

    def _totp(self, secret: str) -> TOTP:
        return TOTP(
            _decode_secret(secret),
            self.config.totp_size,
            SHA1(),
            self.config.step,
            enforce_key_length=False,
        )

    def _resolve_secret(self, secret: str | None) -> str:
        if secret is None:
            if not self.config.secret_key.strip():
                raise ImproperlyConfigured("MFA_SECRET_KEY is not configured")
            return self.config.secret_key
        if not secret.strip():
            raise ValueError("MFA secret must not be empty")
        return secret

    def create(self, secret: str | None = None) -> str:
        """
        Generate the current code.

        Args:
            secret: Base32 secret. Defaults to MFA_SECRET_KEY.

        Raises:
            ImproperlyConfigured: No secret given and none configured
            ValueError: Secret is blank or not base32
        """
        totp = self._totp(self._resolve_secret(secret))
        return totp.generate(self.clock.timestamp()).decode()

    def validate(self, code: str, secret: str | None = None) -> bool:
        """
        Check a code against the current step and one step either side.

        Raises:
            ImproperlyConfigured: No secret given and none configured
            ValueError: Secret or code is blank, or secret is not base32
        """
        resolved = self._resolve_secret(secret)
        if not code or not code.strip():
            raise ValueError("MFA code must not be empty")

        totp = self._totp(resolved)
        now = self.clock.timestamp()
        for offset in range(-VERIFICATION_WINDOW, VERIFICATION_WINDOW + 1):
            try:
                totp.verify(code.strip().encode(), now + offset * self.config.step)
            except InvalidToken:
                continue
            return True

        self.logger.info("mfa_code_rejected")
        return False
