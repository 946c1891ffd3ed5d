"""
JWT lifecycle: create, sign, decode and expire bearer tokens.

Signature verification and expiry are checked in two separate steps. PyJWT's
own lifetime checks are disabled and expiry is compared against the injected
Clock with zero skew, so an expired but correctly signed token raises
TokenExpiredError while a forged or malformed one raises TokenInvalidError.
"""

import base64
import secrets
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Any

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from apps.core.clock import Clock, get_clock
from apps.core.logging import get_logger
from apps.problems.exceptions import (
    ApiError,
    InvalidParam,
    TokenExpiredError,
    TokenInvalidError,
    ValidationParamsError,
)
from apps.security.config import TokenConfig, get_token_config

NAME_CLAIM = "name"
ROLE_CLAIM = "role"
RESERVED_CLAIMS = frozenset({"iat", "nbf", "exp"})
PUBLIC_KEY_MARKER = "-----BEGIN PUBLIC KEY-----"

# 64 bytes = 512 bits
REFRESH_TOKEN_SIZE = 64

# Library-level checks that are either handled manually or not used at all
DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}

Claims = dict[str, list[str]]


class SigningAlgorithm(StrEnum):
    HS256 = "HS256"
    RS256 = "RS256"


@dataclass(frozen=True)
class SigningKey:
    """
    Key material for signing and verifying tokens.

    RSA keys are referenced by file path and re-read on every use, so a
    rotated key file takes effect on the next call. Signing needs a private
    key PEM; verification accepts either a private or a public key PEM.
    """

    algorithm: SigningAlgorithm
    secret: str = field(default="", repr=False)
    key_path: str = ""

    @classmethod
    def symmetric(cls, secret: str) -> "SigningKey":
        if not secret:
            raise ValueError("Token secret is not configured")
        return cls(algorithm=SigningAlgorithm.HS256, secret=secret)

    @classmethod
    def rsa(cls, key_path: str) -> "SigningKey":
        if not key_path:
            raise ValueError("TOKEN_RSA_KEY_PATH is not configured")
        return cls(algorithm=SigningAlgorithm.RS256, key_path=key_path)

    def signing_material(self) -> str:
        """Secret for HS256, or the PEM private key read from disk for RS256."""
        if self.algorithm is SigningAlgorithm.HS256:
            return self.secret
        return Path(self.key_path).read_text()

    def verification_material(self) -> str:
        """Secret for HS256, or the PEM public key for RS256."""
        if self.algorithm is SigningAlgorithm.HS256:
            return self.secret
        pem = self.signing_material()
        if PUBLIC_KEY_MARKER in pem:
            return pem
        private_key = load_pem_private_key(pem.encode(), password=None)
        public_key_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return public_key_pem.decode()


@dataclass(frozen=True)
class DecodedToken:
    """Claims and validity window of a verified token."""

    claims: Claims
    expires_at: datetime
    issued_at: datetime | None = None
    not_before: datetime | None = None

    @property
    def name(self) -> str | None:
        values = self.claims.get(NAME_CLAIM)
        return values[0] if values else None

    @property
    def roles(self) -> list[str]:
        return list(self.claims.get(ROLE_CLAIM, []))


def normalize_claims(claims: Mapping[str, str | Sequence[str]]) -> Claims:
    """Coerce a claim mapping into ``{type: [values...]}``, keeping order."""
    normalized: Claims = {}
    for claim_type, value in claims.items():
        if isinstance(value, str):
            normalized[claim_type] = [value]
        else:
            normalized[claim_type] = [str(item) for item in value]
    return normalized


def _claims_to_payload(claims: Claims) -> dict[str, Any]:
    """Single values are written as strings, multiple values as arrays."""
    payload: dict[str, Any] = {}
    for claim_type, values in claims.items():
        payload[claim_type] = values[0] if len(values) == 1 else list(values)
    return payload


def _claims_from_payload(payload: Mapping[str, Any]) -> Claims:
    claims: Claims = {}
    for claim_type, value in payload.items():
        if claim_type in RESERVED_CLAIMS:
            continue
        if isinstance(value, list):
            claims[claim_type] = [str(item) for item in value]
        else:
            claims[claim_type] = [str(value)]
    return claims


def create_refresh_token() -> str:
    """Generate an opaque, cryptographically random refresh token."""
    return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_SIZE)).decode()


class TokenService:
    """
    Issues and validates signed JWTs.

    Args:
        config: Token configuration. Defaults to the values in Django settings.
        clock: Source of "now" for issue and expiry times.
        logger: structlog logger. Defaults to this module's logger.
    """

    def __init__(
        self,
        config: TokenConfig | None = None,
        clock: Clock | None = None,
        logger: Any = None,
    ) -> None:
        self.config = config or get_token_config()
        self.clock = clock or get_clock()
        self.logger = logger or get_logger(__name__)

    @property
    def default_signing_key(self) -> SigningKey:
        return SigningKey.symmetric(self.config.secret)

    def create(
        self,
        claims: Mapping[str, str | Sequence[str]],
        lifetime_seconds: int,
        signing_key: SigningKey | None = None,
    ) -> str:
        """
        Create a signed token.

        Args:
            claims: Claim types mapped to one or more values. May be empty,
                but every claim present needs at least one value.
            lifetime_seconds: Seconds from now until the token expires (>= 0).
            signing_key: Key to sign with. Defaults to the configured HS256 secret.

        Returns:
            Encoded JWT string

        Raises:
            ValidationParamsError: If lifetime_seconds is negative or puts the
                expiry past the representable date range, or a claim uses a
                reserved name or has no values.
        """
        normalized = normalize_claims(claims)
        issued_at = int(self.clock.timestamp())

        errors = []
        if lifetime_seconds < 0:
            errors.append(InvalidParam("lifetime_seconds", "Must be zero or greater."))
        elif not self._is_representable(issued_at + lifetime_seconds):
            errors.append(InvalidParam("lifetime_seconds", "Expiry is out of the supported date range."))
        for claim_type, values in normalized.items():
            if claim_type in RESERVED_CLAIMS:
                errors.append(InvalidParam(f"claims.{claim_type}", "Is a reserved claim name."))
            elif not values:
                errors.append(InvalidParam(f"claims.{claim_type}", "Must have at least one value."))
        if errors:
            raise ValidationParamsError(errors)

        key = signing_key or self.default_signing_key
        payload = _claims_to_payload(normalized)
        payload.update(
            {
                "iat": issued_at,
                "nbf": issued_at,
                "exp": issued_at + lifetime_seconds,
            }
        )

        headers = {"kid": self.config.key_id} if self.config.key_id else None
        token = jwt.encode(
            payload,
            key.signing_material(),
            algorithm=key.algorithm.value,
            headers=headers,
        )

        self.logger.info(
            "token_created",
            claims=normalized,
            lifetime_seconds=lifetime_seconds,
            algorithm=key.algorithm.value,
        )
        return token

    def create_standard_token(self, username: str, roles: Sequence[str]) -> str:
        """
        Create a token with one name claim and one role entry per role.

        Roles keep their order and are not de-duplicated; with no roles the role
        claim is omitted. Uses the default lifetime and the configured HS256 secret.
        """
        claims: Claims = {NAME_CLAIM: [username]}
        if roles:
            claims[ROLE_CLAIM] = list(roles)
        return self.create(claims, self.config.default_lifetime_seconds)

    def create_rsa_token(self, claims: Mapping[str, str | Sequence[str]], lifetime_seconds: int) -> str:
        """Create an RS256 token, reading the private key from TOKEN_RSA_KEY_PATH."""
        return self.create(claims, lifetime_seconds, SigningKey.rsa(self.config.rsa_key_path))

    def decode(self, token: str, signing_key: SigningKey | None = None) -> DecodedToken:
        """
        Verify a token's signature, then its expiry, then its claims.

        Raises:
            TokenInvalidError: Signature does not verify, token is malformed or
                a time claim is out of range
            TokenExpiredError: Signature verifies but the token has expired
            ApiError: 422 if the token carries no claims
        """
        key = signing_key or self.default_signing_key
        try:
            payload = jwt.decode(
                token,
                key.verification_material(),
                algorithms=[key.algorithm.value],
                options=DECODE_OPTIONS,
            )
        except jwt.InvalidTokenError as e:
            self.logger.warning("token_invalid", error=str(e))
            raise TokenInvalidError() from None

        expires = payload.get("exp")
        if not isinstance(expires, int | float):
            self.logger.warning("token_invalid", error="missing or malformed exp claim")
            raise TokenInvalidError()

        expires_at = self._token_time("exp", expires)
        issued_at = self._optional_time("iat", payload.get("iat"))
        not_before = self._optional_time("nbf", payload.get("nbf"))

        now = self.clock.now()
        if now.timestamp() > expires:
            self.logger.warning("token_expired", now=now.isoformat(), expires_at=expires_at.isoformat())
            raise TokenExpiredError()

        claims = _claims_from_payload(payload)
        if not claims:
            self.logger.warning("token_without_claims")
            raise ApiError(422, "The token does not contain valid information.")

        return DecodedToken(
            claims=claims,
            expires_at=expires_at,
            issued_at=issued_at,
            not_before=not_before,
        )

    def _is_representable(self, value: float) -> bool:
        try:
            self.clock.from_timestamp(value)
        except (ValueError, OverflowError, OSError):
            return False
        return True

    def _token_time(self, claim: str, value: float) -> datetime:
        """Convert a time claim, treating out-of-range values as an invalid token."""
        try:
            return self.clock.from_timestamp(value)
        except (ValueError, OverflowError, OSError):
            self.logger.warning("token_invalid", error=f"{claim} claim is out of range")
            raise TokenInvalidError() from None

    def _optional_time(self, claim: str, value: Any) -> datetime | None:
        if isinstance(value, int | float):
            return self._token_time(claim, value)
        return None


def get_token_service() -> TokenService:
    """TokenService bound to the current Django settings."""
    return TokenService()
