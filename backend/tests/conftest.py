"""
Shared pytest fixtures for all tests.

Time-dependent services take a Clock; use the ``frozen_clock`` fixture and
call ``advance()`` instead of sleeping.

Example usage:

    def test_expiry(token_service, frozen_clock):
        token = token_service.create({"name": "ana"}, 60)
        frozen_clock.advance(61)
        with pytest.raises(TokenExpiredError):
            token_service.decode(token)
"""

from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from django.test import Client, RequestFactory

from apps.core.clock import Clock
from apps.problems.translator import ErrorTranslator
from apps.security.config import TokenConfig
from apps.security.tokens import TokenService

TEST_TOKEN_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_KEY_ID = "commons-test-key-1"
# A quarter second past the minute: issued-at times are truncated to whole seconds
FROZEN_MOMENT = datetime(2024, 5, 1, 12, 0, 0, 250000, tzinfo=UTC)


class FrozenClock(Clock):
    """Clock pinned to a fixed moment that only moves when told to."""

    def __init__(self, moment: datetime = FROZEN_MOMENT, time_zone: str = "UTC") -> None:
        super().__init__(time_zone)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment.astimezone(self.zone)

    def advance(self, seconds: float) -> None:
        self.moment += timedelta(seconds=seconds)


def write_rsa_private_key(path: Path) -> Path:
    """Generate a 2048-bit RSA key and write it to ``path`` as PKCS#8 PEM."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    path.write_bytes(
        private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def mock_logger() -> MagicMock:
    """Stand-in for a structlog logger; assert on its method calls."""
    return MagicMock()


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig(secret=TEST_TOKEN_SECRET, default_lifetime_seconds=3600, key_id=TEST_KEY_ID)


@pytest.fixture
def token_service(token_config: TokenConfig, frozen_clock: FrozenClock, mock_logger: MagicMock) -> TokenService:
    return TokenService(config=token_config, clock=frozen_clock, logger=mock_logger)


@pytest.fixture
def rsa_key_path(tmp_path: Path) -> Path:
    return write_rsa_private_key(tmp_path / "signing-key.pem")


@pytest.fixture
def translator(frozen_clock: FrozenClock, mock_logger: MagicMock) -> ErrorTranslator:
    return ErrorTranslator(clock=frozen_clock, logger=mock_logger)


@pytest.fixture
def request_factory() -> RequestFactory:
    """
    Django request factory for unit testing views and middleware.

    Example:
        def test_view(request_factory):
            request = request_factory.get("/api/v1/endpoint")
    """
    return RequestFactory()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Goes through middleware, URL routing and the ninja exception handlers.

    Example:
        def test_api_returns_200(api_client):
            response = api_client.get("/api/v1/health")
            assert response.status_code == 200
    """
    return Client()
