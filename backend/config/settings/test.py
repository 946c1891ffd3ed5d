"""
Test settings.

In-memory database, local-memory mail outbox and deterministic secrets.
"""

from .base import *  # noqa: F403

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

TOKEN_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TOKEN_DEFAULT_LIFETIME_SECONDS = 3600
TOKEN_RSA_KEY_PATH = ""
TOKEN_SIGNING_KEY_ID = "commons-test-key-1"

COOKIE_SECURE = True

# RFC 6238 test seed ("12345678901234567890") in base32
MFA_SECRET_KEY = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

NOTIFICATIONS_SENDER_COMPANY = "Acme"
NOTIFICATIONS_SENDER_SYSTEM = "Portal"
NOTIFICATIONS_MAIL_SENDER = "no-reply@acme.test"
NOTIFICATIONS_RECOVERY_PAGE_URL = "https://portal.acme.test/recover?token="
NOTIFICATIONS_CONFIRMATION_PAGE_URL = "https://portal.acme.test/confirm?token="
NOTIFICATIONS_RECOVERY_TOKEN_LIFETIME_SECONDS = 7200
