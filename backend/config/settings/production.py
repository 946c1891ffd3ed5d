"""
Production settings.

Security-hardened settings for deployed environments.
All secrets are read from environment variables.
"""

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403
from .base import settings

DEBUG = False
ALLOWED_HOSTS = settings.ALLOWED_HOSTS

SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
COOKIE_SECURE = True

if len(settings.TOKEN_SECRET.encode()) < 32:
    raise ImproperlyConfigured("TOKEN_SECRET must be at least 32 bytes for HS256 signing")
