"""
Base Django settings for the API commons.

Shared configuration for all environments.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

from apps.core.logging import configure_logging


class Settings(BaseSettings):
    """Environment-based configuration using pydantic-settings."""

    SECRET_KEY: str = "django-insecure-change-me-in-production"
    DEBUG: bool = False
    ALLOWED_HOSTS: list[str] = []
    TIME_ZONE: str = "UTC"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Tokens
    TOKEN_SECRET: str = "change-me-to-a-secret-of-at-least-32-bytes"
    TOKEN_DEFAULT_LIFETIME_SECONDS: int = 3600
    TOKEN_RSA_KEY_PATH: str = ""
    TOKEN_SIGNING_KEY_ID: str = ""

    # Auth cookies
    COOKIE_AUTH_TOKEN_NAME: str = "X-Auth-Token"
    COOKIE_REFRESH_TOKEN_NAME: str = "X-Refresh-Token"
    COOKIE_LIFETIME_DAYS: int = 30
    COOKIE_HTTP_ONLY: bool = True
    COOKIE_SECURE: bool = True
    COOKIE_SAME_SITE: str = "Strict"

    # MFA (TOTP)
    MFA_SECRET_KEY: str = ""
    MFA_TOTP_SIZE: int = 6
    MFA_STEP: int = 30

    # Notifications
    NOTIFICATIONS_SENDER_COMPANY: str = ""
    NOTIFICATIONS_SENDER_SYSTEM: str = ""
    NOTIFICATIONS_MAIL_SENDER: str = "no-reply@example.com"
    NOTIFICATIONS_RECOVERY_PAGE_URL: str = ""
    NOTIFICATIONS_CONFIRMATION_PAGE_URL: str = ""
    NOTIFICATIONS_RECOVERY_TOKEN_LIFETIME_SECONDS: int = 86400

    # SMTP (consumed by Django's mail backend)
    EMAIL_HOST: str = "localhost"
    EMAIL_PORT: int = 25
    EMAIL_HOST_USER: str = ""
    EMAIL_HOST_PASSWORD: str = ""
    EMAIL_USE_TLS: bool = True

    # Static files written by StaticFileStore
    STATIC_FILES_DIR: str = "uploads"
    STATIC_FILES_URL: str = "/uploads"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = settings.SECRET_KEY

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = settings.DEBUG

ALLOWED_HOSTS = settings.ALLOWED_HOSTS

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    # Local apps
    "apps.core",
    "apps.problems",
    "apps.security",
    "apps.notifications",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "apps.core.middleware.RequestContextMiddleware",
    "apps.problems.middleware.ProblemDetailMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
]

ROOT_URLCONF = "config.urls"

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = settings.TIME_ZONE
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Tokens
TOKEN_SECRET = settings.TOKEN_SECRET
TOKEN_DEFAULT_LIFETIME_SECONDS = settings.TOKEN_DEFAULT_LIFETIME_SECONDS
TOKEN_RSA_KEY_PATH = settings.TOKEN_RSA_KEY_PATH
TOKEN_SIGNING_KEY_ID = settings.TOKEN_SIGNING_KEY_ID

# Auth cookies
COOKIE_AUTH_TOKEN_NAME = settings.COOKIE_AUTH_TOKEN_NAME
COOKIE_REFRESH_TOKEN_NAME = settings.COOKIE_REFRESH_TOKEN_NAME
COOKIE_LIFETIME_DAYS = settings.COOKIE_LIFETIME_DAYS
COOKIE_HTTP_ONLY = settings.COOKIE_HTTP_ONLY
COOKIE_SECURE = settings.COOKIE_SECURE
COOKIE_SAME_SITE = settings.COOKIE_SAME_SITE

# MFA
MFA_SECRET_KEY = settings.MFA_SECRET_KEY
MFA_TOTP_SIZE = settings.MFA_TOTP_SIZE
MFA_STEP = settings.MFA_STEP

# Notifications
NOTIFICATIONS_SENDER_COMPANY = settings.NOTIFICATIONS_SENDER_COMPANY
NOTIFICATIONS_SENDER_SYSTEM = settings.NOTIFICATIONS_SENDER_SYSTEM
NOTIFICATIONS_MAIL_SENDER = settings.NOTIFICATIONS_MAIL_SENDER
NOTIFICATIONS_RECOVERY_PAGE_URL = settings.NOTIFICATIONS_RECOVERY_PAGE_URL
NOTIFICATIONS_CONFIRMATION_PAGE_URL = settings.NOTIFICATIONS_CONFIRMATION_PAGE_URL
NOTIFICATIONS_RECOVERY_TOKEN_LIFETIME_SECONDS = settings.NOTIFICATIONS_RECOVERY_TOKEN_LIFETIME_SECONDS

# Email
EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
EMAIL_HOST = settings.EMAIL_HOST
EMAIL_PORT = settings.EMAIL_PORT
EMAIL_HOST_USER = settings.EMAIL_HOST_USER
EMAIL_HOST_PASSWORD = settings.EMAIL_HOST_PASSWORD
EMAIL_USE_TLS = settings.EMAIL_USE_TLS

# Static files
STATIC_FILES_DIR = settings.STATIC_FILES_DIR
STATIC_FILES_URL = settings.STATIC_FILES_URL

configure_logging(json_format=settings.LOG_JSON, log_level=settings.LOG_LEVEL)
