"""
Security app configuration.
"""

from django.apps import AppConfig


class SecurityConfig(AppConfig):
    """Configuration for security app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.security"
    verbose_name = "Tokens, MFA & Cookies"
