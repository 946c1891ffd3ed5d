"""Problem details app configuration."""

from django.apps import AppConfig


class ProblemsConfig(AppConfig):
    """Configuration for problems app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.problems"
    verbose_name = "Problem Details"
