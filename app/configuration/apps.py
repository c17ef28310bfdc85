"""
Configuration app configuration.
"""

from django.apps import AppConfig


class ConfigurationConfig(AppConfig):
    """Configuration for the tenant settings store."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "configuration"
    verbose_name = "Configuration"
