"""
Configuration store exceptions.

Exception Hierarchy:
    NotFoundError (core)
    └── ConfigurationMissingError - A required setting is not configured

ConfigurationMissingError is fatal for the operation that raised it: it
signals operator misconfiguration and must not be retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import NotFoundError

if TYPE_CHECKING:
    from configuration.keys import ConfigurationPath


class ConfigurationMissingError(NotFoundError):
    """
    Raised when a required configuration value is absent or blank.

    Attributes:
        path: The ConfigurationPath that was looked up

    Example:
        except ConfigurationMissingError as e:
            logger.error(f"Fix configuration: {e.path}")
    """

    default_error_code: str = "CONFIGURATION_MISSING"

    def __init__(self, path: ConfigurationPath):
        super().__init__(
            f"Required configuration {path} is not set",
            details={
                "key": str(path.key),
                "organization_id": path.organization_id,
                "event_id": path.event_id,
            },
        )
        self.path = path
