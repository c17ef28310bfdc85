"""
ConfigurationEntry model for tenant-scoped settings.

Each row holds one value for one key at one scope level. The scope is
encoded by which of organization_id / event_id are set:

    organization_id  event_id  level
    NULL             NULL      system
    set              NULL      organization
    set              set       event

Organizations and events are owned by the ticketing platform; this app
only stores their integer ids.

Usage:
    from configuration.models import ConfigurationEntry

    ConfigurationEntry.objects.create(
        key=ConfigurationKey.STRIPE_CONNECTED_ID,
        value="acct_1234567890",
        organization_id=12,
    )
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q

from core.models import BaseModel

from configuration.keys import ConfigurationKey, ConfigurationLevel


class ConfigurationEntry(BaseModel):
    """
    One configuration value at system, organization, or event scope.

    Fields:
        key: Configuration key (see ConfigurationKey)
        value: Raw string value; typed parsing happens in ConfigurationManager
        organization_id: Owning organization (NULL for system scope)
        event_id: Event within the organization (NULL above event scope)

    Constraints:
        At most one value per key and scope. Because NULLs never compare
        equal in unique indexes, each level gets its own partial constraint.
    """

    key = models.CharField(
        max_length=64,
        choices=ConfigurationKey.choices,
        db_index=True,
        help_text="Configuration key",
    )

    value = models.TextField(
        blank=True,
        help_text="Raw configuration value",
    )

    organization_id = models.PositiveIntegerField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Organization this value belongs to (empty for system scope)",
    )

    event_id = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Event this value belongs to (empty above event scope)",
    )

    class Meta:
        ordering = ["key", "organization_id", "event_id"]
        verbose_name = "Configuration Entry"
        verbose_name_plural = "Configuration Entries"
        constraints = [
            models.UniqueConstraint(
                fields=["key"],
                condition=Q(organization_id__isnull=True, event_id__isnull=True),
                name="unique_system_configuration_key",
            ),
            models.UniqueConstraint(
                fields=["key", "organization_id"],
                condition=Q(organization_id__isnull=False, event_id__isnull=True),
                name="unique_organization_configuration_key",
            ),
            models.UniqueConstraint(
                fields=["key", "organization_id", "event_id"],
                condition=Q(event_id__isnull=False),
                name="unique_event_configuration_key",
            ),
            models.CheckConstraint(
                condition=Q(event_id__isnull=True) | Q(organization_id__isnull=False),
                name="event_configuration_requires_organization",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation with key and scope."""
        return f"ConfigurationEntry({self.key}, {self.level})"

    @property
    def level(self) -> ConfigurationLevel:
        """Scope level derived from the populated id columns."""
        if self.event_id is not None:
            return ConfigurationLevel.EVENT
        if self.organization_id is not None:
            return ConfigurationLevel.ORGANIZATION
        return ConfigurationLevel.SYSTEM
