"""
Configuration keys and scoped lookup paths.

Keys are Django TextChoices so they double as model field choices and
admin filters. A ConfigurationPath names a key at one of three scope
levels:

    SYSTEM        platform-wide value (no organization, no event)
    ORGANIZATION  value owned by one organizer
    EVENT         value for a single event of an organizer

Reads walk the candidates of a path from most to least specific, writes
always target the exact level of the path.

Usage:
    from configuration.keys import ConfigurationKey, ConfigurationPath

    path = ConfigurationPath.event(12, 345, ConfigurationKey.PLATFORM_FEE)
    [c.level for c in path.candidates()]
    # [EVENT, ORGANIZATION, SYSTEM]
"""

from __future__ import annotations

from dataclasses import dataclass

from django.db import models


class ConfigurationKey(models.TextChoices):
    """Settings used by the payment gateway integration."""

    BASE_URL = "BASE_URL", "Platform base URL"
    STRIPE_SECRET_KEY = "STRIPE_SECRET_KEY", "Stripe secret key"
    STRIPE_PUBLIC_KEY = "STRIPE_PUBLIC_KEY", "Stripe publishable key"
    STRIPE_WEBHOOK_KEY = "STRIPE_WEBHOOK_KEY", "Stripe webhook signing secret"
    STRIPE_CONNECT_CLIENT_ID = "STRIPE_CONNECT_CLIENT_ID", "Stripe Connect client id"
    STRIPE_CONNECT_CALLBACK = "STRIPE_CONNECT_CALLBACK", "Stripe Connect callback URL"
    STRIPE_CONNECTED_ID = "STRIPE_CONNECTED_ID", "Stripe connected account id"
    PLATFORM_MODE_ENABLED = "PLATFORM_MODE_ENABLED", "Platform fee mode enabled"
    PLATFORM_FEE = "PLATFORM_FEE", "Platform fee (amount or percentage)"
    PLATFORM_MINIMUM_FEE = "PLATFORM_MINIMUM_FEE", "Platform minimum fee per ticket"


class ConfigurationLevel(models.TextChoices):
    """Scope level of a configuration value."""

    SYSTEM = "system", "System"
    ORGANIZATION = "organization", "Organization"
    EVENT = "event", "Event"


@dataclass(frozen=True)
class ConfigurationPath:
    """
    A configuration key bound to a scope.

    Attributes:
        key: The configuration key
        organization_id: Owning organization (None for system scope)
        event_id: Event within the organization (None above event scope)
    """

    key: ConfigurationKey
    organization_id: int | None = None
    event_id: int | None = None

    def __post_init__(self) -> None:
        if self.event_id is not None and self.organization_id is None:
            raise ValueError("event scope requires an organization_id")

    @classmethod
    def system(cls, key: ConfigurationKey) -> ConfigurationPath:
        return cls(key=key)

    @classmethod
    def organization(cls, organization_id: int, key: ConfigurationKey) -> ConfigurationPath:
        return cls(key=key, organization_id=organization_id)

    @classmethod
    def event(
        cls,
        organization_id: int,
        event_id: int,
        key: ConfigurationKey,
    ) -> ConfigurationPath:
        return cls(key=key, organization_id=organization_id, event_id=event_id)

    @property
    def level(self) -> ConfigurationLevel:
        if self.event_id is not None:
            return ConfigurationLevel.EVENT
        if self.organization_id is not None:
            return ConfigurationLevel.ORGANIZATION
        return ConfigurationLevel.SYSTEM

    def candidates(self) -> list[ConfigurationPath]:
        """
        Return the lookup chain for this path, most specific first.

        Returns:
            Paths for the same key at this level and every level above it
        """
        chain = [self]
        if self.event_id is not None:
            chain.append(ConfigurationPath.organization(self.organization_id, self.key))
        if self.organization_id is not None:
            chain.append(ConfigurationPath.system(self.key))
        return chain

    def __str__(self) -> str:
        if self.level == ConfigurationLevel.EVENT:
            return f"{self.key}@organization:{self.organization_id}/event:{self.event_id}"
        if self.level == ConfigurationLevel.ORGANIZATION:
            return f"{self.key}@organization:{self.organization_id}"
        return f"{self.key}@system"
