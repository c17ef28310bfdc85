"""
Configuration service for reading and writing tenant settings.

ConfigurationManager is the only way other apps touch ConfigurationEntry.
It never caches: every call reads the database, so a revoked Stripe
Connect credential stops being used on the very next lookup.

Usage:
    from configuration.keys import ConfigurationKey, ConfigurationPath
    from configuration.services import ConfigurationManager

    # Fails loudly when unset
    secret = ConfigurationManager.get_required_value(
        ConfigurationPath.event(org_id, event_id, ConfigurationKey.STRIPE_SECRET_KEY)
    )

    # Optional with default
    enabled = ConfigurationManager.get_boolean_value(
        ConfigurationPath.event(org_id, event_id, ConfigurationKey.PLATFORM_MODE_ENABLED),
        default=False,
    )

    # Persist at organization scope
    ConfigurationManager.save_value(
        ConfigurationPath.organization(org_id, ConfigurationKey.STRIPE_CONNECTED_ID),
        "acct_123",
    )
"""

from __future__ import annotations

from django.db.models import Q

from core.services import BaseService

from configuration.exceptions import ConfigurationMissingError
from configuration.keys import ConfigurationKey, ConfigurationPath
from configuration.models import ConfigurationEntry


TRUE_VALUES = frozenset(["true", "1", "yes", "on"])


class ConfigurationManager(BaseService):
    """
    Stateless service over ConfigurationEntry.

    Reads resolve a ConfigurationPath through its candidates
    (event → organization → system) and return the first stored value.
    Writes and deletes operate on a single exact scope.
    """

    @classmethod
    def _lookup(cls, path: ConfigurationPath) -> str | None:
        """
        Return the most specific stored value for a path, or None.

        All candidate scopes are fetched in one query and resolved in
        candidate order.
        """
        candidates = path.candidates()
        scope_filter = Q()
        for candidate in candidates:
            scope_filter |= Q(
                organization_id=candidate.organization_id,
                event_id=candidate.event_id,
            )

        stored = {
            (organization_id, event_id): value
            for organization_id, event_id, value in ConfigurationEntry.objects.filter(
                scope_filter, key=path.key
            ).values_list("organization_id", "event_id", "value")
        }

        for candidate in candidates:
            value = stored.get((candidate.organization_id, candidate.event_id))
            if value is not None:
                return value
        return None

    @classmethod
    def get_required_value(cls, path: ConfigurationPath) -> str:
        """
        Get a value that must be configured.

        Args:
            path: Key and scope to resolve

        Returns:
            The stored value

        Raises:
            ConfigurationMissingError: No non-blank value at any candidate scope
        """
        value = cls._lookup(path)
        if value is None or not value.strip():
            raise ConfigurationMissingError(path)
        return value

    @classmethod
    def get_string_value(cls, path: ConfigurationPath, default: str | None = None) -> str | None:
        """
        Get an optional string value.

        Args:
            path: Key and scope to resolve
            default: Returned when nothing is stored

        Returns:
            The stored value or default
        """
        value = cls._lookup(path)
        return default if value is None else value

    @classmethod
    def get_boolean_value(cls, path: ConfigurationPath, default: bool = False) -> bool:
        """
        Get an optional boolean value.

        "true", "1", "yes" and "on" (any case) are true; any other stored
        value is false.
        """
        value = cls._lookup(path)
        if value is None:
            return default
        return value.strip().lower() in TRUE_VALUES

    @classmethod
    def save_value(cls, path: ConfigurationPath, value: str) -> ConfigurationEntry:
        """
        Create or replace the value stored at exactly this path's scope.

        Args:
            path: Key and scope to write
            value: Raw string value

        Returns:
            The saved ConfigurationEntry
        """
        with cls.atomic():
            entry, created = ConfigurationEntry.objects.update_or_create(
                key=path.key,
                organization_id=path.organization_id,
                event_id=path.event_id,
                defaults={"value": value},
            )

        cls.get_logger().info(
            "Configuration value saved",
            extra={
                "key": str(path.key),
                "level": str(path.level),
                "organization_id": path.organization_id,
                "event_id": path.event_id,
                "was_created": created,
            },
        )
        return entry

    @classmethod
    def delete_organization_level_by_key(
        cls,
        key: ConfigurationKey,
        organization_id: int,
        actor: str,
    ) -> int:
        """
        Delete the organization-scoped value of a key.

        Event-level overrides of the same key are left untouched.

        Args:
            key: Configuration key to delete
            organization_id: Owning organization
            actor: Username recorded in the audit log

        Returns:
            Number of deleted entries (0 or 1)
        """
        with cls.atomic():
            deleted, _ = ConfigurationEntry.objects.filter(
                key=key,
                organization_id=organization_id,
                event_id__isnull=True,
            ).delete()

        cls.get_logger().info(
            "Organization configuration deleted",
            extra={
                "key": str(key),
                "organization_id": organization_id,
                "actor": actor,
                "deleted": deleted,
            },
        )
        return deleted

    @classmethod
    def find_organization_id_by_key_and_value(
        cls,
        key: ConfigurationKey,
        value: str,
    ) -> int | None:
        """
        Find the organization owning an organization-scoped value.

        Used to map a Stripe connected account id back to its organizer.

        Returns:
            The organization id, or None if no organization stores this value
        """
        return (
            ConfigurationEntry.objects.filter(
                key=key,
                value=value,
                organization_id__isnull=False,
                event_id__isnull=True,
            )
            .values_list("organization_id", flat=True)
            .first()
        )
