"""
Per-tenant Stripe credential and routing resolution.

Every Stripe call is authenticated and routed according to the
organizer owning the event:

    Connect mode (PLATFORM_MODE_ENABLED):
        api_key = platform secret key (system scope)
        stripe_account = organizer's connected account id
    Direct mode:
        api_key = organizer's own secret key
        stripe_account = None

Nothing is cached. Options are resolved again for every call so that a
deauthorized connected account stops being used immediately.

Usage:
    from gateway.resolver import CredentialResolver

    resolver = CredentialResolver()
    options = resolver.request_options(event)
    stripe.Charge.retrieve("ch_123", **options.as_kwargs())
"""

from __future__ import annotations

import logging

from configuration.keys import ConfigurationKey, ConfigurationPath
from configuration.services import ConfigurationManager

from gateway.fees import FeeCalculator
from gateway.types import Event, RequestOptions

logger = logging.getLogger(__name__)


class CredentialResolver:
    """
    Resolves Stripe keys and request options from the configuration store.

    Args:
        configuration: Configuration service (ConfigurationManager by default)
    """

    def __init__(self, configuration: type[ConfigurationManager] = ConfigurationManager):
        self.configuration = configuration

    @staticmethod
    def _event_path(event: Event, key: ConfigurationKey) -> ConfigurationPath:
        return ConfigurationPath.event(event.organization_id, event.id, key)

    def is_connect_enabled(self, event: Event) -> bool:
        """Whether platform fee mode is on for the event's organizer."""
        return self.configuration.get_boolean_value(
            self._event_path(event, ConfigurationKey.PLATFORM_MODE_ENABLED),
            default=False,
        )

    def get_secret_key(self, event: Event) -> str:
        """
        Get the secret key used for the event's charges.

        Raises:
            ConfigurationMissingError: No secret key is configured
        """
        if self.is_connect_enabled(event):
            return self.get_system_api_key()
        return self.configuration.get_required_value(
            self._event_path(event, ConfigurationKey.STRIPE_SECRET_KEY)
        )

    def get_system_api_key(self) -> str:
        """Get the platform's own secret key."""
        return self.configuration.get_required_value(
            ConfigurationPath.system(ConfigurationKey.STRIPE_SECRET_KEY)
        )

    def get_webhook_signature_key(self) -> str:
        """Get the signing secret of the platform's webhook endpoint."""
        return self.configuration.get_required_value(
            ConfigurationPath.system(ConfigurationKey.STRIPE_WEBHOOK_KEY)
        )

    def get_public_key(self, event: Event) -> str:
        """
        Get the publishable key for the event's checkout page.

        In Connect mode tokens are created with the platform's key.
        """
        if self.is_connect_enabled(event):
            return self.configuration.get_required_value(
                ConfigurationPath.system(ConfigurationKey.STRIPE_PUBLIC_KEY)
            )
        return self.configuration.get_required_value(
            self._event_path(event, ConfigurationKey.STRIPE_PUBLIC_KEY)
        )

    def get_connected_account_id(self, event: Event) -> str:
        """Get the organizer's connected account id (acct_xxx)."""
        return self.configuration.get_required_value(
            self._event_path(event, ConfigurationKey.STRIPE_CONNECTED_ID)
        )

    def request_options(self, event: Event) -> RequestOptions:
        """
        Build the routing options for one Stripe call.

        Args:
            event: Event the call is made for

        Returns:
            RequestOptions for the current configuration

        Raises:
            ConfigurationMissingError: A required key is not configured
        """
        if self.is_connect_enabled(event):
            options = RequestOptions(
                api_key=self.get_system_api_key(),
                stripe_account=self.get_connected_account_id(event),
            )
        else:
            options = RequestOptions(
                api_key=self.configuration.get_required_value(
                    self._event_path(event, ConfigurationKey.STRIPE_SECRET_KEY)
                ),
            )

        logger.debug(
            "Resolved Stripe request options",
            extra={
                "organization_id": event.organization_id,
                "event_id": event.id,
                "connected": options.stripe_account is not None,
            },
        )
        return options

    def fee_calculator(self, event: Event) -> FeeCalculator:
        """Build the platform fee calculator configured for the event."""
        return FeeCalculator(
            self.configuration.get_string_value(
                self._event_path(event, ConfigurationKey.PLATFORM_FEE), default="0"
            ),
            self.configuration.get_string_value(
                self._event_path(event, ConfigurationKey.PLATFORM_MINIMUM_FEE), default="0"
            ),
        )
