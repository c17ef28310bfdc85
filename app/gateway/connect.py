"""
Stripe Connect OAuth flow.

Organizers connect their Stripe account to the platform in two steps:

    1. begin_authorization() builds the authorize URL and remembers the
       state token together with the organization it was issued for.
    2. Stripe redirects back with ?code=&state=. complete_authorization()
       consumes the state (once) and exchanges the code for the connected
       account id, stored as STRIPE_CONNECTED_ID at organization scope.

The lower-level get_connect_url() / store_connected_account_id() take a
key resolver (ConfigurationKey -> ConfigurationPath) so they can be used
for any scope.

Usage:
    from gateway.connect import ConnectFlow

    flow = ConnectFlow()
    connect_url = flow.begin_authorization(organization_id=12)
    # redirect to connect_url.authorization_url

    result = flow.complete_authorization(code=request.GET["code"], state=request.GET["state"])
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable

import stripe
from django.conf import settings
from django.core.cache import cache

from configuration.keys import ConfigurationKey, ConfigurationPath
from configuration.services import ConfigurationManager
from core.helpers import generate_token

from gateway.resolver import CredentialResolver
from gateway.types import ConnectResult, ConnectURL

logger = logging.getLogger(__name__)

KeyResolver = Callable[[ConfigurationKey], ConfigurationPath]

CONNECT_REDIRECT_PATH = "/admin/configuration/payment/stripe/authorize"
CONNECT_SCOPE = "read_write"
STATE_CACHE_PREFIX = "stripe_connect_state:"
INVALID_STATE_MESSAGE = "Invalid or expired authorization state"


def organization_key_resolver(organization_id: int) -> KeyResolver:
    """Key resolver for an organization, falling back to system values on reads."""
    return functools.partial(ConfigurationPath.organization, organization_id)


class ConnectFlow:
    """
    Stripe Connect authorization for organizers.

    Args:
        configuration: Configuration service (ConfigurationManager by default)
        resolver: Credential resolver for the platform's system key
    """

    def __init__(
        self,
        configuration: type[ConfigurationManager] = ConfigurationManager,
        resolver: CredentialResolver | None = None,
    ):
        self.configuration = configuration
        self.resolver = resolver or CredentialResolver(configuration)

    # =========================================================================
    # Authorization URL
    # =========================================================================

    def get_connect_url(self, key_resolver: KeyResolver) -> ConnectURL:
        """
        Build the Stripe Connect authorization URL.

        The callback URL defaults to BASE_URL followed by the admin
        authorize path when STRIPE_CONNECT_CALLBACK is not set.

        Args:
            key_resolver: Maps configuration keys to scoped paths

        Returns:
            ConnectURL with fresh state and code tokens

        Raises:
            ConfigurationMissingError: Secret key, client id or base URL is missing
        """
        # the secret is not part of the URL but must exist before connecting
        self.configuration.get_required_value(key_resolver(ConfigurationKey.STRIPE_SECRET_KEY))
        client_id = self.configuration.get_required_value(
            key_resolver(ConfigurationKey.STRIPE_CONNECT_CLIENT_ID)
        )
        callback_url = self.configuration.get_string_value(
            key_resolver(ConfigurationKey.STRIPE_CONNECT_CALLBACK)
        )
        if not callback_url:
            base_url = self.configuration.get_required_value(key_resolver(ConfigurationKey.BASE_URL))
            callback_url = base_url.rstrip("/") + CONNECT_REDIRECT_PATH

        state = generate_token()
        code = generate_token(16)
        authorization_url = stripe.OAuth.authorize_url(
            client_id=client_id,
            redirect_uri=callback_url,
            scope=CONNECT_SCOPE,
            state=state,
            response_type="code",
        )
        return ConnectURL(authorization_url=authorization_url, state=state, code=code)

    def begin_authorization(self, organization_id: int) -> ConnectURL:
        """
        Start the Connect flow for an organization.

        The returned state is remembered in the cache for
        CONNECT_STATE_TTL_SECONDS and accepted once.
        """
        connect_url = self.get_connect_url(organization_key_resolver(organization_id))
        cache.set(
            f"{STATE_CACHE_PREFIX}{connect_url.state}",
            organization_id,
            timeout=settings.CONNECT_STATE_TTL_SECONDS,
        )
        logger.info(
            "Stripe Connect authorization started",
            extra={"organization_id": organization_id},
        )
        return connect_url

    def consume_state(self, state: str) -> int | None:
        """
        Consume a state token issued by begin_authorization().

        Returns:
            The organization id the state was issued for, or None if the
            state is unknown, expired or was already used
        """
        if not state:
            return None
        cache_key = f"{STATE_CACHE_PREFIX}{state}"
        organization_id = cache.get(cache_key)
        if organization_id is None:
            return None
        if not cache.delete(cache_key):
            # consumed concurrently
            return None
        return organization_id

    # =========================================================================
    # Code Exchange
    # =========================================================================

    def store_connected_account_id(self, code: str, key_resolver: KeyResolver) -> ConnectResult:
        """
        Exchange an authorization code and store the connected account id.

        Never raises: every failure is logged and returned as a failed
        ConnectResult.

        Args:
            code: Authorization code from the Stripe redirect
            key_resolver: Maps configuration keys to scoped paths

        Returns:
            ConnectResult with the account id on success
        """
        try:
            client_id = self.configuration.get_required_value(
                key_resolver(ConfigurationKey.STRIPE_CONNECT_CLIENT_ID)
            )
            token = stripe.OAuth.token(
                api_key=self.resolver.get_system_api_key(),
                grant_type="authorization_code",
                code=code,
            )
            account_id = token.get("stripe_user_id")
            if account_id:
                self.configuration.save_value(
                    key_resolver(ConfigurationKey.STRIPE_CONNECTED_ID),
                    account_id,
                )
                logger.info(
                    "Stripe Connect account stored",
                    extra={"account_id": account_id, "client_id": client_id},
                )
            return ConnectResult(
                account_id=account_id,
                success=account_id is not None,
                error_message=token.get("error_description"),
            )
        except Exception as e:
            logger.error("cannot retrieve account ID", exc_info=True)
            return ConnectResult.failure(str(e))

    def complete_authorization(self, code: str, state: str) -> ConnectResult:
        """
        Finish the Connect flow started by begin_authorization().

        Returns:
            Failed ConnectResult if the state is not valid, otherwise the
            result of the code exchange
        """
        organization_id = self.consume_state(state)
        if organization_id is None:
            logger.warning("Stripe Connect callback with invalid state")
            return ConnectResult.failure(INVALID_STATE_MESSAGE)
        return self.store_connected_account_id(code, organization_key_resolver(organization_id))
