"""
Stripe webhook event handling.

Only Connect deauthorization needs action: when an organizer
disconnects their account from the platform, the stored connected
account id is removed so no further calls are routed to it. Every other
verified event is acknowledged without action.

Result convention of process_webhook_event():
    True   event verified and handled
    False  deauthorization for an account no organization owns
    None   verification or processing failed

Usage:
    from gateway.webhooks import WebhookEventHandler

    result = WebhookEventHandler().process_webhook_event(
        request.body, request.META["HTTP_STRIPE_SIGNATURE"]
    )
"""

from __future__ import annotations

import logging

import stripe

from configuration.keys import ConfigurationKey
from configuration.services import ConfigurationManager

from gateway.resolver import CredentialResolver

logger = logging.getLogger(__name__)

ACCOUNT_DEAUTHORIZED = "account.application.deauthorized"
REVOCATION_ACTOR = "admin"


class WebhookEventHandler:
    """
    Verifies and dispatches Stripe webhook events.

    Args:
        configuration: Configuration service (ConfigurationManager by default)
        resolver: Credential resolver for the webhook signing secret
    """

    def __init__(
        self,
        configuration: type[ConfigurationManager] = ConfigurationManager,
        resolver: CredentialResolver | None = None,
    ):
        self.configuration = configuration
        self.resolver = resolver or CredentialResolver(configuration)

    def process_webhook_event(self, body: bytes | str, signature: str) -> bool | None:
        """
        Verify and process a webhook delivery.

        Args:
            body: Raw request body
            signature: Stripe-Signature header value

        Returns:
            True, False or None (see module docstring)
        """
        try:
            event = stripe.Webhook.construct_event(
                body,
                signature,
                self.resolver.get_webhook_signature_key(),
            )
            if event.type == ACCOUNT_DEAUTHORIZED:
                return self.revoke_token(event.account)
            return True
        except Exception:
            logger.error("got exception while handling stripe webhook", exc_info=True)
            return None

    def revoke_token(self, account_id: str) -> bool:
        """
        Delete the connected account id of the organization owning it.

        Args:
            account_id: Stripe connected account id (acct_xxx)

        Returns:
            True if an organization was found and its credential removed
        """
        organization_id = self.configuration.find_organization_id_by_key_and_value(
            ConfigurationKey.STRIPE_CONNECTED_ID, account_id
        )
        if organization_id is None:
            logger.info(
                "Stripe deauthorization for unknown account",
                extra={"account_id": account_id},
            )
            return False

        self.configuration.delete_organization_level_by_key(
            ConfigurationKey.STRIPE_CONNECTED_ID,
            organization_id,
            REVOCATION_ACTOR,
        )
        logger.warning(
            f"Stripe: access token for organization {organization_id} has been revoked",
            extra={"organization_id": organization_id, "account_id": account_id},
        )
        return True
