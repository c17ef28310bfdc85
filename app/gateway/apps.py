"""
Gateway app configuration.
"""

from django.apps import AppConfig


class GatewayConfig(AppConfig):
    """Configuration for the Stripe gateway application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "gateway"
    verbose_name = "Payment Gateway"

    def ready(self) -> None:
        """Configure the shared Stripe HTTP client."""
        import stripe
        from django.conf import settings

        stripe.default_http_client = stripe.RequestsClient(
            timeout=settings.STRIPE_API_TIMEOUT_SECONDS
        )
        # retried POSTs get an SDK-generated idempotency key
        stripe.max_network_retries = settings.STRIPE_MAX_RETRIES
