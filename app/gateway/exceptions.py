"""
Gateway-specific exceptions.

Exception Hierarchy:
    BaseApplicationError (core)
    └── GatewayError - Base for gateway failures raised by our own code
        └── ConfigurationError - A stored gateway setting cannot be parsed

Missing settings raise configuration.exceptions.ConfigurationMissingError.
Remote failures are the Stripe SDK's own exceptions (stripe.StripeError
and subclasses); gateway.classifier turns them into message codes.
"""

from __future__ import annotations

from core.exceptions import BaseApplicationError


class GatewayError(BaseApplicationError):
    """Base exception for payment gateway errors."""

    default_error_code: str = "GATEWAY_ERROR"


class ConfigurationError(GatewayError):
    """
    Raised when a gateway setting holds a malformed value.

    Example:
        FeeCalculator("ten%", "0")
        # ConfigurationError: Invalid platform fee 'ten%'
    """

    default_error_code: str = "INVALID_GATEWAY_CONFIGURATION"
