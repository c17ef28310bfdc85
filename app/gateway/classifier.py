"""
Stripe exception classification.

Turns any exception raised by a Stripe call into a user-facing message
code. Callers show the translated message; operators get an error log
for failures that are not the payer's fault.

Failure kinds and message codes:
    CARD_DECLINED    error.STEP2_STRIPE_<decline code>
    INVALID_REQUEST  error.STEP2_STRIPE_invalid_<param>
    AUTHENTICATION   error.STEP2_STRIPE_abort
    API_CONNECTION   error.STEP2_STRIPE_abort
    GENERIC          error.STEP2_STRIPE_unexpected

Usage:
    from gateway.classifier import ExceptionClassifier

    try:
        manager.charge_credit_card(...)
    except Exception as e:
        message_code = ExceptionClassifier.handle(e)
"""

from __future__ import annotations

import stripe
from django.db import models

from core.services import BaseService

MESSAGE_PREFIX = "error.STEP2_STRIPE_"
ABORT_MESSAGE = f"{MESSAGE_PREFIX}abort"
UNEXPECTED_MESSAGE = f"{MESSAGE_PREFIX}unexpected"


class FailureKind(models.TextChoices):
    """Closed set of Stripe failure categories."""

    CARD_DECLINED = "card_declined", "Card declined"
    INVALID_REQUEST = "invalid_request", "Invalid request"
    AUTHENTICATION = "authentication", "Authentication failed"
    API_CONNECTION = "api_connection", "Stripe unreachable"
    GENERIC = "generic", "Unexpected error"


class ExceptionClassifier(BaseService):
    """
    Maps exceptions to FailureKind and FailureKind to message codes.

    Every input gets a message code. Exceptions without a dedicated kind
    (rate limiting, permission errors, non-Stripe exceptions) are treated
    as GENERIC after one warning naming the unhandled type.
    """

    @classmethod
    def classify(cls, error: Exception) -> FailureKind:
        """
        Determine the failure kind of an exception.

        Args:
            error: Exception raised by a Stripe call

        Returns:
            The matching FailureKind
        """
        if isinstance(error, stripe.CardError):
            return FailureKind.CARD_DECLINED
        elif isinstance(error, stripe.InvalidRequestError):
            return FailureKind.INVALID_REQUEST
        elif isinstance(error, stripe.AuthenticationError):
            return FailureKind.AUTHENTICATION
        elif isinstance(error, stripe.APIConnectionError):
            return FailureKind.API_CONNECTION
        elif type(error) is stripe.StripeError:
            return FailureKind.GENERIC
        else:
            cls.get_logger().warning(
                f"Cannot find an exception handler for {type(error).__name__}, "
                "falling back to generic"
            )
            return FailureKind.GENERIC

    @classmethod
    def handle(cls, error: Exception) -> str:
        """
        Translate an exception into a message code.

        Args:
            error: Exception raised by a Stripe call

        Returns:
            Message code for the user interface
        """
        logger = cls.get_logger()
        kind = cls.classify(error)

        if kind == FailureKind.CARD_DECLINED:
            return f"{MESSAGE_PREFIX}{error.code}"

        elif kind == FailureKind.INVALID_REQUEST:
            return f"{MESSAGE_PREFIX}invalid_{error.param}"

        elif kind == FailureKind.AUTHENTICATION:
            logger.error("an authentication error occurred", exc_info=error)
            return ABORT_MESSAGE

        elif kind == FailureKind.API_CONNECTION:
            logger.error("unable to connect to the Stripe API", exc_info=error)
            return ABORT_MESSAGE

        else:
            logger.error("unexpected error during transaction", exc_info=error)
            return UNEXPECTED_MESSAGE
