"""
Stripe charge, refund and payment information operations.

StripeManager executes the remote calls of a ticket purchase for one
event. Credentials and routing come from CredentialResolver on every
call; the platform fee is added only when the organizer's account is
connected.

Error handling differs per operation:
    charge_credit_card  Stripe errors propagate, callers use handle_exception()
    refund              returns False on Stripe errors (logged as warnings)
    get_info            returns None on Stripe errors

Usage:
    from gateway.manager import StripeManager

    manager = StripeManager(ticket_repository=ReservationTickets())
    try:
        charge = manager.charge_credit_card(
            token="tok_visa",
            amount=5000,
            event=event,
            reservation_id="res_123",
            email="jane@example.com",
            full_name="Jane Doe",
        )
    except Exception as e:
        message_code = manager.handle_exception(e)
"""

from __future__ import annotations

import logging
import time
from typing import Any

import stripe

from gateway.classifier import ExceptionClassifier
from gateway.fees import format_cents
from gateway.protocols import TicketRepository
from gateway.resolver import CredentialResolver
from gateway.types import Event, PaymentInformation, Transaction

logger = logging.getLogger(__name__)

GATEWAY_FEE_TYPE = "stripe_fee"
PLATFORM_FEE_TYPE = "application_fee"
REFUND_SUCCEEDED = "succeeded"


class StripeManager:
    """
    Executes Stripe calls for ticket purchases.

    Args:
        ticket_repository: Source of ticket counts per reservation
        resolver: Credential resolver (a fresh CredentialResolver by default)
        classifier: Exception classifier used by handle_exception()
    """

    def __init__(
        self,
        ticket_repository: TicketRepository,
        resolver: CredentialResolver | None = None,
        classifier: type[ExceptionClassifier] = ExceptionClassifier,
    ):
        self.ticket_repository = ticket_repository
        self.resolver = resolver or CredentialResolver()
        self.classifier = classifier

    # =========================================================================
    # Charges
    # =========================================================================

    def charge_credit_card(
        self,
        token: str,
        amount: int,
        event: Event,
        reservation_id: str,
        email: str,
        full_name: str,
        billing_address: str | None = None,
    ) -> stripe.Charge:
        """
        Charge a card token for a reservation.

        Args:
            token: Single-use card token from Stripe.js
            amount: Amount in minor units
            event: Event the tickets belong to
            reservation_id: Reservation being paid
            email: Payer email
            full_name: Payer name
            billing_address: Optional billing address

        Returns:
            The created stripe.Charge

        Raises:
            ValueError: amount is not positive
            ConfigurationMissingError: A required key is not configured
            stripe.StripeError: Stripe rejected the charge
        """
        if amount <= 0:
            raise ValueError("amount must be positive")

        num_tickets = self.ticket_repository.count_tickets_in_reservation(reservation_id)

        metadata = {
            "reservationId": reservation_id,
            "email": email,
            "fullName": full_name,
        }
        if billing_address:
            metadata["billingAddress"] = billing_address

        charge_params: dict[str, Any] = {
            "amount": amount,
            "currency": event.currency,
            "source": token,
            "description": f"{num_tickets} ticket(s) for event {event.display_name}",
            "metadata": metadata,
        }

        application_fee = self._platform_fee(event, amount, num_tickets)
        if application_fee is not None:
            charge_params["application_fee_amount"] = application_fee

        options = self.resolver.request_options(event)

        log_context = {
            "operation": "charge_credit_card",
            "reservation_id": reservation_id,
            "event_id": event.id,
            "amount_cents": amount,
            "application_fee_cents": application_fee,
        }
        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        charge = stripe.Charge.create(**charge_params, **options.as_kwargs())

        logger.info(
            "Stripe operation completed",
            extra={
                **log_context,
                "charge_id": charge.id,
                "duration_ms": (time.time() - start_time) * 1000,
            },
        )
        return charge

    def _platform_fee(self, event: Event, amount: int, num_tickets: int) -> int | None:
        """Platform fee in minor units, or None when Connect mode is off."""
        if not self.resolver.is_connect_enabled(event):
            return None
        return self.resolver.fee_calculator(event).calculate(amount, num_tickets)

    # =========================================================================
    # Refunds
    # =========================================================================

    def refund(
        self,
        transaction: Transaction,
        event: Event,
        amount: int | None = None,
    ) -> bool:
        """
        Refund a charge fully or partially.

        In Connect mode the platform fee is refunded proportionally.

        Args:
            transaction: The charge to refund
            event: Event the charge belongs to
            amount: Amount in minor units (None for a full refund)

        Returns:
            True if Stripe reports the refund as succeeded

        Raises:
            ConfigurationMissingError: A required key is not configured
        """
        charge_id = transaction.transaction_id
        amount_label = format_cents(amount) if amount is not None else "full"

        refund_params: dict[str, Any] = {"charge": charge_id}
        if amount is not None:
            refund_params["amount"] = amount
        if self.resolver.is_connect_enabled(event):
            refund_params["refund_application_fee"] = True

        options = self.resolver.request_options(event)

        logger.info(
            f"Stripe: trying to do a refund for payment {charge_id} with amount: {amount_label}",
            extra={"operation": "refund", "charge_id": charge_id, "event_id": event.id},
        )

        try:
            refund = stripe.Refund.create(**refund_params, **options.as_kwargs())
        except stripe.StripeError:
            logger.warning(
                f"Stripe: refund for payment {charge_id} with amount: {amount_label} failed",
                extra={"operation": "refund", "charge_id": charge_id},
                exc_info=True,
            )
            return False

        if refund.status == REFUND_SUCCEEDED:
            logger.info(
                f"Stripe: refund for payment {charge_id} executed with success "
                f"for amount: {amount_label}",
                extra={"operation": "refund", "charge_id": charge_id, "refund_id": refund.id},
            )
            return True

        logger.warning(
            f"Stripe: was not able to refund payment with id {charge_id}, "
            f"returned status is not 'succeeded' but {refund.status}",
            extra={"operation": "refund", "charge_id": charge_id, "status": refund.status},
        )
        return False

    # =========================================================================
    # Payment Information
    # =========================================================================

    def get_info(self, transaction: Transaction, event: Event) -> PaymentInformation | None:
        """
        Read amounts and fees of a charge.

        Args:
            transaction: The charge to inspect
            event: Event the charge belongs to

        Returns:
            PaymentInformation, or None if Stripe could not be queried

        Raises:
            ConfigurationMissingError: A required key is not configured
        """
        options = self.resolver.request_options(event)

        try:
            charge = stripe.Charge.retrieve(transaction.transaction_id, **options.as_kwargs())
            fee_details = []
            if charge.balance_transaction:
                balance_transaction = stripe.BalanceTransaction.retrieve(
                    charge.balance_transaction, **options.as_kwargs()
                )
                fee_details = balance_transaction.fee_details or []
        except stripe.StripeError:
            logger.debug(
                "Unable to retrieve Stripe payment information",
                extra={"charge_id": transaction.transaction_id},
                exc_info=True,
            )
            return None

        return PaymentInformation(
            paid_amount=charge.amount,
            refunded_amount=charge.amount_refunded,
            gateway_fee=_fee_amount(fee_details, GATEWAY_FEE_TYPE),
            platform_fee=_fee_amount(fee_details, PLATFORM_FEE_TYPE),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def handle_exception(self, error: Exception) -> str:
        """Translate an exception from charge_credit_card() into a message code."""
        return self.classifier.handle(error)

    def get_public_key(self, event: Event) -> str:
        return self.resolver.get_public_key(event)


def _fee_amount(fee_details: list[Any], fee_type: str) -> int | None:
    for fee in fee_details:
        if fee.type == fee_type:
            return fee.amount
    return None
