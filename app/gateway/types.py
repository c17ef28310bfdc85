"""
Data types for gateway operations.

This module defines dataclasses passed between the gateway components
and their callers. Events and transactions are owned by the ticketing
platform; the gateway only reads them.

Types:
    Event: The event (and organizer) a payment belongs to
    Transaction: A previously recorded Stripe charge
    RequestOptions: API key / account routing for one Stripe call
    PaymentInformation: Amounts and fees of a charge, in cents
    ConnectURL: Stripe Connect authorization redirect data
    ConnectResult: Outcome of a Stripe Connect code exchange

Usage:
    from gateway.types import Event, Transaction

    event = Event(organization_id=12, id=345, currency="eur", display_name="PyCon")
    transaction = Transaction(transaction_id="ch_123")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Event:
    """
    Event a payment is collected for.

    Attributes:
        organization_id: Organizer owning the event (tenant id)
        id: Event id
        currency: ISO 4217 currency code
        display_name: Human-readable event name
    """

    organization_id: int
    id: int
    currency: str
    display_name: str


@dataclass(frozen=True)
class Transaction:
    """
    A charge previously recorded by the ticketing platform.

    Attributes:
        transaction_id: Stripe charge id (ch_xxx)
        payment_id: Platform-side payment reference, if any
        metadata: Arbitrary platform metadata
    """

    transaction_id: str
    payment_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestOptions:
    """
    Routing parameters for exactly one Stripe API call.

    Never cached or persisted: resolved again for every call so that a
    revoked connected account is not used afterwards.

    Attributes:
        api_key: Secret key authenticating the call
        stripe_account: Connected account the call acts on (Connect mode only)
    """

    api_key: str
    stripe_account: str | None = None

    def as_kwargs(self) -> dict[str, str]:
        """Render as the per-request keyword arguments of the Stripe SDK."""
        kwargs = {"api_key": self.api_key}
        if self.stripe_account:
            kwargs["stripe_account"] = self.stripe_account
        return kwargs

    def __repr__(self) -> str:
        return (
            f"RequestOptions(api_key={self.api_key[:7]!r}…, "
            f"stripe_account={self.stripe_account!r})"
        )


@dataclass(frozen=True)
class PaymentInformation:
    """
    Read-only projection of a Stripe charge.

    All amounts are in the smallest currency unit. Fees are None when the
    balance transaction does not contain a fee of that type.

    Attributes:
        paid_amount: Charged amount
        refunded_amount: Amount refunded so far
        gateway_fee: Stripe's processing fee (fee type "stripe_fee")
        platform_fee: Platform application fee (fee type "application_fee")
    """

    paid_amount: int | None
    refunded_amount: int | None
    gateway_fee: int | None
    platform_fee: int | None


@dataclass(frozen=True)
class ConnectURL:
    """
    Stripe Connect authorization redirect.

    Attributes:
        authorization_url: URL to redirect the organizer's browser to
        state: CSRF token that must come back on the callback
        code: Random correlation value for the caller
    """

    authorization_url: str
    state: str
    code: str


@dataclass(frozen=True)
class ConnectResult:
    """
    Outcome of exchanging a Stripe Connect authorization code.

    Attributes:
        account_id: Connected account id (acct_xxx), None on failure
        success: Whether an account id was obtained and stored
        error_message: Failure description, None on success
    """

    account_id: str | None
    success: bool
    error_message: str | None = None

    @classmethod
    def failure(cls, error_message: str) -> ConnectResult:
        return cls(account_id=None, success=False, error_message=error_message)
