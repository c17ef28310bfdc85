"""
Pytest fixtures for gateway tests.

Sections:
    - Test Data Fixtures
    - Configuration Fixtures
    - Mock Stripe Response Fixtures
    - Mock Stripe Client Fixtures
"""

from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest
from django.core.cache import cache

from configuration.keys import ConfigurationKey
from configuration.tests.factories import ConfigurationEntryFactory
from gateway.types import Event, Transaction

ORG_ID = 12
EVENT_ID = 345


# =============================================================================
# Test Data Fixtures
# =============================================================================


class StubTicketRepository:
    """In-memory TicketRepository."""

    def __init__(self, counts: dict[str, int] | None = None):
        self.counts = counts or {}

    def count_tickets_in_reservation(self, reservation_id: str) -> int:
        return self.counts.get(reservation_id, 0)


@pytest.fixture
def event():
    return Event(organization_id=ORG_ID, id=EVENT_ID, currency="eur", display_name="PyCon")


@pytest.fixture
def transaction():
    return Transaction(transaction_id="ch_test123", payment_id="pay_1")


@pytest.fixture
def ticket_repository():
    """Three tickets in reservation res_123."""
    return StubTicketRepository({"res_123": 3})


@pytest.fixture(autouse=True)
def clear_cache():
    """Connect state tokens live in the cache."""
    cache.clear()
    yield
    cache.clear()


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def direct_config(db):
    """Organizer charging with its own Stripe account."""
    ConfigurationEntryFactory(key=ConfigurationKey.STRIPE_SECRET_KEY, value="sk_test_platform")
    ConfigurationEntryFactory(key=ConfigurationKey.STRIPE_PUBLIC_KEY, value="pk_test_platform")
    ConfigurationEntryFactory(
        key=ConfigurationKey.STRIPE_WEBHOOK_KEY, value="whsec_test_platform"
    )
    ConfigurationEntryFactory(
        key=ConfigurationKey.STRIPE_SECRET_KEY, value="sk_test_org", organization_id=ORG_ID
    )
    ConfigurationEntryFactory(
        key=ConfigurationKey.STRIPE_PUBLIC_KEY, value="pk_test_org", organization_id=ORG_ID
    )


@pytest.fixture
def connect_config(direct_config):
    """Organizer connected to the platform with a 5% / 1.00 fee."""
    ConfigurationEntryFactory(
        key=ConfigurationKey.PLATFORM_MODE_ENABLED, value="true", organization_id=ORG_ID
    )
    ConfigurationEntryFactory(
        key=ConfigurationKey.STRIPE_CONNECTED_ID, value="acct_org123", organization_id=ORG_ID
    )
    ConfigurationEntryFactory(key=ConfigurationKey.PLATFORM_FEE, value="5%")
    ConfigurationEntryFactory(key=ConfigurationKey.PLATFORM_MINIMUM_FEE, value="1.00")


@pytest.fixture
def oauth_config(db):
    """Platform settings needed by the Connect flow."""
    ConfigurationEntryFactory(key=ConfigurationKey.STRIPE_SECRET_KEY, value="sk_test_platform")
    ConfigurationEntryFactory(key=ConfigurationKey.STRIPE_CONNECT_CLIENT_ID, value="ca_test123")
    ConfigurationEntryFactory(key=ConfigurationKey.BASE_URL, value="https://tickets.example.com/")


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with attribute and get() access."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@pytest.fixture
def mock_charge():
    """Create a mock Charge response."""

    def _create(
        id: str = "ch_test123",
        amount: int = 10000,
        amount_refunded: int = 0,
        balance_transaction: str | None = "txn_test123",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "charge",
                "amount": amount,
                "amount_refunded": amount_refunded,
                "balance_transaction": balance_transaction,
                "status": "succeeded",
            }
        )

    return _create


@pytest.fixture
def mock_refund():
    """Create a mock Refund response."""

    def _create(id: str = "re_test123", status: str = "succeeded") -> MockStripeObject:
        return MockStripeObject({"id": id, "object": "refund", "status": status})

    return _create


@pytest.fixture
def mock_balance_transaction():
    """Create a mock BalanceTransaction with fee details."""

    def _create(fees: dict[str, int] | None = None) -> MockStripeObject:
        if fees is None:
            fees = {"stripe_fee": 320, "application_fee": 500}
        return MockStripeObject(
            {
                "id": "txn_test123",
                "object": "balance_transaction",
                "fee_details": [
                    MockStripeObject({"type": fee_type, "amount": amount})
                    for fee_type, amount in fees.items()
                ],
            }
        )

    return _create


@pytest.fixture
def mock_stripe_event():
    """Create a mock verified webhook Event."""

    def _create(type: str = "charge.succeeded", account: str | None = None) -> MockStripeObject:
        return MockStripeObject({"id": "evt_test123", "type": type, "account": account})

    return _create


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_charge(mock_charge):
    """Mock stripe.Charge API."""
    with patch("stripe.Charge") as mock:
        mock.create.return_value = mock_charge()
        mock.retrieve.return_value = mock_charge()
        yield mock


@pytest.fixture
def mock_stripe_refund(mock_refund):
    """Mock stripe.Refund API."""
    with patch("stripe.Refund") as mock:
        mock.create.return_value = mock_refund()
        yield mock


@pytest.fixture
def mock_stripe_balance_transaction(mock_balance_transaction):
    """Mock stripe.BalanceTransaction API."""
    with patch("stripe.BalanceTransaction") as mock:
        mock.retrieve.return_value = mock_balance_transaction()
        yield mock


@pytest.fixture
def mock_stripe_webhook(mock_stripe_event):
    """Mock stripe.Webhook API."""
    with patch("stripe.Webhook") as mock:
        mock.construct_event.return_value = mock_stripe_event()
        yield mock


@pytest.fixture
def mock_stripe_oauth():
    """Mock stripe.OAuth API."""
    with patch("stripe.OAuth") as mock:
        mock.authorize_url.return_value = (
            "https://connect.stripe.com/oauth/authorize?response_type=code"
        )
        mock.token.return_value = MockStripeObject(
            {"stripe_user_id": "acct_connected123", "scope": "read_write"}
        )
        yield mock
