"""
Tests for gateway views.

Tests cover:
- Webhook endpoint status mapping
- Connect authorize and callback endpoints
- Admin-only access
"""

import json
from unittest.mock import patch

import pytest
import stripe
from django.test import Client, RequestFactory
from django.urls import reverse
from rest_framework.test import APIClient

from configuration.keys import ConfigurationKey, ConfigurationPath
from configuration.services import ConfigurationManager
from gateway.connect import CONNECT_REDIRECT_PATH
from gateway.views import stripe_webhook

WEBHOOK_URL = "/api/v1/gateway/webhooks/stripe/"


# =============================================================================
# Setup
# =============================================================================


@pytest.fixture
def rf():
    """Request factory for creating test requests."""
    return RequestFactory()


@pytest.fixture
def admin_client(django_user_model):
    user = django_user_model.objects.create_user(
        username="operator", password="test-pass-123", is_staff=True
    )
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def user_client(django_user_model):
    user = django_user_model.objects.create_user(username="organizer", password="test-pass-123")
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def make_webhook_request(rf, payload: dict, signature: str = "test_sig"):
    """Create a POST request to the webhook endpoint."""
    return rf.post(
        WEBHOOK_URL,
        data=json.dumps(payload),
        content_type="application/json",
        HTTP_STRIPE_SIGNATURE=signature,
    )


# =============================================================================
# Webhook Tests
# =============================================================================


@pytest.mark.django_db
class TestStripeWebhook:
    """Tests for the webhook endpoint."""

    def test_url(self):
        assert reverse("gateway:stripe_webhook") == WEBHOOK_URL

    def test_missing_signature_returns_400(self, rf):
        request = rf.post(
            WEBHOOK_URL,
            data=json.dumps({"id": "evt_test"}),
            content_type="application/json",
        )

        response = stripe_webhook(request)

        assert response.status_code == 400
        assert b"Missing signature" in response.content

    @pytest.mark.parametrize(
        "result,status_code,body",
        [
            (True, 200, b"Processed"),
            (False, 200, b"Ignored"),
            (None, 400, b"Unable to process"),
        ],
    )
    def test_result_mapping(self, rf, result, status_code, body):
        with patch(
            "gateway.views.WebhookEventHandler.process_webhook_event",
            return_value=result,
        ) as mock_process:
            response = stripe_webhook(make_webhook_request(rf, {"id": "evt_test"}))

        assert response.status_code == status_code
        assert response.content == body
        mock_process.assert_called_once()
        assert mock_process.call_args.args[1] == "test_sig"

    def test_get_not_allowed(self, client):
        response = client.get(WEBHOOK_URL)

        assert response.status_code == 405

    def test_csrf_exempt(self, direct_config):
        """Stripe cannot send CSRF tokens."""
        client = Client(enforce_csrf_checks=True)

        response = client.post(
            WEBHOOK_URL,
            data=json.dumps({"id": "evt_test"}),
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE="t=1,v1=bad",
        )

        # reaches the handler and fails signature verification
        assert response.status_code == 400
        assert response.content == b"Unable to process"


# =============================================================================
# Connect Tests
# =============================================================================


@pytest.mark.django_db
class TestConnectAuthorize:
    """Tests for the authorize endpoint."""

    url = "/api/v1/gateway/connect/authorize/"

    def test_returns_connect_url(self, admin_client, oauth_config, mock_stripe_oauth):
        response = admin_client.get(self.url, {"organization_id": 12})

        assert response.status_code == 200
        data = response.json()
        assert data["authorization_url"].startswith("https://connect.stripe.com/")
        assert set(data) == {"authorization_url", "state", "code"}

    def test_requires_organization_id(self, admin_client, oauth_config):
        response = admin_client.get(self.url)

        assert response.status_code == 400
        assert "organization_id" in response.json()

    def test_missing_configuration(self, admin_client, db, mock_stripe_oauth):
        response = admin_client.get(self.url, {"organization_id": 12})

        assert response.status_code == 400
        assert response.json()["error_code"] == "CONFIGURATION_MISSING"

    def test_requires_admin(self, user_client, oauth_config):
        response = user_client.get(self.url, {"organization_id": 12})

        assert response.status_code == 403

    def test_requires_authentication(self, oauth_config):
        response = APIClient().get(self.url, {"organization_id": 12})

        assert response.status_code == 403


@pytest.mark.django_db
class TestConnectCallback:
    """Tests for the callback endpoint."""

    authorize_url = "/api/v1/gateway/connect/authorize/"
    url = "/api/v1/gateway/connect/callback/"

    def _state(self, admin_client):
        return admin_client.get(self.authorize_url, {"organization_id": 12}).json()["state"]

    def test_connects_account(self, admin_client, oauth_config, mock_stripe_oauth):
        state = self._state(admin_client)

        response = admin_client.get(self.url, {"code": "ac_code123", "state": state})

        assert response.status_code == 200
        assert response.json() == {
            "account_id": "acct_connected123",
            "success": True,
            "error_message": None,
        }
        assert (
            ConfigurationManager.get_string_value(
                ConfigurationPath.organization(12, ConfigurationKey.STRIPE_CONNECTED_ID)
            )
            == "acct_connected123"
        )

    def test_unknown_state(self, admin_client, oauth_config, mock_stripe_oauth):
        response = admin_client.get(self.url, {"code": "ac_code123", "state": "forged"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        mock_stripe_oauth.token.assert_not_called()

    def test_state_is_single_use(self, admin_client, oauth_config, mock_stripe_oauth):
        state = self._state(admin_client)
        admin_client.get(self.url, {"code": "ac_code123", "state": state})

        response = admin_client.get(self.url, {"code": "ac_code123", "state": state})

        assert response.status_code == 400

    def test_access_denied(self, admin_client, oauth_config, mock_stripe_oauth):
        state = self._state(admin_client)

        response = admin_client.get(
            self.url,
            {
                "state": state,
                "error": "access_denied",
                "error_description": "The user denied your request",
            },
        )

        assert response.status_code == 400
        assert response.json()["error_message"] == "The user denied your request"
        mock_stripe_oauth.token.assert_not_called()

    def test_failed_exchange(self, admin_client, oauth_config, mock_stripe_oauth):
        mock_stripe_oauth.token.side_effect = stripe.StripeError("Authorization code expired")
        state = self._state(admin_client)

        response = admin_client.get(self.url, {"code": "ac_code123", "state": state})

        assert response.status_code == 400
        assert response.json()["account_id"] is None

    def test_requires_state(self, admin_client):
        response = admin_client.get(self.url, {"code": "ac_code123"})

        assert response.status_code == 400

    def test_default_redirect_path(self, admin_client, oauth_config, mock_stripe_oauth):
        """The fallback callback URL of the Connect flow is served."""
        state = self._state(admin_client)

        response = admin_client.get(
            CONNECT_REDIRECT_PATH, {"code": "ac_code123", "state": state}
        )

        assert response.status_code == 200
        assert response.json()["account_id"] == "acct_connected123"
