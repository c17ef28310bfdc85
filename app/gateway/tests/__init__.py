"""
Tests for the gateway app.

Test modules:
- test_fees.py: Platform fee calculation
- test_resolver.py: Credential and request option resolution
- test_classifier.py: Exception to message code translation
- test_manager.py: Charges, refunds and payment information
- test_connect.py: Stripe Connect OAuth flow
- test_webhooks.py: Webhook verification and deauthorization
- test_views.py: HTTP endpoints
"""
