"""
URL configuration for the gateway app.

Routes:
    - POST /webhooks/stripe/ - Stripe webhook endpoint
    - GET /connect/authorize/ - Stripe Connect authorization URL
    - GET /connect/callback/ - Stripe Connect OAuth callback

All routes are prefixed with /api/v1/gateway/ when included in the main URLconf.
"""

from django.urls import path

from gateway.views import ConnectAuthorizeView, ConnectCallbackView, stripe_webhook

app_name = "gateway"

urlpatterns = [
    # Webhook endpoints
    path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
    # Stripe Connect
    path("connect/authorize/", ConnectAuthorizeView.as_view(), name="connect_authorize"),
    path("connect/callback/", ConnectCallbackView.as_view(), name="connect_callback"),
]
