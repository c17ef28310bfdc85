"""
URL configuration for the payment gateway service.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface (tenant configuration)
    /admin/configuration/payment/stripe/authorize - Default Stripe Connect redirect
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/gateway/               - Gateway endpoints
        webhooks/stripe/           - Stripe webhook endpoint (POST)
        connect/authorize/         - Stripe Connect authorization URL (GET)
        connect/callback/          - Stripe Connect OAuth callback (GET)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check
from gateway.views import ConnectCallbackView

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    path("gateway/", include("gateway.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Default Stripe Connect redirect target (see gateway.connect.CONNECT_REDIRECT_PATH)
    path(
        "admin/configuration/payment/stripe/authorize",
        ConnectCallbackView.as_view(),
        name="stripe_connect_redirect",
    ),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Payment Gateway Admin"
admin.site.site_title = "Payment Gateway"
admin.site.index_title = "Tenant configuration"
