"""
HTTP endpoints for the Stripe gateway.

Endpoints:
    POST /api/v1/gateway/webhooks/stripe/ - Stripe webhook receiver
    GET /api/v1/gateway/connect/authorize/ - Start Stripe Connect for an organization
    GET /api/v1/gateway/connect/callback/ - Stripe Connect OAuth redirect target

Related files:
    - webhooks.py: WebhookEventHandler
    - connect.py: ConnectFlow
    - serializers.py: Request/response serializers
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from configuration.exceptions import ConfigurationMissingError
from core.helpers import get_client_ip

from gateway.connect import ConnectFlow
from gateway.serializers import (
    ConnectAuthorizeQuerySerializer,
    ConnectCallbackQuerySerializer,
    ConnectResultSerializer,
    ConnectURLSerializer,
)
from gateway.types import ConnectResult
from gateway.webhooks import WebhookEventHandler

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> HttpResponse:
    """
    Receive Stripe webhook events.

    Events are verified and handled synchronously; the only event with
    side effects is Connect deauthorization, which is a single delete.

    Returns:
        HttpResponse with status:
        - 200 "Processed": Event verified and handled
        - 200 "Ignored": Deauthorization for an unknown account
        - 400: Missing signature, invalid signature or processing error

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    signature = request.headers.get("Stripe-Signature", "")

    if not signature:
        logger.warning(
            "Webhook received without Stripe-Signature header",
            extra={"client_ip": get_client_ip(request)},
        )
        return HttpResponse("Missing signature", status=400)

    result = WebhookEventHandler().process_webhook_event(request.body, signature)

    if result is None:
        logger.warning(
            "Webhook could not be processed",
            extra={"client_ip": get_client_ip(request)},
        )
        return HttpResponse("Unable to process", status=400)

    if result:
        return HttpResponse("Processed", status=200)

    # Stripe must not retry deliveries for accounts we do not know
    return HttpResponse("Ignored", status=200)


class ConnectAuthorizeView(APIView):
    """
    Start the Stripe Connect flow for an organization.

    GET /api/v1/gateway/connect/authorize/?organization_id=12

    Returns:
        {
            "authorization_url": "https://connect.stripe.com/oauth/authorize?...",
            "state": "9f8c...",
            "code": "41d2..."
        }
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="stripe_connect_authorize",
        summary="Start Stripe Connect",
        description=(
            "Build the Stripe Connect authorization URL for an organization. "
            "The returned state is accepted once by the callback endpoint."
        ),
        parameters=[
            OpenApiParameter(
                name="organization_id",
                type=int,
                location=OpenApiParameter.QUERY,
                required=True,
            ),
        ],
        responses={
            200: OpenApiResponse(
                response=ConnectURLSerializer,
                description="Authorization URL",
            ),
            400: OpenApiResponse(description="Invalid organization or missing configuration"),
            403: OpenApiResponse(description="Admin access required"),
        },
        tags=["Gateway - Stripe Connect"],
    )
    def get(self, request):
        """Build the authorization URL."""
        query = ConnectAuthorizeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            connect_url = ConnectFlow().begin_authorization(query.validated_data["organization_id"])
        except ConfigurationMissingError as e:
            logger.error(f"Cannot start Stripe Connect: {e}")
            return Response(e.to_dict(), status=status.HTTP_400_BAD_REQUEST)

        return Response(ConnectURLSerializer(connect_url).data)


class ConnectCallbackView(APIView):
    """
    Complete the Stripe Connect flow.

    GET /api/v1/gateway/connect/callback/?code=ac_123&state=9f8c...

    Returns:
        {
            "account_id": "acct_123",
            "success": true,
            "error_message": null
        }
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="stripe_connect_callback",
        summary="Complete Stripe Connect",
        description=(
            "Exchange the authorization code for the connected account id and "
            "store it for the organization the state was issued for."
        ),
        parameters=[
            OpenApiParameter(name="code", type=str, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="state",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
            ),
        ],
        responses={
            200: OpenApiResponse(
                response=ConnectResultSerializer,
                description="Account connected",
            ),
            400: OpenApiResponse(
                response=ConnectResultSerializer,
                description="Invalid state, denied access or failed code exchange",
            ),
            403: OpenApiResponse(description="Admin access required"),
        },
        tags=["Gateway - Stripe Connect"],
    )
    def get(self, request):
        """Exchange the authorization code."""
        query = ConnectCallbackQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        data = query.validated_data
        flow = ConnectFlow()

        if not data["code"]:
            # access denied on the Stripe side, the state is spent either way
            flow.consume_state(data["state"])
            result = ConnectResult.failure(
                data["error_description"] or data["error"] or "Missing authorization code"
            )
        else:
            result = flow.complete_authorization(data["code"], data["state"])

        response_status = status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST
        return Response(ConnectResultSerializer(result).data, status=response_status)
