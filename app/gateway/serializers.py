"""
Serializers for the Stripe Connect endpoints.

Provides:
- ConnectAuthorizeQuerySerializer: Query parameters of the authorize endpoint
- ConnectCallbackQuerySerializer: Query parameters of the OAuth callback
- ConnectURLSerializer: Authorization redirect response
- ConnectResultSerializer: Code exchange response
"""

from __future__ import annotations

from rest_framework import serializers


class ConnectAuthorizeQuerySerializer(serializers.Serializer):
    organization_id = serializers.IntegerField(
        min_value=1,
        help_text="Organization connecting its Stripe account",
    )


class ConnectCallbackQuerySerializer(serializers.Serializer):
    """
    Query parameters Stripe appends to the callback URL.

    Stripe sends error/error_description instead of code when the
    organizer denies access.
    """

    code = serializers.CharField(required=False, allow_blank=True, default="")
    state = serializers.CharField(help_text="State token issued by the authorize endpoint")
    error = serializers.CharField(required=False, allow_blank=True, default="")
    error_description = serializers.CharField(required=False, allow_blank=True, default="")


class ConnectURLSerializer(serializers.Serializer):
    authorization_url = serializers.URLField(read_only=True)
    state = serializers.CharField(read_only=True)
    code = serializers.CharField(read_only=True)


class ConnectResultSerializer(serializers.Serializer):
    account_id = serializers.CharField(read_only=True, allow_null=True)
    success = serializers.BooleanField(read_only=True)
    error_message = serializers.CharField(read_only=True, allow_null=True)
