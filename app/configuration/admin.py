"""
Configuration admin.

Operators manage system-wide Stripe keys and per-organization overrides
here. Secret values are masked in the changelist.
"""

from django.contrib import admin

from configuration.keys import ConfigurationKey
from configuration.models import ConfigurationEntry

SECRET_KEYS = frozenset(
    [
        ConfigurationKey.STRIPE_SECRET_KEY,
        ConfigurationKey.STRIPE_WEBHOOK_KEY,
    ]
)


@admin.register(ConfigurationEntry)
class ConfigurationEntryAdmin(admin.ModelAdmin):
    """
    Admin configuration for ConfigurationEntry.
    """

    list_display = [
        "key",
        "display_value",
        "organization_id",
        "event_id",
        "updated_at",
    ]
    list_filter = ["key"]
    search_fields = ["key", "organization_id", "event_id"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["key", "organization_id", "event_id"]

    fieldsets = (
        (
            None,
            {
                "fields": ("key", "value"),
            },
        ),
        (
            "Scope",
            {
                "fields": ("organization_id", "event_id"),
                "description": "Leave both empty for a system-wide value.",
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    @admin.display(description="Value")
    def display_value(self, obj: ConfigurationEntry) -> str:
        if obj.key in SECRET_KEYS and obj.value:
            return f"{obj.value[:7]}…"
        return obj.value
