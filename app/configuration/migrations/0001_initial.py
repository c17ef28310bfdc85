from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ConfigurationEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "key",
                    models.CharField(
                        choices=[
                            ("BASE_URL", "Platform base URL"),
                            ("STRIPE_SECRET_KEY", "Stripe secret key"),
                            ("STRIPE_PUBLIC_KEY", "Stripe publishable key"),
                            ("STRIPE_WEBHOOK_KEY", "Stripe webhook signing secret"),
                            ("STRIPE_CONNECT_CLIENT_ID", "Stripe Connect client id"),
                            ("STRIPE_CONNECT_CALLBACK", "Stripe Connect callback URL"),
                            ("STRIPE_CONNECTED_ID", "Stripe connected account id"),
                            ("PLATFORM_MODE_ENABLED", "Platform fee mode enabled"),
                            ("PLATFORM_FEE", "Platform fee (amount or percentage)"),
                            ("PLATFORM_MINIMUM_FEE", "Platform minimum fee per ticket"),
                        ],
                        db_index=True,
                        help_text="Configuration key",
                        max_length=64,
                    ),
                ),
                (
                    "value",
                    models.TextField(blank=True, help_text="Raw configuration value"),
                ),
                (
                    "organization_id",
                    models.PositiveIntegerField(
                        blank=True,
                        db_index=True,
                        help_text="Organization this value belongs to (empty for system scope)",
                        null=True,
                    ),
                ),
                (
                    "event_id",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Event this value belongs to (empty above event scope)",
                        null=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "Configuration Entry",
                "verbose_name_plural": "Configuration Entries",
                "ordering": ["key", "organization_id", "event_id"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(
                            ("event_id__isnull", True),
                            ("organization_id__isnull", True),
                        ),
                        fields=("key",),
                        name="unique_system_configuration_key",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(
                            ("event_id__isnull", True),
                            ("organization_id__isnull", False),
                        ),
                        fields=("key", "organization_id"),
                        name="unique_organization_configuration_key",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("event_id__isnull", False)),
                        fields=("key", "organization_id", "event_id"),
                        name="unique_event_configuration_key",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("event_id__isnull", True),
                            ("organization_id__isnull", False),
                            _connector="OR",
                        ),
                        name="event_configuration_requires_organization",
                    ),
                ],
            },
        ),
    ]
