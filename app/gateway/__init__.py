"""
Gateway app: Stripe payment integration for ticket sales.

This app handles:
- Credit card charges, refunds and payment information lookups
- Platform fee calculation for organizers using Stripe Connect
- The Stripe Connect OAuth flow
- Webhook-driven deauthorization of connected accounts

Credentials are resolved per event from the configuration store on
every Stripe call; nothing is cached.

Related apps:
    - configuration: Stripe keys, Connect ids and fee settings
    - core: base exceptions, services and helpers

Usage:
    from gateway.manager import StripeManager
    from gateway.types import Event

    manager = StripeManager(ticket_repository=ReservationTickets())
    charge = manager.charge_credit_card(token, 5000, event, "res_1", "a@b.c", "Ann")
"""
