"""
Configuration app: tenant-scoped settings store.

This app persists the settings the payment gateway needs per tenant:
- Stripe API keys (system, organization, or event level)
- Stripe Connect client id, callback URL, and connected account ids
- Platform fee mode and fee amounts

Lookups walk from the most specific scope to the least specific one
(event → organization → system), so an organizer can override a
platform-wide default and an event can override its organizer.

Related apps:
    - gateway: reads keys through ConfigurationManager on every call

Usage:
    from configuration.keys import ConfigurationKey, ConfigurationPath
    from configuration.services import ConfigurationManager

    path = ConfigurationPath.event(organization_id, event_id, ConfigurationKey.STRIPE_SECRET_KEY)
    secret = ConfigurationManager.get_required_value(path)
"""
