"""
Tests for configuration keys and paths.

Tests cover:
- Scope levels of ConfigurationPath
- Candidate chain ordering
- Invalid scopes
"""

import pytest

from configuration.keys import ConfigurationKey, ConfigurationLevel, ConfigurationPath


class TestConfigurationPath:
    """Tests for ConfigurationPath."""

    def test_levels(self):
        key = ConfigurationKey.PLATFORM_FEE

        assert ConfigurationPath.system(key).level == ConfigurationLevel.SYSTEM
        assert ConfigurationPath.organization(1, key).level == ConfigurationLevel.ORGANIZATION
        assert ConfigurationPath.event(1, 2, key).level == ConfigurationLevel.EVENT

    def test_event_candidates_most_specific_first(self):
        """Event paths fall back to organization, then system."""
        path = ConfigurationPath.event(1, 2, ConfigurationKey.PLATFORM_FEE)

        candidates = path.candidates()

        assert [c.level for c in candidates] == [
            ConfigurationLevel.EVENT,
            ConfigurationLevel.ORGANIZATION,
            ConfigurationLevel.SYSTEM,
        ]
        assert candidates[1] == ConfigurationPath.organization(1, ConfigurationKey.PLATFORM_FEE)
        assert all(c.key == ConfigurationKey.PLATFORM_FEE for c in candidates)

    def test_organization_candidates(self):
        path = ConfigurationPath.organization(1, ConfigurationKey.STRIPE_SECRET_KEY)

        assert path.candidates() == [
            path,
            ConfigurationPath.system(ConfigurationKey.STRIPE_SECRET_KEY),
        ]

    def test_system_candidates(self):
        path = ConfigurationPath.system(ConfigurationKey.BASE_URL)

        assert path.candidates() == [path]

    def test_event_without_organization_rejected(self):
        with pytest.raises(ValueError, match="requires an organization_id"):
            ConfigurationPath(key=ConfigurationKey.PLATFORM_FEE, event_id=5)

    def test_str(self):
        key = ConfigurationKey.STRIPE_CONNECTED_ID

        assert str(ConfigurationPath.system(key)) == "STRIPE_CONNECTED_ID@system"
        assert str(ConfigurationPath.organization(3, key)) == "STRIPE_CONNECTED_ID@organization:3"
        assert (
            str(ConfigurationPath.event(3, 9, key))
            == "STRIPE_CONNECTED_ID@organization:3/event:9"
        )
