"""
Tests for the configuration app.

Test modules:
- test_keys.py: ConfigurationPath scope and candidate chain
- test_models.py: ConfigurationEntry constraints
- test_services.py: ConfigurationManager reads, writes and deletes
"""
