"""
Tests for the base exception hierarchy.

These tests verify that:
- Error codes default per class and can be overridden
- to_dict() renders API error payloads
"""

from __future__ import annotations

import pytest

from core.exceptions import BaseApplicationError, NotFoundError


class TestBaseApplicationError:
    """Tests for BaseApplicationError and subclasses."""

    @pytest.mark.parametrize(
        "exception_class,code",
        [
            (BaseApplicationError, "APPLICATION_ERROR"),
            (NotFoundError, "NOT_FOUND"),
        ],
    )
    def test_default_error_code(self, exception_class, code):
        error = exception_class("Something went wrong")

        assert error.error_code == code
        assert str(error) == f"[{code}] Something went wrong"

    def test_custom_error_code(self):
        error = NotFoundError("Setting PLATFORM_FEE is not configured", error_code="MISSING_FEE")

        assert error.error_code == "MISSING_FEE"

    def test_to_dict_without_details(self):
        assert NotFoundError("Missing").to_dict() == {
            "error": "Missing",
            "error_code": "NOT_FOUND",
        }

    def test_to_dict_with_details(self):
        error = NotFoundError("Missing", details={"key": "STRIPE_SECRET_KEY"})

        assert error.to_dict()["details"] == {"key": "STRIPE_SECRET_KEY"}

    def test_repr(self):
        error = NotFoundError("Missing", details={"key": "BASE_URL"})

        assert repr(error) == (
            "NotFoundError(message='Missing', error_code='NOT_FOUND', "
            "details={'key': 'BASE_URL'})"
        )
