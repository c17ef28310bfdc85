"""
Base exception classes for application-wide error handling.

This module provides the exception hierarchy shared by every app:
- Consistent error payloads for API responses
- Machine-readable error codes for client handling
- Detailed error context for operators

Exception Hierarchy:
    BaseApplicationError (base)
    └── NotFoundError - Required resource or setting not found

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError(
        "Setting STRIPE_SECRET_KEY is not configured",
        details={"key": "STRIPE_SECRET_KEY", "organization_id": 7},
    )

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain errors raised by our own services.
    Remote payment failures keep the Stripe SDK's exception types and are
    translated to user messages by gateway.classifier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (keys, scopes, raw values)

    Example:
        try:
            ConfigurationManager.get_required_value(path)
        except BaseApplicationError as e:
            logger.error(f"Configuration lookup failed: {e.error_code}")
            return Response(e.to_dict(), status=500)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Setting STRIPE_SECRET_KEY is not configured",
                "error_code": "CONFIGURATION_MISSING",
                "details": {"key": "STRIPE_SECRET_KEY"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class NotFoundError(BaseApplicationError):
    """
    Raised when a resource that must exist cannot be found.

    Use for:
    - Required configuration entries
    - Single-resource lookups where existence is expected

    Note:
        Prefer returning None for optional lookups.
    """

    default_error_code: str = "NOT_FOUND"
