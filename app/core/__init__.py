"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks shared by the configuration and gateway
apps. No payment-specific logic lives here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logger, transactions)

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - NotFoundError: Required resource not found

Helpers (import from core.helpers):
    - generate_token: Cryptographically secure token generation
    - get_client_ip: Client IP extraction from request

Views (import from core.views):
    - health_check: Database/cache health endpoint

Note:
    Models are NOT imported here to avoid AppRegistryNotReady errors.
    Import them directly from core.models.
"""

from .exceptions import BaseApplicationError, NotFoundError
from .helpers import generate_token, get_client_ip
from .services import BaseService

__all__ = [
    "BaseService",
    "BaseApplicationError",
    "NotFoundError",
    "generate_token",
    "get_client_ip",
]
