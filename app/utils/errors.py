"""
Service Errors

Failures raised by the service layer. Each carries the error code and HTTP
status the controllers put in the ``{"error": {...}}`` envelope.
"""

from typing import Any, Dict


class ServiceError(Exception):
    code = "UNKNOWN_ERROR"
    status = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra


class ValidationFailed(ServiceError):
    code = "VALIDATION_ERROR"
    status = 400


class DuplicateEntry(ServiceError):
    code = "DUPLICATE_ENTRY"
    status = 409


class IngredientInUse(ServiceError):
    code = "INGREDIENT_IN_USE"
    status = 409


class NotFound(ServiceError):
    code = "NOT_FOUND"
    status = 404


class PersistenceError(ServiceError):
    """Database failure after rollback; the message is the driver's own."""
    code = "DATABASE_ERROR"
    status = 500
