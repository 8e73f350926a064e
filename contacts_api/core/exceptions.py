from typing import Optional, Any

from utils.constants import NOT_AUTHORIZED


class ContactsApiError(Exception):
    """
    Base exception for the contacts API.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(ContactsApiError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class AuthenticationError(ContactsApiError):
    """
    Raised when a bearer token is missing, invalid or no longer current,
    or when credentials are rejected.
    """
    def __init__(self, message: str = NOT_AUTHORIZED, details: Optional[Any] = None):
        super().__init__(message, code="NOT_AUTHORIZED", status_code=401, details=details)


class ResourceNotFoundError(ContactsApiError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class ConflictError(ContactsApiError):
    """
    Raised on duplicate resources or lost concurrent updates.
    """
    def __init__(self, message: str = "Conflict", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=409, details=details)


class ExternalServiceError(ContactsApiError):
    """
    Raised when an external service (e.g., the mail provider) fails.
    """
    def __init__(self, message: str = "External service error", details: Optional[Any] = None):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", status_code=502, details=details)
