# 📄 File: plantpal/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types PlantPal uses to communicate
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization into the API failure envelope.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, security helpers, exception handlers in plantpal.main

from typing import Any, Dict, Optional
from fastapi import status


class PlantPalException(Exception):
    """
    Base exception class for the PlantPal application.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API failure envelope."""
        payload: Dict[str, Any] = {
            "error": self.message,
            "code": self.error_code,
        }
        if self.details:
            payload["details"] = self.details
        return payload


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(PlantPalException):
    """
    Exception raised for authentication failures.
    Used when credentials are invalid or the access token is missing.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class InvalidTokenError(PlantPalException):
    """
    Exception raised when a presented token is malformed, expired,
    or names a user that no longer exists.
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="INVALID_TOKEN"
        )


class AuthorizationError(PlantPalException):
    """
    Exception raised for authorization failures.
    Used when a caller acts on a resource they do not own.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_action: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if required_action:
            details["required_action"] = required_action

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(PlantPalException):
    """
    Exception raised for data validation failures.
    Used when input data doesn't meet validation requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(PlantPalException):
    """
    Exception raised when requested resource is not found.
    Also used for resources owned by someone else.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(PlantPalException):
    """
    Exception raised when attempting to create duplicate resources.
    Reported as a client error (400) on the registration and profile paths.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(PlantPalException):
    """
    Exception raised when external service calls fail.
    Used for OAuth providers and the text-generation API.
    """

    def __init__(
        self,
        message: str = "External service error",
        service: Optional[str] = None,
        service_response: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if service:
            details["service"] = service
        if service_response:
            details["service_response"] = service_response[:500]

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="EXTERNAL_SERVICE_ERROR"
        )


class AugmenterError(ExternalServiceError):
    """
    Raised by search augmenters when the AI answer cannot be used.
    Never reaches clients; the community service falls back instead.
    """

    def __init__(self, message: str = "Search augmenter failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, service="search_augmenter", details=details)
        self.error_code = "AUGMENTER_DEGRADED"


class AugmenterUnavailableError(AugmenterError):
    """Raised when no augmenter backend is configured."""

    def __init__(self, message: str = "Search augmenter is not configured"):
        super().__init__(message=message)


class ClassificationError(PlantPalException):
    """
    Exception raised when the disease classifier fails or times out.
    """

    def __init__(
        self,
        message: str = "Error analyzing image",
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if reason:
            details["reason"] = reason

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="CLASSIFICATION_ERROR"
        )


class RateLimitError(PlantPalException):
    """
    Exception raised when rate limits are exceeded.
    Used for throttling of credential endpoints.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        limit: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if limit:
            details["limit"] = limit

        super().__init__(
            message=message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details=details,
            error_code="RATE_LIMIT_EXCEEDED"
        )


# =============================================================================
# DATABASE & INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(PlantPalException):
    """
    Exception raised for database operation failures.
    Used for connection issues, query failures, etc.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code="DATABASE_ERROR"
        )


# =============================================================================
# FILE HANDLING EXCEPTIONS
# =============================================================================

class FileTooLargeError(ValidationError):
    """Exception raised when an uploaded file exceeds the size limit."""

    def __init__(self, file_size: int, max_size: int, filename: Optional[str] = None):
        details: Dict[str, Any] = {"file_size": file_size, "max_size": max_size}
        if filename:
            details["filename"] = filename
        super().__init__(
            message=f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
            details=details,
        )
        self.error_code = "FILE_TOO_LARGE"


class InvalidFileTypeError(ValidationError):
    """Exception raised when an uploaded file is not an accepted image."""

    def __init__(
        self,
        message: str = "Only image files are allowed",
        filename: Optional[str] = None,
        allowed_types: Optional[list] = None,
    ):
        details: Dict[str, Any] = {}
        if filename:
            details["filename"] = filename
        if allowed_types:
            details["allowed_types"] = allowed_types
        super().__init__(message=message, details=details)
        self.error_code = "INVALID_FILE_TYPE"


# =============================================================================
# HELPERS
# =============================================================================

def is_client_error(exception: Exception) -> bool:
    """
    Check if exception represents a client error (4xx).

    Args:
        exception: Exception to check

    Returns:
        bool: True if client error, False otherwise
    """
    if isinstance(exception, PlantPalException):
        return 400 <= exception.status_code < 500
    return False
