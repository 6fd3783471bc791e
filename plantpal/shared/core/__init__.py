"""
Core package for PlantPal.
Provides the exception hierarchy and the token and password primitives.

Request dependencies and rate limiting live in their own modules and are
imported directly (``plantpal.shared.core.dependencies``) to keep this package
free of presentation-layer imports.
"""

from .exceptions import (
    PlantPalException,
    AuthenticationError,
    InvalidTokenError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    DuplicateResourceError,
    ExternalServiceError,
    AugmenterError,
    AugmenterUnavailableError,
    ClassificationError,
    RateLimitError,
    DatabaseError,
    FileTooLargeError,
    InvalidFileTypeError,
    is_client_error,
)

from .security import (
    ACCESS_TOKEN_TYPE,
    OAUTH_STATE_TOKEN_TYPE,
    SecurityManager,
    TokenClaims,
)

__all__ = [
    # Exceptions
    "PlantPalException",
    "AuthenticationError",
    "InvalidTokenError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "DuplicateResourceError",
    "ExternalServiceError",
    "AugmenterError",
    "AugmenterUnavailableError",
    "ClassificationError",
    "RateLimitError",
    "DatabaseError",
    "FileTooLargeError",
    "InvalidFileTypeError",
    "is_client_error",

    # Security
    "ACCESS_TOKEN_TYPE",
    "OAUTH_STATE_TOKEN_TYPE",
    "SecurityManager",
    "TokenClaims",
]
