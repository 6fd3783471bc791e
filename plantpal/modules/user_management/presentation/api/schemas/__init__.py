from .auth_schemas import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "ProfileUpdateRequest",
    "ProfileUpdateResponse",
    "RegisterRequest",
    "UserEnvelope",
    "UserResponse",
]
