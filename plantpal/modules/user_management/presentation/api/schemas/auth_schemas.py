# 📄 File: plantpal/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the sign-up, login and profile forms must contain and what the
# app sends back about a user (never their password).
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the authentication endpoints. Field
# rules live in AuthService, so request schemas only shape the payload.
#
# 🔗 Dependencies:
# - pydantic
# - plantpal.shared.core.schemas (camelCase envelope base)
# - User domain model
#
# 🔄 Connected Modules / Calls From:
# - plantpal.modules.user_management.presentation.api.v1.auth

"""
Authentication API Schemas

Request Schemas:
- RegisterRequest: username, email and password for a local account
- LoginRequest: email/password credentials
- ProfileUpdateRequest: optional new username and/or email

Response Schemas:
- UserResponse: public view of a user
- AuthResponse: token plus user
- UserEnvelope: {"success": true, "user": ...}
"""

from datetime import datetime
from typing import Dict, Optional

from plantpal.shared.core.schemas import CamelModel, SuccessResponse

from ....domain.models.user import User


class RegisterRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(CamelModel):
    """Only the fields that are sent are changed."""
    username: Optional[str] = None
    email: Optional[str] = None


class UserResponse(CamelModel):
    """Public view of a user; the password hash never leaves the domain layer."""

    id: str
    username: str
    email: Optional[str] = None
    provider: str
    linked_providers: Dict[str, str] = {}
    avatar: Optional[str] = None
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        data = user.public_dict()
        return cls(
            id=data["user_id"],
            username=data["username"],
            email=data.get("email"),
            provider=data["provider"],
            linked_providers=data.get("federated_ids") or {},
            avatar=data.get("avatar"),
            role=data["role"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class UserEnvelope(SuccessResponse):
    user: UserResponse


class AuthResponse(SuccessResponse):
    message: str
    token: str
    user: UserResponse


class ProfileUpdateResponse(UserEnvelope):
    message: str = "Profile updated successfully"
