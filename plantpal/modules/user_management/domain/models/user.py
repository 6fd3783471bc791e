# 📄 File: plantpal/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in PlantPal - their name, email, how they signed in
# (password, Google or Facebook) and what they are allowed to do
# 🧪 Purpose (Technical Summary):
# Domain model for the User entity: identity fields, federated identity links,
# role, and lifecycle helpers for local and federated account creation
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid
# 🔄 Connected Modules / Calls From:
# auth_service.py, user_repository.py, memory and database repository implementations,
# auth API schemas

import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from plantpal.shared.utils.helpers import utc_now


class UserRole(str, Enum):
    """User role enumeration"""
    USER = "user"
    ADMIN = "admin"


class AuthProvider(str, Enum):
    """How an account was originally created"""
    LOCAL = "local"
    GOOGLE = "google"
    FACEBOOK = "facebook"


class User(BaseModel):
    """
    User domain model representing a PlantPal account.

    A local account carries a password hash; a federated-only account has no
    hash and is reachable through ``federated_ids`` (provider -> provider user id).
    One user can hold both a password and several federated links.
    """

    model_config = ConfigDict(
        use_enum_values=True,
        validate_assignment=True,
    )

    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password_hash: Optional[str] = None
    provider: AuthProvider = AuthProvider.LOCAL
    federated_ids: Dict[str, str] = Field(default_factory=dict)
    avatar: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        """Lowercase and trim emails so uniqueness checks are case-insensitive"""
        if v is None:
            return v
        email = str(v).lower().strip()
        return email or None

    @field_validator('username', mode='before')
    @classmethod
    def normalize_username(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def create_local_user(cls, username: str, email: str, password_hash: str) -> "User":
        """
        Create a new password-based account.

        Args:
            username: Unique display handle
            email: Unique email address
            password_hash: Already hashed password

        Returns:
            New User instance
        """
        return cls(
            username=username,
            email=email,
            password_hash=password_hash,
            provider=AuthProvider.LOCAL,
        )

    @classmethod
    def create_federated_user(
        cls,
        username: str,
        provider: str,
        provider_id: str,
        email: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> "User":
        """Create an account that can only sign in through an OAuth provider."""
        return cls(
            username=username,
            email=email,
            provider=provider,
            federated_ids={provider: provider_id},
            avatar=avatar,
        )

    def link_provider(self, provider: str, provider_id: str) -> None:
        """Attach a federated identity to this account."""
        self.federated_ids = {**self.federated_ids, provider: provider_id}
        self.touch()

    def touch(self) -> None:
        now = utc_now()
        self.updated_at = now if now >= self.created_at else self.created_at

    def public_dict(self) -> Dict:
        """Serializable view without the password hash."""
        return self.model_dump(exclude={'password_hash'})


class FederatedProfile(BaseModel):
    """Normalized user data returned by an OAuth provider."""
    provider: str
    provider_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None
