# 📄 File: plantpal/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find and update user accounts without
# saying whether they live in memory or in a database
# 🧪 Purpose (Technical Summary):
# Repository interface for User entities; implemented by the in-memory and the
# SQLAlchemy providers and selected once per deployment
# 🔗 Dependencies:
# Domain model (User), typing, abc
# 🔄 Connected Modules / Calls From:
# auth_service.py, infrastructure memory/database implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Methods return domain entities (User), never storage records
    - Email lookups are case-insensitive (emails are stored lowercased)
    - Uniqueness of email and username is checked by the caller before writes;
      implementations may additionally enforce it
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Args:
            user: User entity to create

        Returns:
            The stored User entity
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username."""
        pass

    @abstractmethod
    async def get_by_provider_id(self, provider: str, provider_id: str) -> Optional[User]:
        """
        Get the user linked to a federated identity.

        Args:
            provider: OAuth provider name (google, facebook)
            provider_id: The provider's user id

        Returns:
            User entity if a link exists, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Replace the stored state of an existing user, federated links included.

        Returns:
            The stored User entity
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Return every user in creation order."""
        pass
