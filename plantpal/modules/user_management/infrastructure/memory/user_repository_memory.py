# 📄 File: plantpal/modules/user_management/infrastructure/memory/user_repository_memory.py
# 🧭 Purpose (Layman Explanation):
# Keeps user accounts in the server's memory when PlantPal runs without a database
# 🧪 Purpose (Technical Summary):
# In-memory UserRepository implementation over InMemoryCollection; lookups are
# linear scans, which is fine for development and tests
# 🔗 Dependencies:
# plantpal.shared.infrastructure.memory, user domain model and repository interface
# 🔄 Connected Modules / Calls From:
# plantpal.shared.infrastructure.container (memory backend)

from typing import List, Optional

from plantpal.shared.infrastructure.memory import InMemoryCollection

from ...domain.models.user import User
from ...domain.repositories.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """UserRepository backed by process memory."""

    def __init__(self):
        self._users: InMemoryCollection[User] = InMemoryCollection()

    async def create(self, user: User) -> User:
        return self._users.put(user.user_id, user)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        email = email.lower().strip()
        return self._users.find(lambda u: u.email == email)

    async def get_by_username(self, username: str) -> Optional[User]:
        return self._users.find(lambda u: u.username == username)

    async def get_by_provider_id(self, provider: str, provider_id: str) -> Optional[User]:
        return self._users.find(lambda u: u.federated_ids.get(provider) == provider_id)

    async def update(self, user: User) -> User:
        return self._users.put(user.user_id, user)

    async def list_all(self) -> List[User]:
        return self._users.all()
