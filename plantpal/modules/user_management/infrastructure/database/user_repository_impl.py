# 📄 File: plantpal/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Handles all database operations for user accounts, like creating new users,
# finding existing users and saving profile changes.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of the UserRepository interface with mapping between
# the User domain entity and the users/user_identities tables.
#
# 🔗 Dependencies:
# - user domain model and repository interface
# - user ORM models
# - plantpal.shared.infrastructure.database.session (transactions)
#
# 🔄 Connected Modules / Calls From:
# - plantpal.shared.infrastructure.container (database backend)

"""
User Repository Implementation

Each method runs in its own transaction obtained from DatabaseSessionManager.
Federated identities are synchronized as child rows of the user.
"""

import logging
from typing import List, Optional

from sqlalchemy import select

from plantpal.shared.infrastructure.database.session import DatabaseSessionManager
from plantpal.shared.utils.helpers import ensure_utc

from ...domain.models.user import User
from ...domain.repositories.user_repository import UserRepository
from .models import UserIdentityModel, UserModel

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, sessions: DatabaseSessionManager):
        """
        Initialize the user repository.

        Args:
            sessions: Session manager providing one transaction per operation
        """
        self._sessions = sessions

    async def create(self, user: User) -> User:
        async with self._sessions.get_session() as session:
            user_model = self._domain_to_model(user)
            session.add(user_model)
            await session.flush()
            logger.info(f"Created user with ID: {user_model.user_id}")
            return self._model_to_domain(user_model)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._get_one(select(UserModel).where(UserModel.user_id == user_id))

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._get_one(select(UserModel).where(UserModel.email == email.lower().strip()))

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._get_one(select(UserModel).where(UserModel.username == username))

    async def get_by_provider_id(self, provider: str, provider_id: str) -> Optional[User]:
        stmt = (
            select(UserModel)
            .join(UserIdentityModel, UserIdentityModel.user_id == UserModel.user_id)
            .where(
                UserIdentityModel.provider == provider,
                UserIdentityModel.provider_id == provider_id,
            )
        )
        return await self._get_one(stmt)

    async def update(self, user: User) -> User:
        """
        Update an existing user's columns and add any newly linked identities.

        Args:
            user: Domain user carrying the desired state

        Returns:
            User: The stored user
        """
        async with self._sessions.get_session() as session:
            result = await session.execute(select(UserModel).where(UserModel.user_id == user.user_id))
            user_model = result.scalar_one()

            user_model.username = user.username
            user_model.email = user.email
            user_model.password_hash = user.password_hash
            user_model.provider = user.provider
            user_model.avatar = user.avatar
            user_model.role = user.role
            user_model.updated_at = user.updated_at

            linked = {(identity.provider, identity.provider_id) for identity in user_model.identities}
            for provider, provider_id in user.federated_ids.items():
                if (provider, provider_id) not in linked:
                    user_model.identities.append(
                        UserIdentityModel(provider=provider, provider_id=provider_id)
                    )

            await session.flush()
            logger.debug(f"Updated user: {user.user_id}")
            return self._model_to_domain(user_model)

    async def list_all(self) -> List[User]:
        async with self._sessions.get_session() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.created_at))
            return [self._model_to_domain(model) for model in result.scalars().all()]

    async def _get_one(self, stmt) -> Optional[User]:
        async with self._sessions.get_session() as session:
            result = await session.execute(stmt)
            user_model = result.scalars().first()
            return self._model_to_domain(user_model) if user_model else None

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            user_id=user.user_id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            provider=user.provider,
            avatar=user.avatar,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
            identities=[
                UserIdentityModel(provider=provider, provider_id=provider_id)
                for provider, provider_id in user.federated_ids.items()
            ],
        )

    def _model_to_domain(self, model: UserModel) -> User:
        return User(
            user_id=model.user_id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            provider=model.provider,
            federated_ids={identity.provider: identity.provider_id for identity in model.identities},
            avatar=model.avatar,
            role=model.role,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
