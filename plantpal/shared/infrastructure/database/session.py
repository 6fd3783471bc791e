# 📄 File: plantpal/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) ensuring each operation
# gets its own clean session and properly handles database transactions and rollbacks.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session management: one session and one transaction per repository
# operation, committed on success and rolled back on any failure.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - plantpal/shared/infrastructure/database/connection.py (database engine)
#
# 🔄 Connected Modules / Calls From:
# - Database repository implementations of every module

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from plantpal.shared.core.exceptions import DatabaseError, PlantPalException
from plantpal.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self, connection: DatabaseConnectionManager):
        self._connection = connection
        self._session_factory = async_sessionmaker(
            connection.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the database rejects the operation
        """
        session: AsyncSession = self._session_factory()

        try:
            yield session
            await session.commit()
            logger.debug("Database transaction committed successfully")

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e.__class__.__name__}")

        except PlantPalException:
            await session.rollback()
            raise

        except Exception as e:
            await session.rollback()
            logger.error(f"Unexpected error occurred, transaction rolled back: {e}")
            raise

        finally:
            await session.close()
