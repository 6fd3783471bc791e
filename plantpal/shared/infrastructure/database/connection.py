# 📄 File: plantpal/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the database, making sure we can talk to our data storage
# and reuse connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine management with connection pooling, a health check and
# schema creation for the database storage backend. Owns the declarative Base.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine)
# - plantpal/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver) or any other async driver in DATABASE_URL
#
# 🔄 Connected Modules / Calls From:
# - plantpal/shared/infrastructure/database/session.py (session management)
# - plantpal/shared/infrastructure/container.py (startup and shutdown)
# - Module ORM models (Base)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from plantpal.shared.config.settings import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseConnectionManager:
    """
    Manages the async engine with connection pooling and health monitoring.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters from settings."""
        url = self._settings.DATABASE_URL
        params: Dict[str, Any] = {
            "url": url,
            "echo": self._settings.DB_ECHO,
            "pool_pre_ping": True,
        }
        # SQLite uses a single-connection pool that rejects sizing arguments
        if not url.startswith("sqlite"):
            params.update({
                "pool_recycle": self._settings.DB_POOL_RECYCLE,
                "pool_size": self._settings.DB_POOL_SIZE,
                "max_overflow": self._settings.DB_MAX_OVERFLOW,
            })
        return params

    @property
    def engine(self) -> AsyncEngine:
        """Return the engine, creating it on first use."""
        if self._engine is None:
            logger.info("Initializing database connection pool...")
            self._engine = create_async_engine(**self._build_connection_params())
        return self._engine

    async def create_tables(self) -> None:
        """Create every table registered on Base that does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(self._health_check_query)
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def close(self) -> None:
        """Dispose of the engine and every pooled connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database connection pool closed")
