# 📄 File: plantpal/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how user accounts and their Google/Facebook sign-in links are stored
# in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the users and user_identities tables. Federated
# identities live in their own table with a unique (provider, provider_id) pair.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantpal.shared.infrastructure.database.connection (declarative Base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD operations)
# - migrations/versions (schema)

"""
SQLAlchemy Models for User Management

Models:
- UserModel: account data (credentials, role, provider of origin)
- UserIdentityModel: one row per linked OAuth identity
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from plantpal.shared.infrastructure.database.connection import Base
from plantpal.shared.utils.helpers import utc_now


class UserModel(Base):
    """SQLAlchemy model for user accounts."""
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(254), nullable=True, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    provider = Column(String(20), nullable=False, default="local")
    avatar = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    identities = relationship(
        "UserIdentityModel",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<UserModel(user_id={self.user_id}, username={self.username})>"


class UserIdentityModel(Base):
    """A federated identity (provider account) linked to a user."""
    __tablename__ = "user_identities"
    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_user_identities_provider"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    provider = Column(String(20), nullable=False)
    provider_id = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    user = relationship("UserModel", back_populates="identities")
