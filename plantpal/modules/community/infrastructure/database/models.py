# 📄 File: plantpal/modules/community/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how community posts and their comments are stored in the database
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for community_posts and post_comments; tags are a JSON
# column and comments keep an explicit position for stable ordering.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantpal.shared.infrastructure.database.connection (declarative Base)
#
# 🔄 Connected Modules / Calls From:
# - post_repository_impl.py
# - migrations/versions (schema)

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from plantpal.shared.infrastructure.database.connection import Base
from plantpal.shared.utils.helpers import utc_now


class CommunityPostModel(Base):
    """SQLAlchemy model for a community post."""
    __tablename__ = "community_posts"

    post_id = Column(String(36), primary_key=True)
    author_id = Column(String(36), nullable=False, index=True)
    author_name = Column(String(100), nullable=False)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    category = Column(String(100), nullable=False, default="general", index=True)
    likes = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    comments = relationship(
        "PostCommentModel",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostCommentModel.position",
        lazy="selectin",
    )


class PostCommentModel(Base):
    """One comment on a community post."""
    __tablename__ = "post_comments"

    comment_id = Column(String(36), primary_key=True)
    post_id = Column(String(36), ForeignKey("community_posts.post_id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    author_id = Column(String(36), nullable=False)
    author_name = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    post = relationship("CommunityPostModel", back_populates="comments")
