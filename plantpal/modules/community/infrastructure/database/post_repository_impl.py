# 📄 File: plantpal/modules/community/infrastructure/database/post_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Handles database operations for community posts: saving, finding, editing,
# deleting, liking and commenting
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of PostRepository. Likes use a single atomic
# UPDATE; comments lock the post row while the comment is appended.
#
# 🔗 Dependencies:
# - community domain models and repository interface
# - community ORM models
# - plantpal.shared.infrastructure.database.session (transactions)
#
# 🔄 Connected Modules / Calls From:
# - plantpal.shared.infrastructure.container (database backend)

import logging
from typing import List, Optional

from sqlalchemy import func, select, update

from plantpal.shared.infrastructure.database.session import DatabaseSessionManager
from plantpal.shared.utils.helpers import ensure_utc

from ...domain.models.post import Comment, CommunityPost
from ...domain.repositories.post_repository import PostRepository
from .models import CommunityPostModel, PostCommentModel

logger = logging.getLogger(__name__)


class PostRepositoryImpl(PostRepository):
    """
    SQLAlchemy implementation of the PostRepository interface.
    """

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    async def add(self, post: CommunityPost) -> CommunityPost:
        async with self._sessions.get_session() as session:
            post_model = self._domain_to_model(post)
            session.add(post_model)
            await session.flush()
            logger.info(f"Created community post {post.post_id}")
            return self._model_to_domain(post_model)

    async def get(self, post_id: str) -> Optional[CommunityPost]:
        async with self._sessions.get_session() as session:
            post_model = await self._load(session, post_id)
            return self._model_to_domain(post_model) if post_model else None

    async def list_all(self) -> List[CommunityPost]:
        async with self._sessions.get_session() as session:
            result = await session.execute(select(CommunityPostModel).order_by(CommunityPostModel.created_at))
            return [self._model_to_domain(model) for model in result.scalars().all()]

    async def save(self, post: CommunityPost) -> Optional[CommunityPost]:
        async with self._sessions.get_session() as session:
            post_model = await self._load(session, post.post_id)
            if post_model is None:
                return None
            post_model.title = post.title
            post_model.content = post.content
            post_model.tags = list(post.tags)
            post_model.category = post.category
            post_model.updated_at = post.updated_at
            await session.flush()
            return self._model_to_domain(post_model)

    async def delete(self, post_id: str) -> Optional[CommunityPost]:
        async with self._sessions.get_session() as session:
            post_model = await self._load(session, post_id)
            if post_model is None:
                return None
            removed = self._model_to_domain(post_model)
            await session.delete(post_model)
            await session.flush()
            logger.info(f"Deleted community post {post_id}")
            return removed

    async def increment_likes(self, post_id: str) -> Optional[CommunityPost]:
        async with self._sessions.get_session() as session:
            result = await session.execute(
                update(CommunityPostModel)
                .where(CommunityPostModel.post_id == post_id)
                .values(likes=CommunityPostModel.likes + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            post_model = await self._load(session, post_id, populate_existing=True)
            return self._model_to_domain(post_model)

    async def add_comment(self, post_id: str, comment: Comment) -> Optional[CommunityPost]:
        async with self._sessions.get_session() as session:
            post_model = await self._load(session, post_id, for_update=True)
            if post_model is None:
                return None

            post = self._model_to_domain(post_model)
            post.add_comment(comment)

            post_model.comments.append(
                PostCommentModel(
                    comment_id=comment.comment_id,
                    position=len(post_model.comments),
                    author_id=comment.author_id,
                    author_name=comment.author_name,
                    content=comment.content,
                    created_at=comment.created_at,
                )
            )
            post_model.comment_count = post.comment_count
            post_model.updated_at = post.updated_at
            await session.flush()
            return post

    async def count(self) -> int:
        async with self._sessions.get_session() as session:
            result = await session.execute(select(func.count()).select_from(CommunityPostModel))
            return int(result.scalar_one())

    async def _load(
        self,
        session,
        post_id: str,
        for_update: bool = False,
        populate_existing: bool = False,
    ) -> Optional[CommunityPostModel]:
        stmt = select(CommunityPostModel).where(CommunityPostModel.post_id == post_id)
        if for_update:
            stmt = stmt.with_for_update()
        if populate_existing:
            stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    def _domain_to_model(self, post: CommunityPost) -> CommunityPostModel:
        return CommunityPostModel(
            post_id=post.post_id,
            author_id=post.author_id,
            author_name=post.author_name,
            title=post.title,
            content=post.content,
            tags=list(post.tags),
            category=post.category,
            likes=post.likes,
            comment_count=len(post.comments),
            created_at=post.created_at,
            updated_at=post.updated_at,
            comments=[
                PostCommentModel(
                    comment_id=comment.comment_id,
                    position=position,
                    author_id=comment.author_id,
                    author_name=comment.author_name,
                    content=comment.content,
                    created_at=comment.created_at,
                )
                for position, comment in enumerate(post.comments)
            ],
        )

    def _model_to_domain(self, model: CommunityPostModel) -> CommunityPost:
        comments = [
            Comment(
                comment_id=row.comment_id,
                author_id=row.author_id,
                author_name=row.author_name,
                content=row.content,
                created_at=ensure_utc(row.created_at),
            )
            for row in model.comments
        ]
        return CommunityPost(
            post_id=model.post_id,
            author_id=model.author_id,
            author_name=model.author_name,
            title=model.title,
            content=model.content,
            tags=list(model.tags or []),
            category=model.category,
            likes=model.likes,
            comments=comments,
            comment_count=len(comments),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
