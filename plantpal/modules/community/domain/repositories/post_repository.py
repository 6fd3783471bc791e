# 📄 File: plantpal/modules/community/domain/repositories/post_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how community posts and their comments are saved and found
# 🧪 Purpose (Technical Summary):
# Repository interface for the CommunityPost aggregate with atomic like and
# comment operations
# 🔗 Dependencies:
# Community domain models, typing, abc
# 🔄 Connected Modules / Calls From:
# community_service.py, memory and database implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.post import Comment, CommunityPost


class PostRepository(ABC):
    """
    Repository interface for community posts.

    Implementation Notes:
    - ``increment_likes`` and ``add_comment`` are atomic per post, so
      concurrent likes or comments are never lost
    - Returned posts are detached copies
    """

    @abstractmethod
    async def add(self, post: CommunityPost) -> CommunityPost:
        pass

    @abstractmethod
    async def get(self, post_id: str) -> Optional[CommunityPost]:
        pass

    @abstractmethod
    async def list_all(self) -> List[CommunityPost]:
        """All posts in creation order."""
        pass

    @abstractmethod
    async def save(self, post: CommunityPost) -> Optional[CommunityPost]:
        """
        Store title, content, tags, category and updated_at of an existing post.

        Returns:
            The stored post, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, post_id: str) -> Optional[CommunityPost]:
        pass

    @abstractmethod
    async def increment_likes(self, post_id: str) -> Optional[CommunityPost]:
        """Add exactly one like; None if the post does not exist."""
        pass

    @abstractmethod
    async def add_comment(self, post_id: str, comment: Comment) -> Optional[CommunityPost]:
        """Append a comment and keep comment_count in step; None if the post does not exist."""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass
