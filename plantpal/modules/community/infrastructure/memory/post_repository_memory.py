# 📄 File: plantpal/modules/community/infrastructure/memory/post_repository_memory.py
# 🧭 Purpose (Layman Explanation):
# Keeps community posts in memory when PlantPal runs without a database
# 🧪 Purpose (Technical Summary):
# In-memory PostRepository; likes and comments are applied under the collection lock
# 🔗 Dependencies:
# plantpal.shared.infrastructure.memory, community domain models
# 🔄 Connected Modules / Calls From:
# plantpal.shared.infrastructure.container (memory backend)

from typing import List, Optional

from plantpal.shared.infrastructure.memory import InMemoryCollection

from ...domain.models.post import Comment, CommunityPost
from ...domain.repositories.post_repository import PostRepository

EDITABLE_FIELDS = ("title", "content", "tags", "category", "updated_at")


class InMemoryPostRepository(PostRepository):

    def __init__(self):
        self._posts: InMemoryCollection[CommunityPost] = InMemoryCollection()

    async def add(self, post: CommunityPost) -> CommunityPost:
        return self._posts.put(post.post_id, post)

    async def get(self, post_id: str) -> Optional[CommunityPost]:
        return self._posts.get(post_id)

    async def list_all(self) -> List[CommunityPost]:
        return self._posts.all()

    async def save(self, post: CommunityPost) -> Optional[CommunityPost]:
        def apply(stored: CommunityPost):
            for field in EDITABLE_FIELDS:
                setattr(stored, field, getattr(post, field))

        return self._posts.mutate(post.post_id, apply)

    async def delete(self, post_id: str) -> Optional[CommunityPost]:
        return self._posts.pop(post_id)

    async def increment_likes(self, post_id: str) -> Optional[CommunityPost]:
        return self._posts.mutate(post_id, lambda stored: stored.like())

    async def add_comment(self, post_id: str, comment: Comment) -> Optional[CommunityPost]:
        return self._posts.mutate(post_id, lambda stored: stored.add_comment(comment))

    async def count(self) -> int:
        return len(self._posts)
