# 📄 File: plantpal/modules/community/domain/models/post.py
# 🧭 Purpose (Layman Explanation):
# Describes a community forum post, the comments people leave on it, and the
# summaries we show about the community as a whole
# 🧪 Purpose (Technical Summary):
# CommunityPost aggregate with immutable Comments, the sort-key catalog used by
# listing and search, and read-model value objects (insights, counts, stats)
# 🔗 Dependencies:
# pydantic, datetime
# 🔄 Connected Modules / Calls From:
# community_service.py, post repositories, search augmenters, community API schemas

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plantpal.shared.utils.helpers import generate_id, utc_now

DEFAULT_CATEGORY = "general"

# Sort keys accepted by list/search, mapped to the value they sort on
SORT_KEYS: Dict[str, Callable[["CommunityPost"], Any]] = {
    "createdAt": lambda post: post.created_at,
    "updatedAt": lambda post: post.updated_at,
    "likes": lambda post: post.likes,
    "commentCount": lambda post: post.comment_count,
    "title": lambda post: post.title,
}
SORT_ORDERS = ("asc", "desc")

CATEGORY_CATALOG: List[Dict[str, str]] = [
    {"id": "gardening-tips", "name": "Gardening Tips", "description": "General gardening advice"},
    {"id": "pest-control", "name": "Pest Control", "description": "Natural pest management"},
    {"id": "plant-diseases", "name": "Plant Diseases", "description": "Disease identification and treatment"},
    {"id": "urban-gardening", "name": "Urban Gardening", "description": "Small space gardening solutions"},
    {"id": "organic-gardening", "name": "Organic Gardening", "description": "Natural and organic methods"},
    {"id": "seasonal-care", "name": "Seasonal Care", "description": "Season-specific plant care"},
]


class Comment(BaseModel):
    """A reply on a post. Never edited once written."""

    model_config = ConfigDict(frozen=True)

    comment_id: str = Field(default_factory=generate_id)
    author_id: str
    author_name: str
    content: str
    created_at: datetime = Field(default_factory=utc_now)


class CommunityPost(BaseModel):
    """
    Community post aggregate.

    ``comment_count`` always equals ``len(comments)`` and ``likes`` never
    decreases; both are only changed through ``add_comment`` and ``like``.
    """

    post_id: str = Field(default_factory=generate_id)
    author_id: str
    author_name: str
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    category: str = DEFAULT_CATEGORY
    likes: int = Field(default=0, ge=0)
    comments: List[Comment] = Field(default_factory=list)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def like(self) -> None:
        self.likes += 1

    def add_comment(self, comment: Comment) -> None:
        self.comments = [*self.comments, comment]
        self.comment_count = len(self.comments)
        self.touch()

    def touch(self) -> None:
        now = utc_now()
        self.updated_at = now if now >= self.created_at else self.created_at

    @property
    def engagement(self) -> int:
        return self.likes + self.comment_count

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title, content or any tag."""
        needle = query.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


class PostInsights(BaseModel):
    """Augmenter assessment of one post for a search query."""
    relevance_score: float = 0.5
    practical_value: str = "Good"
    engagement_score: float = 0.5
    suggestions: List[str] = Field(default_factory=list)


class SearchHit(BaseModel):
    post: CommunityPost
    insights: Optional[PostInsights] = None


class SearchOutcome(BaseModel):
    query: str
    results: List[SearchHit] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)


class CategoryCount(BaseModel):
    category: str
    count: int


class CommunityStats(BaseModel):
    total_posts: int = 0
    total_categories: int = 0
    total_likes: int = 0
    total_comments: int = 0
