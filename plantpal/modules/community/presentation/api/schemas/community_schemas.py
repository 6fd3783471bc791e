# 📄 File: plantpal/modules/community/presentation/api/schemas/community_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a forum post, comment or search result looks like when it is
# sent to the app, and what people send when they write posts and comments.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the community endpoints, camelCase on
# the wire. Search hits carry the optional augmenter assessment as aiInsights.
#
# 🔗 Dependencies:
# - pydantic, plantpal.shared.core.schemas
# - community domain models
#
# 🔄 Connected Modules / Calls From:
# - plantpal.modules.community.presentation.api.v1.community

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from plantpal.shared.core.schemas import CamelModel, SuccessResponse

from ....domain.models.post import (
    CategoryCount,
    Comment,
    CommunityPost,
    CommunityStats,
    PostInsights,
    SearchHit,
)


# =============================================================================
# REQUESTS
# =============================================================================

class PostCreateRequest(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None


class PostUpdateRequest(CamelModel):
    """Partial update; only fields present in the body are applied."""
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None


class CommentCreateRequest(CamelModel):
    content: Optional[str] = None


# =============================================================================
# RESPONSES
# =============================================================================

class CommentResponse(CamelModel):
    id: str
    author_id: str
    author_name: str
    content: str
    created_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls.model_validate({**comment.model_dump(), "id": comment.comment_id})


class PostResponse(CamelModel):
    id: str
    author_id: str
    author_name: str
    title: str
    content: str
    tags: List[str]
    category: str
    likes: int
    comments: List[CommentResponse]
    comment_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, post: CommunityPost) -> "PostResponse":
        return cls(**cls._fields_from(post))

    @staticmethod
    def _fields_from(post: CommunityPost) -> Dict[str, Any]:
        return {
            "id": post.post_id,
            "author_id": post.author_id,
            "author_name": post.author_name,
            "title": post.title,
            "content": post.content,
            "tags": list(post.tags),
            "category": post.category,
            "likes": post.likes,
            "comments": [CommentResponse.from_domain(c) for c in post.comments],
            "comment_count": post.comment_count,
            "created_at": post.created_at,
            "updated_at": post.updated_at,
        }


class PostInsightsResponse(CamelModel):
    relevance_score: float
    practical_value: str
    engagement_score: float
    suggestions: List[str]

    @classmethod
    def from_domain(cls, insights: PostInsights) -> "PostInsightsResponse":
        return cls.model_validate(insights.model_dump())


class SearchHitResponse(PostResponse):
    ai_insights: Optional[PostInsightsResponse] = None

    @classmethod
    def from_hit(cls, hit: SearchHit) -> "SearchHitResponse":
        return cls(
            **cls._fields_from(hit.post),
            ai_insights=PostInsightsResponse.from_domain(hit.insights) if hit.insights else None,
        )


class PostListResponse(SuccessResponse):
    posts: List[PostResponse]
    total: int


class PostEnvelope(SuccessResponse):
    post: PostResponse


class PostMessageEnvelope(PostEnvelope):
    message: str


class LikeResponse(SuccessResponse):
    message: str = "Post liked successfully"
    likes: int


class CommentEnvelope(SuccessResponse):
    message: str = "Comment added successfully"
    comment: CommentResponse


class SearchResponse(SuccessResponse):
    query: str
    results: List[SearchHitResponse]
    suggestions: List[str]
    total: int


class CategoryCountResponse(CamelModel):
    category: str
    count: int

    @classmethod
    def from_domain(cls, item: CategoryCount) -> "CategoryCountResponse":
        return cls(category=item.category, count=item.count)


class CategoriesResponse(SuccessResponse):
    categories: List[CategoryCountResponse]
    available_categories: List[Dict[str, str]]


class CommunityStatsResponse(CamelModel):
    total_posts: int
    total_categories: int
    total_likes: int
    total_comments: int

    @classmethod
    def from_domain(cls, stats: CommunityStats) -> "CommunityStatsResponse":
        return cls.model_validate(stats.model_dump())


class StatsEnvelope(SuccessResponse):
    stats: CommunityStatsResponse


class InsightsResponse(SuccessResponse):
    insights: Dict[str, Any]


class TrendingTopicsResponse(SuccessResponse):
    trending_topics: List[Dict[str, Any]] = Field(default_factory=list)


class SuggestionsResponse(SuccessResponse):
    query: str
    suggestions: List[str]
