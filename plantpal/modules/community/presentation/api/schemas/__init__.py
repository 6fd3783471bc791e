from .community_schemas import (
    CategoriesResponse,
    CategoryCountResponse,
    CommentCreateRequest,
    CommentEnvelope,
    CommentResponse,
    CommunityStatsResponse,
    InsightsResponse,
    LikeResponse,
    PostCreateRequest,
    PostEnvelope,
    PostListResponse,
    PostMessageEnvelope,
    PostResponse,
    PostUpdateRequest,
    SearchHitResponse,
    SearchResponse,
    StatsEnvelope,
    SuggestionsResponse,
    TrendingTopicsResponse,
)

__all__ = [
    "CategoriesResponse",
    "CategoryCountResponse",
    "CommentCreateRequest",
    "CommentEnvelope",
    "CommentResponse",
    "CommunityStatsResponse",
    "InsightsResponse",
    "LikeResponse",
    "PostCreateRequest",
    "PostEnvelope",
    "PostListResponse",
    "PostMessageEnvelope",
    "PostResponse",
    "PostUpdateRequest",
    "SearchHitResponse",
    "SearchResponse",
    "StatsEnvelope",
    "SuggestionsResponse",
    "TrendingTopicsResponse",
]
