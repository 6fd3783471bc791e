from .post import (
    CATEGORY_CATALOG,
    DEFAULT_CATEGORY,
    SORT_KEYS,
    SORT_ORDERS,
    CategoryCount,
    Comment,
    CommunityPost,
    CommunityStats,
    PostInsights,
    SearchHit,
    SearchOutcome,
)

__all__ = [
    "CATEGORY_CATALOG",
    "DEFAULT_CATEGORY",
    "SORT_KEYS",
    "SORT_ORDERS",
    "CategoryCount",
    "Comment",
    "CommunityPost",
    "CommunityStats",
    "PostInsights",
    "SearchHit",
    "SearchOutcome",
]
