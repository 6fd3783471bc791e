from .augmenter import SearchAugmenter
from .community_service import (
    DEFAULT_COMMUNITY_INSIGHTS,
    DEFAULT_TRENDING_TOPICS,
    CommunityService,
)
from .sample_posts import build_sample_posts

__all__ = [
    "DEFAULT_COMMUNITY_INSIGHTS",
    "DEFAULT_TRENDING_TOPICS",
    "CommunityService",
    "SearchAugmenter",
    "build_sample_posts",
]
