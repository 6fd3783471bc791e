# 📄 File: plantpal/modules/community/domain/services/augmenter.py
# 🧭 Purpose (Layman Explanation):
# The agreement for the AI helper that makes community search smarter: ranking
# results, proposing tags and categories, and summing up what people talk about
# 🧪 Purpose (Technical Summary):
# SearchAugmenter port. Implementations may fail freely by raising AugmenterError;
# CommunityService treats every call as best-effort.
# 🔗 Dependencies:
# Community domain models
# 🔄 Connected Modules / Calls From:
# community_service.py, OpenAISearchAugmenter, NullSearchAugmenter

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple

from ..models.post import CommunityPost, PostInsights


class SearchAugmenter(ABC):
    """Best-effort AI assistance for community features."""

    @abstractmethod
    async def rerank(self, query: str, posts: Sequence[CommunityPost]) -> List[Tuple[CommunityPost, PostInsights]]:
        """
        Score posts for a query.

        Posts the augmenter could not assess may be left out of the result.
        """
        pass

    @abstractmethod
    async def suggest_tags(self, title: str, content: str) -> List[str]:
        pass

    @abstractmethod
    async def suggest_category(self, title: str, content: str) -> str:
        pass

    @abstractmethod
    async def search_suggestions(self, query: str) -> List[str]:
        pass

    @abstractmethod
    async def community_insights(self, posts: Sequence[CommunityPost]) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def trending_topics(self, posts: Sequence[CommunityPost]) -> List[Dict[str, Any]]:
        pass
