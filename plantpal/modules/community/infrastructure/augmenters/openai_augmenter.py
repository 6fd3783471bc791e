# 📄 File: plantpal/modules/community/infrastructure/augmenters/openai_augmenter.py
# 🧭 Purpose (Layman Explanation):
# Asks a hosted AI model to help the community pages: which posts best answer a
# search, which tags and category fit a new post, and what topics are popular
#
# 🧪 Purpose (Technical Summary):
# SearchAugmenter over the chat-completions API. Each operation sends one prompt,
# expects a JSON answer and validates its shape; anything unusable raises
# AugmenterError so the caller can fall back.
#
# 🔗 Dependencies:
# - plantpal.shared.infrastructure.external_apis.llm_client (httpx client, JSON parsing)
# - community domain models and SearchAugmenter port
#
# 🔄 Connected Modules / Calls From:
# - plantpal.shared.infrastructure.container (when OPENAI_API_KEY is set)

import logging
import math
from typing import Any, Dict, List, Sequence, Tuple

from plantpal.shared.core.exceptions import AugmenterError, ExternalServiceError
from plantpal.shared.infrastructure.external_apis.llm_client import (
    ChatCompletionClient,
    parse_json_answer,
    strip_code_fences,
)

from ...domain.models.post import CATEGORY_CATALOG, CommunityPost, PostInsights
from ...domain.services.augmenter import SearchAugmenter

logger = logging.getLogger(__name__)

RERANK_PROMPT = """You are helping a gardening community search engine.
Search query: "{query}"

Posts:
{posts}

For each post, assess how relevant it is to the query, how practical its advice is,
and how engaging it is for the community. Reply with a JSON array only, one object
per post: {{"id": "<post id>", "relevance_score": <0..1>, "practical_value": "<short label>",
"engagement_score": <0..1>, "ai_suggestions": ["<tip>", ...]}}"""

TAGS_PROMPT = """Suggest 3-5 relevant tags for this gardening post.
Title: "{title}"
Content: "{content}"

Reply with a JSON array of short lowercase strings only."""

CATEGORY_PROMPT = """Categorize this gardening post into exactly one of these categories:
{categories}

Title: "{title}"
Content: "{content}"

Reply with the category id only."""

SUGGESTIONS_PROMPT = """Based on the search "{query}" in a gardening and plant care community,
suggest 5 related search terms covering practical care tips, plant diseases and
community topics. Reply with a JSON array of strings only."""

INSIGHTS_PROMPT = """Analyze this gardening community activity:
{posts}

Describe the most popular topics, engagement trends, emerging interests and seasonal
trends. Reply with a JSON object only, with the fields popular_topics (array of strings),
engagement_trends (string), emerging_interests (array of strings) and seasonal_trends (string)."""

TOPICS_PROMPT = """Based on this gardening community activity, identify 5 trending topics:
{posts}

Reply with a JSON array only, one object per topic with the fields topic (string),
description (string) and engagement_score (0..1)."""


class OpenAISearchAugmenter(SearchAugmenter):
    """
    SearchAugmenter backed by an OpenAI-compatible chat-completions endpoint.
    """

    def __init__(self, client: ChatCompletionClient):
        self.client = client

    # =========================================================================
    # SEARCH
    # =========================================================================

    async def rerank(self, query: str, posts: Sequence[CommunityPost]) -> List[Tuple[CommunityPost, PostInsights]]:
        """
        Score posts for a query.

        Returns:
            (post, insights) pairs for every post the model assessed, in the
            order the model listed them

        Raises:
            AugmenterError: If the request fails or the answer is not a list of assessments
        """
        if not posts:
            return []
        listing = "\n".join(f"- [{post.post_id}] {post.title}: {post.content}" for post in posts)
        answer = await self._ask_json(RERANK_PROMPT.format(query=query, posts=listing), max_tokens=600)
        if not isinstance(answer, list):
            raise AugmenterError("Rerank answer is not a list")

        by_id = {post.post_id: post for post in posts}
        ranked: List[Tuple[CommunityPost, PostInsights]] = []
        seen = set()
        for item in answer:
            if not isinstance(item, dict):
                raise AugmenterError("Rerank entry is not an object")
            post = by_id.get(str(item.get("id")))
            if post is None or post.post_id in seen:
                continue
            seen.add(post.post_id)
            ranked.append((post, self._insights(item)))
        return ranked

    async def search_suggestions(self, query: str) -> List[str]:
        answer = await self._ask_json(SUGGESTIONS_PROMPT.format(query=query), max_tokens=200)
        return self._string_list(answer, "search suggestions")

    # =========================================================================
    # POST AUTHORING
    # =========================================================================

    async def suggest_tags(self, title: str, content: str) -> List[str]:
        answer = await self._ask_json(TAGS_PROMPT.format(title=title, content=content), max_tokens=100)
        return self._string_list(answer, "tag suggestions")

    async def suggest_category(self, title: str, content: str) -> str:
        """
        Pick a catalog category for a post.

        Raises:
            AugmenterError: If the answer is not one of the catalog ids
        """
        categories = "\n".join(f"- {category['id']}" for category in CATEGORY_CATALOG)
        prompt = CATEGORY_PROMPT.format(categories=categories, title=title, content=content)
        answer = strip_code_fences(await self._ask(prompt, max_tokens=50))
        category = answer.strip().strip("\"'`.").strip().lower()
        if category not in {entry["id"] for entry in CATEGORY_CATALOG}:
            raise AugmenterError(f"Unknown category suggested: {category[:50]!r}")
        return category

    # =========================================================================
    # COMMUNITY OVERVIEW
    # =========================================================================

    async def community_insights(self, posts: Sequence[CommunityPost]) -> Dict[str, Any]:
        answer = await self._ask_json(INSIGHTS_PROMPT.format(posts=self._activity(posts)), max_tokens=400)
        if not isinstance(answer, dict):
            raise AugmenterError("Insights answer is not an object")
        return answer

    async def trending_topics(self, posts: Sequence[CommunityPost]) -> List[Dict[str, Any]]:
        answer = await self._ask_json(TOPICS_PROMPT.format(posts=self._activity(posts)), max_tokens=300)
        if not isinstance(answer, list) or not all(isinstance(item, dict) and item.get("topic") for item in answer):
            raise AugmenterError("Trending topics answer is not a list of topics")
        return answer

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _ask(self, prompt: str, max_tokens: int) -> str:
        try:
            return await self.client.complete(prompt, max_tokens=max_tokens)
        except ExternalServiceError as e:
            raise AugmenterError(f"Augmenter request failed: {e.message}")

    async def _ask_json(self, prompt: str, max_tokens: int) -> Any:
        answer = await self._ask(prompt, max_tokens)
        try:
            return parse_json_answer(answer)
        except ValueError:
            logger.debug(f"Unparseable augmenter answer: {answer[:200]!r}")
            raise AugmenterError("Augmenter answer is not valid JSON")

    @staticmethod
    def _string_list(answer: Any, what: str) -> List[str]:
        if not isinstance(answer, list) or not all(isinstance(item, str) for item in answer):
            raise AugmenterError(f"The {what} answer is not a list of strings")
        return [item.strip() for item in answer if item.strip()]

    @staticmethod
    def _insights(item: Dict[str, Any]) -> PostInsights:
        try:
            relevance = float(item.get("relevance_score", 0.5))
            engagement = float(item.get("engagement_score", 0.5))
        except (TypeError, ValueError):
            raise AugmenterError("Rerank scores are not numbers")
        if not (math.isfinite(relevance) and math.isfinite(engagement)):
            raise AugmenterError("Rerank scores must be finite")
        suggestions = item.get("ai_suggestions") or []
        if not isinstance(suggestions, list):
            suggestions = [str(suggestions)]
        return PostInsights(
            relevance_score=relevance,
            practical_value=str(item.get("practical_value") or "Good"),
            engagement_score=engagement,
            suggestions=[str(s) for s in suggestions],
        )

    @staticmethod
    def _activity(posts: Sequence[CommunityPost]) -> str:
        return "\n".join(
            f"- {post.title} ({post.likes} likes, {post.comment_count} comments, category {post.category})"
            for post in posts
        ) or "- (no posts yet)"
