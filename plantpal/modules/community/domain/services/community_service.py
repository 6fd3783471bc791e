# 📄 File: plantpal/modules/community/domain/services/community_service.py
# 🧭 Purpose (Layman Explanation):
# Runs the community forum: writing, editing, liking and commenting on posts,
# searching them, and showing what is popular. The AI helper is optional; when it
# is slow or broken everything still works, just without the extras.
# 🧪 Purpose (Technical Summary):
# Domain service over PostRepository with author-only mutation, filter/sort/limit
# listing, substring search with best-effort augmenter re-ranking, and read-side
# aggregates. Augmenter calls are time-bounded and never propagate failures.
# 🔗 Dependencies:
# Community domain models, PostRepository, SearchAugmenter, shared exceptions
# 🔄 Connected Modules / Calls From:
# Community API endpoints, service container (seeding)

import asyncio
import copy
import logging
import math
from collections import Counter
from typing import Any, Awaitable, Dict, List, Optional, Sequence, TypeVar

from plantpal.shared.core.exceptions import (
    AugmenterUnavailableError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from plantpal.shared.utils.logging import get_logger

from ..models.post import (
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
from ..repositories.post_repository import PostRepository
from .augmenter import SearchAugmenter
from .sample_posts import build_sample_posts

logger = logging.getLogger(__name__)
security_logger = get_logger(__name__).security

T = TypeVar("T")

DEFAULT_SORT_KEY = "createdAt"
DEFAULT_SORT_ORDER = "desc"
DEFAULT_SEARCH_LIMIT = 10

DEFAULT_COMMUNITY_INSIGHTS: Dict[str, Any] = {
    "popular_topics": ["organic gardening", "pest control", "urban farming"],
    "engagement_trends": "High engagement on practical tips",
    "emerging_interests": ["vertical gardening", "sustainable practices"],
    "seasonal_trends": "Spring planting and summer care tips",
}

DEFAULT_TRENDING_TOPICS: List[Dict[str, Any]] = [
    {"topic": "Organic Fertilizers", "description": "Natural plant nutrition", "engagement_score": 0.8},
    {"topic": "Pest Control", "description": "Natural pest management", "engagement_score": 0.7},
    {"topic": "Urban Gardening", "description": "Small space solutions", "engagement_score": 0.9},
]


class CommunityService:
    """
    Domain service for community posts.

    Business rules:
    - Only the author may edit or delete a post
    - Likes are counted, not deduplicated per user
    - ``comment_count`` always equals the number of comments
    - Augmenter output only ever adds to a response; it never blocks one
    """

    def __init__(
        self,
        post_repository: PostRepository,
        augmenter: SearchAugmenter,
        augmenter_timeout: float = 10.0,
    ):
        self.post_repository = post_repository
        self.augmenter = augmenter
        self.augmenter_timeout = augmenter_timeout

    # =========================================================================
    # POSTS
    # =========================================================================

    async def create(
        self,
        author_id: str,
        author_name: str,
        title: Optional[str],
        content: Optional[str],
        tags: Optional[List[str]] = None,
        category: Optional[str] = None,
    ) -> CommunityPost:
        """
        Publish a post.

        Missing tags or category are filled in by the augmenter, falling back
        to no tags and the ``general`` category.

        Raises:
            ValidationError: If title or content is blank, or tags are malformed
        """
        title = self._require_text(title, "title", "Title is required")
        content = self._require_text(content, "content", "Content is required")
        tags = self._clean_tags(tags)

        if not tags:
            suggested = await self._augmented("suggest_tags", self.augmenter.suggest_tags(title, content), [])
            if isinstance(suggested, list):
                tags = [tag.strip() for tag in suggested if isinstance(tag, str) and tag.strip()]
        if not (isinstance(category, str) and category.strip()):
            category = await self._augmented(
                "suggest_category",
                self.augmenter.suggest_category(title, content),
                DEFAULT_CATEGORY,
            )
            if not (isinstance(category, str) and category.strip()):
                category = DEFAULT_CATEGORY

        post = await self.post_repository.add(CommunityPost(
            author_id=author_id,
            author_name=author_name,
            title=title,
            content=content,
            tags=tags,
            category=category.strip(),
        ))
        logger.info(f"Community post {post.post_id} created by {author_id} in {post.category}")
        return post

    async def get(self, post_id: str) -> CommunityPost:
        post = await self.post_repository.get(post_id)
        if post is None:
            raise NotFoundError("Post not found", resource_type="post", resource_id=post_id)
        return post

    async def like(self, post_id: str) -> CommunityPost:
        post = await self.post_repository.increment_likes(post_id)
        if post is None:
            raise NotFoundError("Post not found", resource_type="post", resource_id=post_id)
        return post

    async def add_comment(self, post_id: str, author_id: str, author_name: str, content: Optional[str]) -> Comment:
        """
        Append a comment to a post.

        Raises:
            ValidationError: If the content is blank
            NotFoundError: If the post does not exist
        """
        content = self._require_text(content, "content", "Comment content is required")
        comment = Comment(author_id=author_id, author_name=author_name, content=content)
        post = await self.post_repository.add_comment(post_id, comment)
        if post is None:
            raise NotFoundError("Post not found", resource_type="post", resource_id=post_id)
        logger.info(f"Comment {comment.comment_id} added to post {post_id} ({post.comment_count} total)")
        return comment

    async def update(self, post_id: str, author_id: str, changes: Dict[str, Any]) -> CommunityPost:
        """
        Merge title, content, tags and/or category into a post.

        Raises:
            NotFoundError: If the post does not exist
            AuthorizationError: If author_id is not the post's author
            ValidationError: If a provided value is invalid
        """
        post = await self._authored(post_id, author_id, "update")

        if "title" in changes:
            post.title = self._require_text(changes["title"], "title", "Title is required")
        if "content" in changes:
            post.content = self._require_text(changes["content"], "content", "Content is required")
        if "tags" in changes:
            post.tags = self._clean_tags(changes["tags"])
        if "category" in changes:
            post.category = self._require_text(changes["category"], "category", "Category must not be empty")

        post.touch()
        saved = await self.post_repository.save(post)
        if saved is None:
            raise NotFoundError("Post not found", resource_type="post", resource_id=post_id)
        return saved

    async def delete(self, post_id: str, author_id: str) -> CommunityPost:
        await self._authored(post_id, author_id, "delete")
        removed = await self.post_repository.delete(post_id)
        if removed is None:
            raise NotFoundError("Post not found", resource_type="post", resource_id=post_id)
        logger.info(f"Community post {post_id} deleted by {author_id}")
        return removed

    async def _authored(self, post_id: str, author_id: str, action: str) -> CommunityPost:
        post = await self.get(post_id)
        if post.author_id != author_id:
            security_logger.log_authorization(
                user_id=author_id,
                resource=f"post:{post_id}",
                action=action,
                granted=False,
            )
            raise AuthorizationError(
                f"Not authorized to {action} this post",
                resource_type="post",
                resource_id=post_id,
                required_action=action,
            )
        return post

    # =========================================================================
    # LISTING & SEARCH
    # =========================================================================

    async def list(
        self,
        category: Optional[str] = None,
        min_likes: Optional[int] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CommunityPost]:
        posts = self._filter(await self.post_repository.list_all(), category, min_likes)
        posts = self._sort(posts, sort_by, order)
        return self._limit(posts, limit)

    async def search(
        self,
        query: Optional[str],
        category: Optional[str] = None,
        min_likes: Optional[int] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
        limit: Optional[int] = DEFAULT_SEARCH_LIMIT,
    ) -> SearchOutcome:
        """
        Search posts by title, content or tag.

        Pipeline: substring match, category/min_likes filters, sort, best-effort
        augmenter re-ranking, limit. Suggestions are best-effort as well.

        Raises:
            ValidationError: If the query is blank or the sort options are unknown
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Search query is required", field="q")
        query = query.strip()

        matches = [post for post in await self.post_repository.list_all() if post.matches(query)]
        matches = self._sort(self._filter(matches, category, min_likes), sort_by, order)

        hits = await self._rerank(query, matches)
        suggestions = await self._augmented("search_suggestions", self.augmenter.search_suggestions(query), [])

        return SearchOutcome(
            query=query,
            results=self._limit(hits, limit),
            suggestions=[str(s) for s in suggestions] if isinstance(suggestions, list) else [],
        )

    async def _rerank(self, query: str, posts: List[CommunityPost]) -> List[SearchHit]:
        """
        Reorder posts by augmenter relevance.

        Ranked posts come first by descending relevance (ties keep their sorted
        order); posts the augmenter left out follow in their original order.
        """
        hits = [SearchHit(post=post) for post in posts]
        if not posts:
            return hits

        ranked = await self._augmented("rerank", self.augmenter.rerank(query, posts), None)
        if not ranked:
            return hits

        insights_by_id = {}
        try:
            for post, insights in ranked:
                if not isinstance(insights, PostInsights) or not math.isfinite(insights.relevance_score):
                    raise ValueError(f"unusable insights {insights!r}")
                insights_by_id.setdefault(post.post_id, insights)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Search augmenter rerank returned an unusable ranking: {e}")
            return hits

        assessed = [
            SearchHit(post=hit.post, insights=insights_by_id[hit.post.post_id])
            for hit in hits
            if hit.post.post_id in insights_by_id
        ]
        assessed.sort(key=lambda hit: hit.insights.relevance_score, reverse=True)
        unassessed = [hit for hit in hits if hit.post.post_id not in insights_by_id]
        return assessed + unassessed

    # =========================================================================
    # RANKINGS & AGGREGATES
    # =========================================================================

    async def trending(self, limit: Optional[int] = 10) -> List[CommunityPost]:
        posts = sorted(await self.post_repository.list_all(), key=lambda post: post.likes, reverse=True)
        return self._limit(posts, limit)

    async def by_engagement(self, limit: Optional[int] = 10) -> List[CommunityPost]:
        posts = sorted(await self.post_repository.list_all(), key=lambda post: post.engagement, reverse=True)
        return self._limit(posts, limit)

    async def categories(self) -> List[CategoryCount]:
        """Post count per category, most used first."""
        counts = Counter(post.category for post in await self.post_repository.list_all())
        return [CategoryCount(category=name, count=count) for name, count in counts.most_common()]

    async def stats(self) -> CommunityStats:
        posts = await self.post_repository.list_all()
        return CommunityStats(
            total_posts=len(posts),
            total_categories=len({post.category for post in posts}),
            total_likes=sum(post.likes for post in posts),
            total_comments=sum(post.comment_count for post in posts),
        )

    async def insights(self) -> Dict[str, Any]:
        posts = await self.post_repository.list_all()
        result = await self._augmented(
            "community_insights",
            self.augmenter.community_insights(posts),
            DEFAULT_COMMUNITY_INSIGHTS,
        )
        return result if isinstance(result, dict) else copy.deepcopy(DEFAULT_COMMUNITY_INSIGHTS)

    async def trending_topics(self) -> List[Dict[str, Any]]:
        posts = await self.post_repository.list_all()
        result = await self._augmented(
            "trending_topics",
            self.augmenter.trending_topics(posts),
            DEFAULT_TRENDING_TOPICS,
        )
        return result if isinstance(result, list) else copy.deepcopy(DEFAULT_TRENDING_TOPICS)

    async def suggestions(self, query: Optional[str]) -> List[str]:
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Query parameter is required", field="q")
        result = await self._augmented("search_suggestions", self.augmenter.search_suggestions(query.strip()), [])
        return [str(s) for s in result] if isinstance(result, list) else []

    async def seed_sample_posts(self) -> int:
        """Load the starter posts into an empty store; returns how many were added."""
        if await self.post_repository.count() > 0:
            return 0
        samples = build_sample_posts()
        for post in samples:
            await self.post_repository.add(post)
        logger.info(f"Seeded {len(samples)} sample community posts")
        return len(samples)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _augmented(self, operation: str, call: Awaitable[T], fallback: T) -> T:
        """Await an augmenter call within the timeout, returning ``fallback`` on any failure."""
        try:
            return await asyncio.wait_for(call, timeout=self.augmenter_timeout)
        except AugmenterUnavailableError:
            logger.debug(f"Search augmenter not configured; {operation} uses fallback")
        except asyncio.TimeoutError:
            logger.warning(f"Search augmenter {operation} timed out after {self.augmenter_timeout}s")
        except Exception as e:
            logger.warning(f"Search augmenter {operation} failed: {e}")
        return copy.deepcopy(fallback)

    @staticmethod
    def _filter(
        posts: Sequence[CommunityPost],
        category: Optional[str],
        min_likes: Optional[int],
    ) -> List[CommunityPost]:
        result = list(posts)
        if category:
            result = [post for post in result if post.category == category]
        if min_likes is not None:
            result = [post for post in result if post.likes >= min_likes]
        return result

    @staticmethod
    def _sort(posts: List[CommunityPost], sort_by: Optional[str], order: Optional[str]) -> List[CommunityPost]:
        sort_by = sort_by or DEFAULT_SORT_KEY
        order = (order or DEFAULT_SORT_ORDER).lower()
        if sort_by not in SORT_KEYS:
            raise ValidationError(
                f"sortBy must be one of {list(SORT_KEYS)}",
                field="sortBy",
                value=sort_by,
            )
        if order not in SORT_ORDERS:
            raise ValidationError(f"order must be one of {list(SORT_ORDERS)}", field="order", value=order)
        return sorted(posts, key=SORT_KEYS[sort_by], reverse=order == "desc")

    @staticmethod
    def _limit(items: List[T], limit: Optional[int]) -> List[T]:
        if limit is None:
            return items
        if limit < 0:
            raise ValidationError("limit must not be negative", field="limit", value=limit)
        return items[:limit]

    @staticmethod
    def _require_text(value: Any, field: str, message: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(message, field=field)
        return value.strip()

    @staticmethod
    def _clean_tags(tags: Any) -> List[str]:
        if tags is None:
            return []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise ValidationError("Tags must be an array of strings", field="tags")
        return [tag.strip() for tag in tags if tag.strip()]
