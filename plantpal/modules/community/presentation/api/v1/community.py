# 📄 File: plantpal/modules/community/presentation/api/v1/community.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for the gardeners' forum: reading and writing posts, liking,
# commenting, searching, and seeing what is popular.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router over CommunityService. Reads accept an optional bearer token;
# writes require one; edits and deletes are limited to the post's author.
# Augmenter-backed routes always answer, falling back to defaults.
#
# 🔗 Dependencies:
# - FastAPI router
# - plantpal.shared.core.dependencies
# - community request/response schemas
#
# 🔄 Connected Modules / Calls From:
# - plantpal.api.router (mounted under /api/community)

"""
Community API Endpoints

Reads:
- GET /posts, GET /posts/{id}
- GET /search, /suggestions
- GET /trending, /trending/topics, /engagement
- GET /categories, /insights, /stats

Writes (authenticated):
- POST /posts, PUT/DELETE /posts/{id}
- POST /posts/{id}/like, POST /posts/{id}/comment
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from plantpal.modules.user_management.domain.models.user import User
from plantpal.shared.core.dependencies import get_container, get_current_user, get_optional_user

from ....domain.models.post import CATEGORY_CATALOG
from ....domain.services.community_service import DEFAULT_SEARCH_LIMIT, CommunityService
from ..schemas.community_schemas import (
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

logger = logging.getLogger(__name__)

community_router = APIRouter()

DEFAULT_LIST_LIMIT = 20
DEFAULT_RANKING_LIMIT = 10


def get_community_service(request: Request) -> CommunityService:
    return get_container(request).community_service


def _post_list(posts) -> PostListResponse:
    return PostListResponse(posts=[PostResponse.from_domain(p) for p in posts], total=len(posts))


# =============================================================================
# POSTS
# =============================================================================

@community_router.get("/posts", response_model=PostListResponse, summary="List posts")
async def list_posts(
    category: Optional[str] = Query(None),
    min_likes: Optional[int] = Query(None, alias="minLikes"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: str = Query("desc"),
    limit: int = Query(DEFAULT_LIST_LIMIT),
    current_user: Optional[User] = Depends(get_optional_user),
    community_service: CommunityService = Depends(get_community_service),
) -> PostListResponse:
    posts = await community_service.list(
        category=category,
        min_likes=min_likes,
        sort_by=sort_by,
        order=order,
        limit=limit,
    )
    return _post_list(posts)


@community_router.post(
    "/posts",
    response_model=PostMessageEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={400: {"description": "Title and content are required"}},
)
async def create_post(
    payload: PostCreateRequest,
    current_user: User = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> PostMessageEnvelope:
    post = await community_service.create(
        author_id=current_user.user_id,
        author_name=current_user.username,
        title=payload.title,
        content=payload.content,
        tags=payload.tags,
        category=payload.category,
    )
    return PostMessageEnvelope(message="Post created successfully", post=PostResponse.from_domain(post))


@community_router.get("/posts/{post_id}", response_model=PostEnvelope, summary="Get a post")
async def get_post(
    post_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    community_service: CommunityService = Depends(get_community_service),
) -> PostEnvelope:
    post = await community_service.get(post_id)
    return PostEnvelope(post=PostResponse.from_domain(post))


@community_router.put(
    "/posts/{post_id}",
    response_model=PostMessageEnvelope,
    summary="Update own post",
    responses={403: {"description": "Not the author"}, 404: {"description": "Post not found"}},
)
async def update_post(
    post_id: str,
    payload: PostUpdateRequest,
    current_user: User = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> PostMessageEnvelope:
    post = await community_service.update(post_id, current_user.user_id, payload.model_dump(exclude_unset=True))
    return PostMessageEnvelope(message="Post updated successfully", post=PostResponse.from_domain(post))


@community_router.delete(
    "/posts/{post_id}",
    response_model=PostMessageEnvelope,
    summary="Delete own post",
    responses={403: {"description": "Not the author"}, 404: {"description": "Post not found"}},
)
async def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> PostMessageEnvelope:
    post = await community_service.delete(post_id, current_user.user_id)
    return PostMessageEnvelope(message="Post deleted successfully", post=PostResponse.from_domain(post))


@community_router.post("/posts/{post_id}/like", response_model=LikeResponse, summary="Like a post")
async def like_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> LikeResponse:
    post = await community_service.like(post_id)
    logger.debug(f"User {current_user.user_id} liked post {post_id}")
    return LikeResponse(likes=post.likes)


@community_router.post(
    "/posts/{post_id}/comment",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={400: {"description": "Comment content is required"}, 404: {"description": "Post not found"}},
)
async def add_comment(
    post_id: str,
    payload: CommentCreateRequest,
    current_user: User = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> CommentEnvelope:
    comment = await community_service.add_comment(
        post_id,
        author_id=current_user.user_id,
        author_name=current_user.username,
        content=payload.content,
    )
    return CommentEnvelope(comment=CommentResponse.from_domain(comment))


# =============================================================================
# SEARCH & DISCOVERY
# =============================================================================

@community_router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search posts",
    responses={400: {"description": "Search query is required"}},
)
async def search_posts(
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    min_likes: Optional[int] = Query(None, alias="minLikes"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: str = Query("desc"),
    limit: int = Query(DEFAULT_SEARCH_LIMIT),
    current_user: Optional[User] = Depends(get_optional_user),
    community_service: CommunityService = Depends(get_community_service),
) -> SearchResponse:
    outcome = await community_service.search(
        q,
        category=category,
        min_likes=min_likes,
        sort_by=sort_by,
        order=order,
        limit=limit,
    )
    return SearchResponse(
        query=outcome.query,
        results=[SearchHitResponse.from_hit(hit) for hit in outcome.results],
        suggestions=outcome.suggestions,
        total=outcome.total,
    )


@community_router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Search suggestions",
    responses={400: {"description": "Query parameter is required"}},
)
async def search_suggestions(
    q: Optional[str] = Query(None),
    community_service: CommunityService = Depends(get_community_service),
) -> SuggestionsResponse:
    suggestions = await community_service.suggestions(q)
    return SuggestionsResponse(query=q.strip(), suggestions=suggestions)


@community_router.get("/trending", response_model=PostListResponse, summary="Most liked posts")
async def trending_posts(
    limit: int = Query(DEFAULT_RANKING_LIMIT),
    community_service: CommunityService = Depends(get_community_service),
) -> PostListResponse:
    return _post_list(await community_service.trending(limit))


@community_router.get("/trending/topics", response_model=TrendingTopicsResponse, summary="Trending topics")
async def trending_topics(
    community_service: CommunityService = Depends(get_community_service),
) -> TrendingTopicsResponse:
    return TrendingTopicsResponse(trending_topics=await community_service.trending_topics())


@community_router.get("/engagement", response_model=PostListResponse, summary="Posts by likes plus comments")
async def posts_by_engagement(
    limit: int = Query(DEFAULT_RANKING_LIMIT),
    community_service: CommunityService = Depends(get_community_service),
) -> PostListResponse:
    return _post_list(await community_service.by_engagement(limit))


@community_router.get("/categories", response_model=CategoriesResponse, summary="Category counts and catalog")
async def categories(
    community_service: CommunityService = Depends(get_community_service),
) -> CategoriesResponse:
    counts = await community_service.categories()
    return CategoriesResponse(
        categories=[CategoryCountResponse.from_domain(item) for item in counts],
        available_categories=CATEGORY_CATALOG,
    )


@community_router.get("/insights", response_model=InsightsResponse, summary="Community insights")
async def community_insights(
    community_service: CommunityService = Depends(get_community_service),
) -> InsightsResponse:
    return InsightsResponse(insights=await community_service.insights())


@community_router.get("/stats", response_model=StatsEnvelope, summary="Community statistics")
async def community_stats(
    community_service: CommunityService = Depends(get_community_service),
) -> StatsEnvelope:
    stats = await community_service.stats()
    return StatsEnvelope(stats=CommunityStatsResponse.from_domain(stats))
