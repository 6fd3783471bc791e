# 📄 File: plantpal/modules/community/domain/services/sample_posts.py
# 🧭 Purpose (Layman Explanation):
# A few starter posts so a fresh community page is not empty
# 🧪 Purpose (Technical Summary):
# Seed CommunityPost fixtures loaded at startup when SEED_SAMPLE_POSTS is on
# and the post store is empty
# 🔗 Dependencies:
# Community domain models
# 🔄 Connected Modules / Calls From:
# community_service.seed_sample_posts, plantpal.shared.infrastructure.container

from datetime import datetime, timezone
from typing import List

from ..models.post import CommunityPost


def build_sample_posts() -> List[CommunityPost]:
    return [
        CommunityPost(
            author_id="sample-user-1",
            author_name="PlantLover123",
            title="Best organic fertilizers for tomatoes",
            content="I've been using fish emulsion and seaweed extract for my tomatoes. The results are amazing!",
            tags=["tomatoes", "fertilizer", "organic"],
            category="gardening-tips",
            likes=15,
            created_at=datetime(2024, 1, 13, 9, 20, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 13, 9, 20, tzinfo=timezone.utc),
        ),
        CommunityPost(
            author_id="sample-user-2",
            author_name="GardenExpert",
            title="Natural pest control methods",
            content="Try neem oil and companion planting. Marigolds work great as natural pest repellents.",
            tags=["pest-control", "natural", "companion-planting"],
            category="pest-control",
            likes=23,
            created_at=datetime(2024, 1, 14, 15, 45, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 14, 15, 45, tzinfo=timezone.utc),
        ),
        CommunityPost(
            author_id="sample-user-3",
            author_name="UrbanFarmer",
            title="Vertical gardening tips for small spaces",
            content="Use trellises and hanging planters. You can grow a lot in a small balcony!",
            tags=["vertical-gardening", "small-space", "urban"],
            category="urban-gardening",
            likes=31,
            created_at=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        ),
    ]
