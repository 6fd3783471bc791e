"""
Shared fixtures for the PlantPal test suite.

The environment is prepared before any plantpal module is imported because
``plantpal.main`` builds its module-level application from the environment.
"""

import io
import os
import tempfile

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-plantpal")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_SAMPLE_POSTS", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "plantpal-test-uploads"))
os.environ.pop("OPENAI_API_KEY", None)

from typing import Any, Dict, List, Optional, Sequence, Tuple  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402

from plantpal.main import create_application  # noqa: E402
from plantpal.modules.community.domain.models.post import CommunityPost, PostInsights  # noqa: E402
from plantpal.modules.community.domain.services.augmenter import SearchAugmenter  # noqa: E402
from plantpal.modules.diagnosis.domain.models.classification import (  # noqa: E402
    ClassificationResult,
    Prediction,
)
from plantpal.modules.diagnosis.domain.services.classifier import DiseaseClassifier  # noqa: E402
from plantpal.shared.config.settings import Settings  # noqa: E402
from plantpal.shared.core.exceptions import AugmenterError  # noqa: E402

TEST_SECRET = "test-secret-key-for-plantpal"


def make_settings(**overrides) -> Settings:
    values: Dict[str, Any] = {
        "JWT_SECRET_KEY": TEST_SECRET,
        "ENVIRONMENT": "test",
        "BCRYPT_ROUNDS": 4,
        "STORAGE_BACKEND": "memory",
        "RATE_LIMIT_ENABLED": False,
        "SEED_SAMPLE_POSTS": False,
        "OPENAI_API_KEY": None,
        "LOG_LEVEL": "WARNING",
        "FRONTEND_URL": "http://frontend.test",
    }
    values.update(overrides)
    return Settings(**values)


def png_bytes(size: Tuple[int, int] = (8, 8), color: str = "green") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()


# =============================================================================
# COLLABORATOR DOUBLES
# =============================================================================

class FakeAugmenter(SearchAugmenter):
    """
    Scriptable augmenter.

    ``relevance`` maps post titles to relevance scores for ``rerank``; set
    ``fail`` to make every call raise like a broken upstream service.
    """

    def __init__(
        self,
        relevance: Optional[Dict[str, float]] = None,
        tags: Optional[List[str]] = None,
        category: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        fail: bool = False,
    ):
        self.relevance = relevance or {}
        self.tags = tags or []
        self.category = category
        self.suggestions = suggestions or []
        self.fail = fail
        self.calls: List[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise AugmenterError(f"{name} unavailable")

    async def rerank(self, query: str, posts: Sequence[CommunityPost]) -> List[Tuple[CommunityPost, PostInsights]]:
        self._record("rerank")
        return [
            (post, PostInsights(relevance_score=self.relevance[post.title]))
            for post in posts
            if post.title in self.relevance
        ]

    async def suggest_tags(self, title: str, content: str) -> List[str]:
        self._record("suggest_tags")
        return list(self.tags)

    async def suggest_category(self, title: str, content: str) -> str:
        self._record("suggest_category")
        if self.category is None:
            raise AugmenterError("no category")
        return self.category

    async def search_suggestions(self, query: str) -> List[str]:
        self._record("search_suggestions")
        return list(self.suggestions)

    async def community_insights(self, posts: Sequence[CommunityPost]) -> Dict[str, Any]:
        self._record("community_insights")
        return {"popular_topics": ["basil"], "post_count": len(posts)}

    async def trending_topics(self, posts: Sequence[CommunityPost]) -> List[Dict[str, Any]]:
        self._record("trending_topics")
        return [{"topic": "Basil", "description": "Herbs", "engagement_score": 0.9}]


class FixedClassifier(DiseaseClassifier):
    """Classifier returning a fixed distribution; optionally raising instead."""

    def __init__(self, scores: Optional[Dict[str, float]] = None, error: Optional[Exception] = None):
        self.scores = scores or {"healthy": 0.1, "early_blight": 0.85, "late_blight": 0.05}
        self.error = error
        self.seen: List[bytes] = []

    @property
    def labels(self) -> List[str]:
        return list(self.scores)

    async def classify(self, image_bytes: bytes) -> ClassificationResult:
        self.seen.append(image_bytes)
        if self.error is not None:
            raise self.error
        return ClassificationResult.from_distribution(
            [Prediction(disease=label, confidence=score) for label, score in self.scores.items()]
        )


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(upload_dir) -> Settings:
    return make_settings(UPLOAD_DIR=str(upload_dir))


@pytest.fixture
def augmenter() -> FakeAugmenter:
    return FakeAugmenter()


@pytest.fixture
def classifier() -> FixedClassifier:
    return FixedClassifier()


@pytest.fixture
def app(settings, augmenter, classifier):
    return create_application(settings, augmenter=augmenter, classifier=classifier)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, username: str = "gardener", email: Optional[str] = None, password: str = "secret123"):
    email = email or f"{username}@example.com"
    return client.post("/api/auth/register", json={"username": username, "email": email, "password": password})


def auth_headers(client: TestClient, username: str = "gardener") -> Dict[str, str]:
    response = register(client, username)
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
