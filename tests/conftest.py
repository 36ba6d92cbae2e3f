"""Pytest configuration and shared fixtures."""

import os
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from lounge_curator.models.article import Article, FeedCategory
from lounge_curator.models.relevancy import RelevancyCheckItem


@pytest.fixture(autouse=True)
def set_test_env() -> None:
    """Set test environment variables."""
    os.environ.setdefault("GCP_PROJECT_ID", "test-project")
    os.environ.setdefault("GOOGLE_API_KEY", "test-api-key")
    os.environ.setdefault("FIRESTORE_EMULATOR_HOST", "localhost:8086")


@pytest.fixture
def mock_firestore() -> MagicMock:
    """Mock FirestoreClient (async methods)."""
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.get_many = AsyncMock(return_value={})
    client.set = AsyncMock()
    client.create = AsyncMock(return_value=True)
    client.update = AsyncMock()
    client.query = AsyncMock(return_value=[])
    return client


@pytest.fixture
def mock_gemini() -> MagicMock:
    """Mock GeminiClient."""
    client = MagicMock()
    client.generate_json = AsyncMock(return_value={})
    client.generate_content = AsyncMock(return_value="")
    return client


@pytest.fixture
def make_article():
    """Article 팩토리."""

    def _make(
        title: str,
        link: str | None = None,
        category: FeedCategory = FeedCategory.NEWS,
        priority: int = 1,
        source: str = "TechCrunch",
        published_at: datetime | None = None,
    ) -> Article:
        return Article(
            title=title,
            link=link or f"https://example.com/{abs(hash(title))}",
            published_at=published_at or datetime.now(UTC),
            body_snippet=f"{title} snippet",
            source_name=source,
            source_category=category,
            source_priority=priority,
        )

    return _make


@pytest.fixture
def make_check_item():
    """RelevancyCheckItem 팩토리."""

    def _make(
        content_id: str = "cnt_001",
        lounge_id: str = "lng_saas",
        threshold: int = 60,
        **kwargs,
    ) -> RelevancyCheckItem:
        data = {
            "content_id": content_id,
            "lounge_id": lounge_id,
            "lounge_name": "SaaS",
            "threshold": threshold,
            "content_title": "ARR growth playbook",
            "content_description": "How we grew ARR from $1M to $10M",
            "content_url": "https://x.com/founder/status/1",
            "creator_name": "Founder",
        }
        data.update(kwargs)
        return RelevancyCheckItem(**data)

    return _make
