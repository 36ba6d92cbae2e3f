"""Domain models for Lounge Curator.

This module exports all Pydantic models used across the application.
"""

from lounge_curator.models.article import (
    DEFAULT_FEEDS,
    Article,
    ArticleCategory,
    CategorizedArticles,
    FeedCategory,
    FeedSource,
    normalize_url,
)
from lounge_curator.models.content import ContentItem, ReferencedContent, ReferenceType
from lounge_curator.models.deleted_content import (
    LOW_RELEVANCY_REASON,
    DeletedContentRecord,
    generate_tombstone_key,
)
from lounge_curator.models.digest import (
    BigStory,
    DigestResult,
    GenerationMode,
    LoungeDigestConfig,
    NewsItem,
    StoredDigest,
    generate_digest_key,
)
from lounge_curator.models.lounge import (
    AdjustmentType,
    Creator,
    CreatorLoungeMembership,
    Lounge,
    LoungeRules,
    PromptAdjustment,
)
from lounge_curator.models.relevancy import RelevancyAssessment, RelevancyCheckItem

__all__ = [
    "DEFAULT_FEEDS",
    "LOW_RELEVANCY_REASON",
    "AdjustmentType",
    "Article",
    "ArticleCategory",
    "BigStory",
    "CategorizedArticles",
    "ContentItem",
    "Creator",
    "CreatorLoungeMembership",
    "DeletedContentRecord",
    "DigestResult",
    "FeedCategory",
    "FeedSource",
    "GenerationMode",
    "Lounge",
    "LoungeDigestConfig",
    "LoungeRules",
    "NewsItem",
    "PromptAdjustment",
    "ReferenceType",
    "ReferencedContent",
    "RelevancyAssessment",
    "RelevancyCheckItem",
    "StoredDigest",
    "generate_digest_key",
    "generate_tombstone_key",
    "normalize_url",
]
