"""Business logic services."""

from lounge_curator.services.article_deduplicator import ArticleDeduplicator
from lounge_curator.services.article_ingestor import ArticleIngestor, FeedFetchResult
from lounge_curator.services.article_prioritizer import ArticlePrioritizer
from lounge_curator.services.curation_orchestrator import (
    CurationOrchestrator,
    InsufficientArticlesError,
)
from lounge_curator.services.lounge_context import LoungeContext, build_context
from lounge_curator.services.relevancy_aggregator import (
    AggregationSummary,
    RelevancyAggregator,
)
from lounge_curator.services.relevancy_pipeline import (
    RelevancyPipeline,
    RelevancyRunResult,
)
from lounge_curator.services.relevancy_scorer import RelevancyScorer

__all__ = [
    "AggregationSummary",
    "ArticleDeduplicator",
    "ArticleIngestor",
    "ArticlePrioritizer",
    "CurationOrchestrator",
    "FeedFetchResult",
    "InsufficientArticlesError",
    "LoungeContext",
    "RelevancyAggregator",
    "RelevancyPipeline",
    "RelevancyRunResult",
    "RelevancyScorer",
    "build_context",
]
