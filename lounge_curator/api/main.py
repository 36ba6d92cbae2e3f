"""FastAPI application with lifespan management.

lifespan이 composition root입니다: 클라이언트와 서비스를 한 번 생성해 app.state에 둡니다.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from lounge_curator.adapters.firestore_client import FirestoreClient
from lounge_curator.adapters.gemini_client import GeminiClient
from lounge_curator.api.scheduler import router as scheduler_router
from lounge_curator.config.logging import configure_logging, get_logger
from lounge_curator.config.settings import Settings, get_settings
from lounge_curator.repositories import (
    ContentRepository,
    CreatorRepository,
    DeletedContentRepository,
    DigestRepository,
    LoungeRepository,
    MembershipRepository,
    PromptAdjustmentRepository,
)
from lounge_curator.services import (
    ArticleDeduplicator,
    ArticleIngestor,
    ArticlePrioritizer,
    CurationOrchestrator,
    RelevancyAggregator,
    RelevancyPipeline,
    RelevancyScorer,
)


def build_relevancy_pipeline(
    settings: Settings,
    firestore: FirestoreClient,
    gemini: GeminiClient,
) -> RelevancyPipeline:
    """관련성 파이프라인 조립."""
    content_repo = ContentRepository(firestore)
    lounge_repo = LoungeRepository(firestore)

    scorer = RelevancyScorer(
        gemini_client=gemini,
        adjustment_repo=PromptAdjustmentRepository(firestore),
        batch_size=settings.RELEVANCY_BATCH_SIZE,
        neutral_score=settings.RELEVANCY_NEUTRAL_SCORE,
    )
    aggregator = RelevancyAggregator(
        content_repo=content_repo,
        lounge_repo=lounge_repo,
        deleted_content_repo=DeletedContentRepository(firestore),
        default_threshold=settings.RELEVANCY_DEFAULT_THRESHOLD,
    )
    return RelevancyPipeline(
        content_repo=content_repo,
        membership_repo=MembershipRepository(firestore),
        lounge_repo=lounge_repo,
        creator_repo=CreatorRepository(firestore),
        scorer=scorer,
        aggregator=aggregator,
        lookback_days=settings.RELEVANCY_LOOKBACK_DAYS,
    )


def build_curation_orchestrator(
    settings: Settings,
    firestore: FirestoreClient,
    gemini: GeminiClient,
    http_client: httpx.AsyncClient | None = None,
) -> CurationOrchestrator:
    """다이제스트 오케스트레이터 조립."""
    ingestor = ArticleIngestor(
        timeout_seconds=settings.FEED_TIMEOUT_SECONDS,
        user_agent=settings.FEED_USER_AGENT,
        preferred_window_hours=settings.FEED_PREFERRED_WINDOW_HOURS,
        fallback_window_hours=settings.FEED_FALLBACK_WINDOW_HOURS,
        min_recent_articles=settings.FEED_MIN_RECENT_ARTICLES,
        snippet_length=settings.FEED_SNIPPET_LENGTH,
        http_client=http_client,
    )
    return CurationOrchestrator(
        ingestor=ingestor,
        deduplicator=ArticleDeduplicator(),
        prioritizer=ArticlePrioritizer(),
        gemini_client=gemini,
        digest_repo=DigestRepository(firestore),
        use_feeds=settings.CURATION_USE_FEEDS,
        fallback_to_generation=settings.CURATION_FALLBACK_TO_GENERATION,
        min_articles=settings.CURATION_MIN_ARTICLES,
        max_articles=settings.CURATION_MAX_ARTICLES,
        dedicated_funding_search=settings.CURATION_DEDICATED_FUNDING_SEARCH,
        funding_timeframe=settings.FUNDING_SEARCH_TIMEFRAME,
        funding_section_title=settings.FUNDING_SECTION_TITLE,
        curation_model=settings.GEMINI_CURATION_MODEL,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Initializes resources on startup and cleans up on shutdown.
    """
    # Startup
    settings = get_settings()
    configure_logging(json_logs=settings.LOG_JSON)
    logger = get_logger()

    logger.info(
        "Starting application",
        project_id=settings.GCP_PROJECT_ID,
        is_local=settings.is_local,
    )

    firestore = FirestoreClient(project_id=settings.GCP_PROJECT_ID)
    gemini = GeminiClient(api_key=settings.GOOGLE_API_KEY, model=settings.GEMINI_MODEL)
    http_client = httpx.AsyncClient(
        timeout=settings.FEED_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.FEED_USER_AGENT},
    )

    app.state.firestore = firestore
    app.state.gemini = gemini
    app.state.http_client = http_client
    app.state.lounge_repo = LoungeRepository(firestore)
    app.state.relevancy_pipeline = build_relevancy_pipeline(settings, firestore, gemini)
    app.state.curation_orchestrator = build_curation_orchestrator(
        settings, firestore, gemini, http_client=http_client
    )

    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await http_client.aclose()


app = FastAPI(
    title="Lounge Curator",
    description="라운지 콘텐츠 관련성 평가 및 일일 뉴스 다이제스트 큐레이션",
    version="0.1.0",
    lifespan=lifespan,
)

# Register routers
app.include_router(scheduler_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy"}
