"""Curation orchestrator for daily lounge digests.

피드 수집 → 중복 제거 → 분류 → 우선순위 → 큐레이션(+펀딩 검색) 흐름을 관리하고,
기사가 부족하거나 어느 단계든 실패하면 순수 생성으로 폴백합니다.
"""

import asyncio
from datetime import date

import structlog

from lounge_curator.adapters.gemini_client import GeminiClient
from lounge_curator.agent.domains.processor.tools.curator_tool import (
    curate_from_articles,
    generate_pure_digest,
    remove_cross_section_duplicates,
)
from lounge_curator.agent.domains.processor.tools.funding_search_tool import (
    FundingSearchResult,
    search_funding_news,
)
from lounge_curator.models.digest import DigestResult, LoungeDigestConfig, StoredDigest
from lounge_curator.repositories.digest_repo import DigestRepository
from lounge_curator.services.article_deduplicator import ArticleDeduplicator
from lounge_curator.services.article_ingestor import ArticleIngestor
from lounge_curator.services.article_prioritizer import ArticlePrioritizer

logger = structlog.get_logger(__name__)


class InsufficientArticlesError(Exception):
    """피드에서 기사를 하나도 얻지 못함."""


class CurationOrchestrator:
    """다이제스트 생성 상태 머신.

    Start → Fetch → Curate → Merge, 실패 시 PureGeneration.
    순수 생성까지 실패하면 예외가 호출자에게 전달되며 부분 다이제스트는 만들지 않습니다.
    """

    def __init__(
        self,
        ingestor: ArticleIngestor,
        deduplicator: ArticleDeduplicator,
        prioritizer: ArticlePrioritizer,
        gemini_client: GeminiClient,
        digest_repo: DigestRepository | None = None,
        use_feeds: bool = True,
        fallback_to_generation: bool = True,
        min_articles: int = 10,
        max_articles: int = 50,
        dedicated_funding_search: bool = True,
        funding_timeframe: str = "48h",
        funding_section_title: str = "SaaS Funding & M&A",
        curation_model: str | None = None,
    ) -> None:
        """CurationOrchestrator 초기화.

        Args:
            ingestor: 기사 수집기
            deduplicator: 중복 제거/분류기
            prioritizer: 기사 선택기
            gemini_client: Gemini 클라이언트
            digest_repo: 다이제스트 리포지토리 (generate_and_store에 필요)
            use_feeds: 피드 기반 큐레이션 사용 여부
            fallback_to_generation: 순수 생성 폴백 허용 여부
            min_articles: 큐레이션에 필요한 최소 기사 수
            max_articles: 오라클에 전달할 최대 기사 수
            dedicated_funding_search: 펀딩 전용 검색 사용 여부
            funding_timeframe: 펀딩 검색 기간
            funding_section_title: 펀딩 검색 결과 사용 시 섹션 제목
            curation_model: 큐레이션/생성에 사용할 모델
        """
        self.ingestor = ingestor
        self.deduplicator = deduplicator
        self.prioritizer = prioritizer
        self.gemini_client = gemini_client
        self.digest_repo = digest_repo
        self.use_feeds = use_feeds
        self.fallback_to_generation = fallback_to_generation
        self.min_articles = min_articles
        self.max_articles = max_articles
        self.dedicated_funding_search = dedicated_funding_search
        self.funding_timeframe = funding_timeframe
        self.funding_section_title = funding_section_title
        self.curation_model = curation_model

    async def generate_digest(self, config: LoungeDigestConfig) -> DigestResult:
        """라운지 다이제스트 생성.

        Args:
            config: 라운지 다이제스트 설정

        Returns:
            검증된 다이제스트

        Raises:
            Exception: 폴백이 꺼져 있거나 순수 생성까지 실패한 경우
        """
        log = logger.bind(lounge_id=config.lounge_id, topic=config.topic)

        if not self.use_feeds:
            log.info("curation_feeds_disabled")
            return await self._generate_pure(config)

        try:
            result = await self._generate_from_feeds(config)
        except Exception as e:
            if not self.fallback_to_generation:
                log.error("curation_failed", error=str(e))
                raise
            log.warning(
                "curation_fallback",
                reason="error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return await self._generate_pure(config)

        if result is None:
            return await self._generate_pure(config)

        log.info(
            "digest_generated",
            generation_mode=result.generation_mode.value,
            bullets=len(result.bullets),
            special_section=len(result.special_section or []),
        )
        return result

    async def generate_and_store(
        self,
        config: LoungeDigestConfig,
        digest_date: date | None = None,
    ) -> StoredDigest:
        """다이제스트 생성 후 날짜별로 저장 (같은 날 재생성 시 교체).

        Args:
            config: 라운지 다이제스트 설정
            digest_date: 다이제스트 날짜 (기본: 생성 시각 기준)

        Returns:
            저장된 다이제스트
        """
        if self.digest_repo is None:
            raise RuntimeError("digest_repo is required to store digests")

        result = await self.generate_digest(config)
        stored = await self.digest_repo.upsert_for_date(
            config.lounge_id, result, digest_date=digest_date
        )
        logger.info("digest_stored", digest_id=stored.id)
        return stored

    async def _generate_from_feeds(
        self, config: LoungeDigestConfig
    ) -> DigestResult | None:
        """피드 기반 큐레이션.

        Returns:
            큐레이션 결과. 기사가 부족해 순수 생성으로 넘어가야 하면 None.

        Raises:
            InsufficientArticlesError: 기사가 하나도 없음
        """
        articles = await self.ingestor.fetch_all(config.feeds)
        if not articles:
            raise InsufficientArticlesError("No feed articles fetched")

        deduped = self.deduplicator.dedup(articles)
        if len(deduped) < self.min_articles:
            if self.fallback_to_generation:
                logger.info(
                    "curation_fallback",
                    reason="insufficient_articles",
                    article_count=len(deduped),
                    min_required=self.min_articles,
                )
                return None
            logger.info(
                "curation_continuing_with_few_articles",
                article_count=len(deduped),
                min_required=self.min_articles,
            )

        categorized = self.deduplicator.categorize(deduped)
        prioritized = self.prioritizer.prioritize(
            deduped, categorized, self.max_articles
        )

        curated, funding = await asyncio.gather(
            curate_from_articles(
                prioritized,
                config,
                self.gemini_client,
                model=self.curation_model,
            ),
            self._search_funding(config),
        )
        return self._merge(curated, funding)

    async def _search_funding(
        self, config: LoungeDigestConfig
    ) -> FundingSearchResult | None:
        if not self.dedicated_funding_search or config.max_special_section == 0:
            return None
        return await search_funding_news(
            self.gemini_client,
            topic=config.topic,
            max_results=config.max_special_section,
            timeframe=self.funding_timeframe,
        )

    def _merge(
        self, curated: DigestResult, funding: FundingSearchResult | None
    ) -> DigestResult:
        """펀딩 검색 결과가 있으면 special section을 교체."""
        if funding is None or not funding.items:
            return curated

        logger.info("funding_section_replaced", funding_items=funding.total_found)
        merged = curated.model_copy(
            update={
                "special_section": funding.items,
                "special_section_title": self.funding_section_title,
            }
        )
        return remove_cross_section_duplicates(merged)

    async def _generate_pure(self, config: LoungeDigestConfig) -> DigestResult:
        """기사 없이 생성 (실패 시 예외 전파)."""
        result = await generate_pure_digest(
            config, self.gemini_client, model=self.curation_model
        )
        logger.info(
            "digest_generated",
            lounge_id=config.lounge_id,
            generation_mode=result.generation_mode.value,
            bullets=len(result.bullets),
            special_section=len(result.special_section or []),
        )
        return result
