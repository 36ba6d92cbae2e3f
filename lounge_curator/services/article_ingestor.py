"""Article ingestor for external news feeds.

모든 피드를 동시에 수집하고 최신성 기준으로 필터링합니다.
피드 하나의 실패는 전체 수집을 중단시키지 않습니다.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import httpx
import structlog

from lounge_curator.agent.domains.collector.tools.rss_tool import (
    FeedFetchError,
    fetch_feed,
)
from lounge_curator.models.article import DEFAULT_FEEDS, Article, FeedSource

logger = structlog.get_logger(__name__)


@dataclass
class FeedFetchResult:
    """피드 1개의 수집 결과."""

    source: FeedSource
    articles: list[Article] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ArticleIngestor:
    """외부 피드 기사 수집기."""

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        user_agent: str = "LoungeCurator/1.0 (News Aggregator)",
        preferred_window_hours: int = 24,
        fallback_window_hours: int = 48,
        min_recent_articles: int = 10,
        snippet_length: int = 200,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """ArticleIngestor 초기화.

        Args:
            timeout_seconds: 피드별 HTTP 타임아웃.
            user_agent: 요청 User-Agent.
            preferred_window_hours: 우선 최신성 윈도우.
            fallback_window_hours: 확장 최신성 윈도우.
            min_recent_articles: 우선 윈도우 최소 기사 수.
            snippet_length: 스니펫 목표 길이.
            http_client: 외부에서 주입할 httpx 클라이언트 (없으면 호출마다 생성).
        """
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.preferred_window = timedelta(hours=preferred_window_hours)
        self.fallback_window = timedelta(hours=fallback_window_hours)
        self.min_recent_articles = min_recent_articles
        self.snippet_length = snippet_length
        self._http_client = http_client

    async def fetch_sources(
        self, feeds: list[FeedSource] | None = None
    ) -> list[FeedFetchResult]:
        """모든 피드를 동시에 수집.

        Args:
            feeds: 수집할 피드 목록 (기본: DEFAULT_FEEDS).

        Returns:
            피드별 수집 결과 (입력 순서 유지).
        """
        feeds = feeds if feeds is not None else DEFAULT_FEEDS
        logger.info("feed_fetch_started", feed_count=len(feeds))

        if self._http_client is not None:
            return await self._gather(self._http_client, feeds)

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            headers={"User-Agent": self.user_agent},
        ) as client:
            return await self._gather(client, feeds)

    async def fetch_all(self, feeds: list[FeedSource] | None = None) -> list[Article]:
        """모든 피드 수집 후 최신 기사만 반환 (최신순).

        Args:
            feeds: 수집할 피드 목록 (기본: DEFAULT_FEEDS).

        Returns:
            최신성 필터를 통과한 기사 목록.
        """
        results = await self.fetch_sources(feeds)
        articles = [a for result in results for a in result.articles]

        logger.info(
            "feed_fetch_completed",
            total_articles=len(articles),
            failed_sources=[r.source.name for r in results if not r.ok],
        )
        return self.filter_recent(articles)

    def filter_recent(
        self, articles: list[Article], now: datetime | None = None
    ) -> list[Article]:
        """2단계 최신성 필터.

        우선 윈도우(24h) 기사 수가 최소 기준 미만이면 확장 윈도우(48h)를 사용합니다.

        Args:
            articles: 필터링할 기사 목록.
            now: 기준 시각 (기본: 현재).

        Returns:
            최신순으로 정렬된 기사 목록.
        """
        now = now or datetime.now(UTC)

        recent = [a for a in articles if a.published_at > now - self.preferred_window]
        if len(recent) < self.min_recent_articles:
            logger.info(
                "recency_window_expanded",
                preferred_count=len(recent),
                min_required=self.min_recent_articles,
            )
            recent = [
                a for a in articles if a.published_at > now - self.fallback_window
            ]

        recent.sort(key=lambda a: a.published_at, reverse=True)
        return recent

    async def _gather(
        self, client: httpx.AsyncClient, feeds: list[FeedSource]
    ) -> list[FeedFetchResult]:
        return list(
            await asyncio.gather(*(self._fetch_one(client, feed) for feed in feeds))
        )

    async def _fetch_one(
        self, client: httpx.AsyncClient, source: FeedSource
    ) -> FeedFetchResult:
        """피드 1개 수집 (실패 시 빈 결과)."""
        try:
            articles = await fetch_feed(client, source, self.snippet_length)
        except FeedFetchError as e:
            logger.warning("feed_fetch_failed", source=source.name, error=e.message)
            return FeedFetchResult(source=source, error=e.message)
        except Exception as e:
            logger.error(
                "feed_fetch_failed",
                source=source.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return FeedFetchResult(source=source, error=str(e))

        logger.debug("feed_fetched", source=source.name, article_count=len(articles))
        return FeedFetchResult(source=source, articles=articles)
