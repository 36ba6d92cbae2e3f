"""Relevancy pipeline: fetch batch → score → aggregate and persist.

스케줄러가 주기적으로 호출하며, 어떤 경우에도 예외 대신 처리 통계를 반환합니다.
"""

import asyncio
from dataclasses import dataclass

import structlog

from lounge_curator.models.content import ContentItem
from lounge_curator.models.lounge import CreatorLoungeMembership, Lounge
from lounge_curator.models.relevancy import RelevancyCheckItem
from lounge_curator.repositories.content_repo import ContentRepository
from lounge_curator.repositories.creator_repo import CreatorRepository
from lounge_curator.repositories.lounge_repo import LoungeRepository
from lounge_curator.repositories.membership_repo import MembershipRepository
from lounge_curator.services.relevancy_aggregator import RelevancyAggregator
from lounge_curator.services.relevancy_scorer import RelevancyScorer

logger = structlog.get_logger(__name__)

UNKNOWN_CREATOR = "Unknown"


@dataclass
class RelevancyRunResult:
    """관련성 평가 1회 실행 결과."""

    processed: int = 0
    errors: int = 0
    tombstoned: int = 0


class RelevancyPipeline:
    """관련성 평가 파이프라인."""

    def __init__(
        self,
        content_repo: ContentRepository,
        membership_repo: MembershipRepository,
        lounge_repo: LoungeRepository,
        creator_repo: CreatorRepository,
        scorer: RelevancyScorer,
        aggregator: RelevancyAggregator,
        lookback_days: int = 7,
    ) -> None:
        """RelevancyPipeline 초기화.

        Args:
            content_repo: 콘텐츠 리포지토리
            membership_repo: 크리에이터-라운지 소속 리포지토리
            lounge_repo: 라운지 리포지토리
            creator_repo: 크리에이터 리포지토리
            scorer: 관련성 스코어러
            aggregator: 관련성 집계기
            lookback_days: 미평가 콘텐츠 조회 기간 (일)
        """
        self.content_repo = content_repo
        self.membership_repo = membership_repo
        self.lounge_repo = lounge_repo
        self.creator_repo = creator_repo
        self.scorer = scorer
        self.aggregator = aggregator
        self.lookback_days = lookback_days

    async def fetch_batch(self, limit: int = 100) -> list[RelevancyCheckItem]:
        """미평가 콘텐츠를 (콘텐츠, 라운지) 평가 항목으로 펼침.

        한 콘텐츠의 라운지는 모두 같은 배치에 들어가야 툼스톤 판단이 정확하므로,
        콘텐츠 단위로 잘라 limit을 넘기기 전에 멈춥니다.
        단, 첫 콘텐츠는 limit보다 라운지가 많아도 포함합니다.
        소속 라운지가 없는 콘텐츠는 평가 완료로 표시해 이후 조회 범위를 막지 않게 합니다.

        Args:
            limit: 최대 평가 항목 수

        Returns:
            평가 항목 목록 (최신 콘텐츠 우선)
        """
        contents = await self.content_repo.find_unchecked(
            lookback_days=self.lookback_days, limit=limit
        )
        if not contents:
            return []

        creator_ids = list(dict.fromkeys(c.creator_id for c in contents))
        membership_lists = await asyncio.gather(
            *(self.membership_repo.find_by_creator(cid) for cid in creator_ids)
        )
        memberships: dict[str, list[CreatorLoungeMembership]] = dict(
            zip(creator_ids, membership_lists, strict=True)
        )

        lounge_ids = [m.lounge_id for ms in membership_lists for m in ms]
        lounges = await self.lounge_repo.get_many(lounge_ids)
        creators = await self.creator_repo.get_many(creator_ids)

        items: list[RelevancyCheckItem] = []
        without_lounges: list[str] = []
        for content in contents:
            lounge_ids_for_content = [
                m.lounge_id
                for m in memberships.get(content.creator_id, [])
                if m.lounge_id in lounges
            ]
            if not lounge_ids_for_content:
                without_lounges.append(content.id)
                continue
            if items and len(items) + len(lounge_ids_for_content) > limit:
                break

            creator = creators.get(content.creator_id)
            creator_name = creator.display_name if creator else UNKNOWN_CREATOR
            for lounge_id in dict.fromkeys(lounge_ids_for_content):
                items.append(
                    self._build_item(content, lounges[lounge_id], creator_name)
                )

        await self._mark_without_lounges(without_lounges)

        logger.info(
            "relevancy_batch_fetched",
            content_count=len(contents),
            item_count=len(items),
            skipped_without_lounges=len(without_lounges),
        )
        return items

    async def _mark_without_lounges(self, content_ids: list[str]) -> None:
        """라운지가 없는 콘텐츠를 평가 완료로 표시해 다음 조회에서 제외."""
        for content_id in content_ids:
            try:
                await self.content_repo.mark_checked(content_id)
            except Exception as e:
                logger.warning(
                    "content_mark_checked_failed",
                    content_id=content_id,
                    error=str(e),
                )

    async def process(self, limit: int = 100) -> RelevancyRunResult:
        """관련성 평가 1회 실행.

        Args:
            limit: 최대 평가 항목 수

        Returns:
            처리 통계 (예외를 던지지 않음)
        """
        try:
            items = await self.fetch_batch(limit)
            if not items:
                logger.info("relevancy_nothing_to_process")
                return RelevancyRunResult()

            assessments = await self.scorer.score(items)
            summary = await self.aggregator.aggregate_and_persist(assessments)
        except Exception as e:
            logger.error(
                "relevancy_run_failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return RelevancyRunResult(processed=0, errors=1)

        oracle_failures = sum(1 for a in assessments if a.failed)
        result = RelevancyRunResult(
            processed=len(assessments),
            errors=summary.errors + oracle_failures,
            tombstoned=summary.tombstoned,
        )
        logger.info(
            "relevancy_run_completed",
            processed=result.processed,
            errors=result.errors,
            tombstoned=result.tombstoned,
        )
        return result

    def _build_item(
        self, content: ContentItem, lounge: Lounge, creator_name: str
    ) -> RelevancyCheckItem:
        return RelevancyCheckItem(
            content_id=content.id,
            lounge_id=lounge.id,
            lounge_name=lounge.name,
            theme_description=lounge.theme_description,
            rules=lounge.rules,
            threshold=lounge.effective_threshold,
            content_title=content.title,
            content_description=content.description,
            content_url=content.url,
            creator_name=creator_name,
            reference_type=content.reference_type,
            referenced_content=content.referenced_content,
        )
