"""Relevancy scorer with bounded oracle concurrency.

평가 항목을 5개씩 나눠 서브 배치 안에서는 동시에, 서브 배치끼리는 순차로 평가합니다.
"""

import asyncio

import structlog

from lounge_curator.adapters.gemini_client import GeminiClient
from lounge_curator.agent.domains.processor.tools.scorer_tool import score_item
from lounge_curator.models.relevancy import RelevancyAssessment, RelevancyCheckItem
from lounge_curator.repositories.prompt_adjustment_repo import (
    PromptAdjustmentRepository,
)
from lounge_curator.services.lounge_context import build_context

logger = structlog.get_logger(__name__)

ERROR_REASON = "Error during relevancy check"


class RelevancyScorer:
    """라운지별 콘텐츠 관련성 평가 서비스.

    오라클 호출, 응답 파싱, 동적 규칙 조회 중 어떤 실패도 파이프라인을 막지 않습니다.
    실패한 항목은 중립 점수(50)로 대체됩니다.
    """

    def __init__(
        self,
        gemini_client: GeminiClient,
        adjustment_repo: PromptAdjustmentRepository,
        batch_size: int = 5,
        neutral_score: int = 50,
        model: str | None = None,
    ) -> None:
        """RelevancyScorer 초기화.

        Args:
            gemini_client: Gemini 클라이언트
            adjustment_repo: PromptAdjustment 리포지토리
            batch_size: 동시에 실행할 오라클 호출 수
            neutral_score: 실패 시 사용할 점수
            model: 스코어링 모델
        """
        self.gemini_client = gemini_client
        self.adjustment_repo = adjustment_repo
        self.batch_size = max(1, batch_size)
        self.neutral_score = neutral_score
        self.model = model

    async def score(self, items: list[RelevancyCheckItem]) -> list[RelevancyAssessment]:
        """평가 항목 일괄 스코어링.

        Args:
            items: 평가 항목 목록

        Returns:
            항목 순서와 같은 평가 결과 목록
        """
        assessments: list[RelevancyAssessment] = []

        for start in range(0, len(items), self.batch_size):
            batch = items[start : start + self.batch_size]
            results = await asyncio.gather(*(self.score_one(item) for item in batch))
            assessments.extend(results)

        logger.info(
            "relevancy_scored",
            item_count=len(items),
            failed=sum(1 for a in assessments if a.failed),
        )
        return assessments

    async def score_one(self, item: RelevancyCheckItem) -> RelevancyAssessment:
        """단일 항목 스코어링 (예외를 던지지 않음).

        승인된 동적 규칙은 매 호출마다 새로 조회합니다.
        """
        try:
            adjustments = await self.adjustment_repo.find_active_for_lounge(
                item.lounge_id
            )
            context = build_context(
                item.rules,
                adjustments,
                theme_description=item.theme_description,
                threshold=item.threshold,
            )
            return await score_item(
                item, context, self.gemini_client, model=self.model
            )
        except Exception as e:
            logger.warning(
                "relevancy_check_failed",
                content_id=item.content_id,
                lounge_id=item.lounge_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return RelevancyAssessment(
                content_id=item.content_id,
                lounge_id=item.lounge_id,
                score=self.neutral_score,
                reason=ERROR_REASON,
                failed=True,
            )
