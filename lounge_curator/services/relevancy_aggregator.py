"""Relevancy aggregator: per-content score merge and tombstoning.

콘텐츠별로 라운지 점수를 합쳐 최고 점수를 저장하고,
모든 라운지에서 임계값 미만일 때만 툼스톤을 기록합니다.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from lounge_curator.models.content import ContentItem
from lounge_curator.models.deleted_content import (
    LOW_RELEVANCY_REASON,
    DeletedContentRecord,
)
from lounge_curator.models.relevancy import RelevancyAssessment
from lounge_curator.repositories.content_repo import ContentRepository
from lounge_curator.repositories.deleted_content_repo import DeletedContentRepository
from lounge_curator.repositories.lounge_repo import LoungeRepository

logger = structlog.get_logger(__name__)


@dataclass
class AggregationSummary:
    """집계/저장 결과 통계."""

    checked: int = 0
    updated: int = 0
    tombstoned: int = 0
    already_tombstoned: int = 0
    errors: int = 0


@dataclass
class ContentScores:
    """콘텐츠 1건의 라운지별 점수."""

    content_id: str
    best_score: int
    best_reason: str
    lounge_scores: dict[str, int] = field(default_factory=dict)


def group_assessments(
    assessments: list[RelevancyAssessment],
) -> dict[str, ContentScores]:
    """content_id 기준으로 평가 결과 그룹화.

    최고 점수의 사유는 그 점수에 처음 도달한 평가의 것을 사용합니다.
    같은 라운지가 여러 번 평가되면 높은 점수를 유지합니다.

    Args:
        assessments: 평가 결과 목록.

    Returns:
        {content_id: ContentScores} (입력 순서 유지).
    """
    grouped: dict[str, ContentScores] = {}

    for assessment in assessments:
        scores = grouped.get(assessment.content_id)
        if scores is None:
            grouped[assessment.content_id] = ContentScores(
                content_id=assessment.content_id,
                best_score=assessment.score,
                best_reason=assessment.reason,
                lounge_scores={assessment.lounge_id: assessment.score},
            )
            continue

        if assessment.score > scores.best_score:
            scores.best_score = assessment.score
            scores.best_reason = assessment.reason
        previous = scores.lounge_scores.get(assessment.lounge_id)
        if previous is None or assessment.score > previous:
            scores.lounge_scores[assessment.lounge_id] = assessment.score

    return grouped


def is_below_all_thresholds(
    lounge_scores: dict[str, int],
    thresholds: dict[str, int],
    default_threshold: int = 60,
) -> bool:
    """모든 라운지에서 임계값 미만인지 확인."""
    return bool(lounge_scores) and all(
        score < thresholds.get(lounge_id, default_threshold)
        for lounge_id, score in lounge_scores.items()
    )


class RelevancyAggregator:
    """관련성 점수 집계 및 저장 서비스."""

    def __init__(
        self,
        content_repo: ContentRepository,
        lounge_repo: LoungeRepository,
        deleted_content_repo: DeletedContentRepository,
        default_threshold: int = 60,
    ) -> None:
        """RelevancyAggregator 초기화.

        Args:
            content_repo: 콘텐츠 리포지토리
            lounge_repo: 라운지 리포지토리
            deleted_content_repo: 툼스톤 리포지토리
            default_threshold: 라운지 레코드가 없을 때의 임계값
        """
        self.content_repo = content_repo
        self.lounge_repo = lounge_repo
        self.deleted_content_repo = deleted_content_repo
        self.default_threshold = default_threshold

    async def aggregate_and_persist(
        self, assessments: list[RelevancyAssessment]
    ) -> AggregationSummary:
        """점수 집계, 저장, 툼스톤 처리.

        점수 저장에 실패한 항목은 툼스톤 판단을 건너뛰고 다음 실행에서 재평가됩니다.
        한 항목의 실패는 다른 항목 처리에 영향을 주지 않습니다.

        Args:
            assessments: 평가 결과 목록

        Returns:
            처리 통계
        """
        grouped = group_assessments(assessments)
        summary = AggregationSummary(checked=len(grouped))
        if not grouped:
            return summary

        lounge_ids = sorted({lid for s in grouped.values() for lid in s.lounge_scores})
        thresholds = await self.lounge_repo.get_thresholds(
            lounge_ids, default=self.default_threshold
        )

        checked_at = datetime.now(UTC)
        candidates: list[ContentScores] = []

        for scores in grouped.values():
            try:
                await self.content_repo.update_relevancy(
                    scores.content_id,
                    score=scores.best_score,
                    reason=scores.best_reason,
                    checked_at=checked_at,
                )
            except Exception as e:
                logger.error(
                    "relevancy_update_failed",
                    content_id=scores.content_id,
                    error=str(e),
                )
                summary.errors += 1
                continue

            summary.updated += 1
            if is_below_all_thresholds(
                scores.lounge_scores, thresholds, self.default_threshold
            ):
                candidates.append(scores)

        if candidates:
            await self._tombstone(candidates, thresholds, summary)

        logger.info(
            "relevancy_aggregated",
            checked=summary.checked,
            updated=summary.updated,
            tombstoned=summary.tombstoned,
            already_tombstoned=summary.already_tombstoned,
            errors=summary.errors,
        )
        return summary

    async def _tombstone(
        self,
        candidates: list[ContentScores],
        thresholds: dict[str, int],
        summary: AggregationSummary,
    ) -> None:
        """툼스톤 후보를 멱등하게 기록."""
        try:
            contents = await self.content_repo.get_many(
                [c.content_id for c in candidates]
            )
        except Exception as e:
            logger.error("tombstone_content_lookup_failed", error=str(e))
            summary.errors += len(candidates)
            return

        for scores in candidates:
            content = contents.get(scores.content_id)
            if content is None:
                logger.warning("tombstone_content_missing", content_id=scores.content_id)
                summary.errors += 1
                continue

            try:
                created = await self.deleted_content_repo.insert_if_absent(
                    self._build_record(content)
                )
            except Exception as e:
                logger.error(
                    "tombstone_insert_failed",
                    content_id=scores.content_id,
                    error=str(e),
                )
                summary.errors += 1
                continue

            if created:
                summary.tombstoned += 1
                logger.info(
                    "content_tombstoned",
                    content_id=scores.content_id,
                    lounge_scores={
                        lid: f"{score}/{thresholds.get(lid, self.default_threshold)}"
                        for lid, score in scores.lounge_scores.items()
                    },
                )
            else:
                summary.already_tombstoned += 1

    def _build_record(self, content: ContentItem) -> DeletedContentRecord:
        return DeletedContentRecord(
            platform_content_id=content.platform_content_id,
            platform=content.platform,
            creator_id=content.creator_id,
            deleted_at=datetime.now(UTC),
            deletion_reason=LOW_RELEVANCY_REASON,
            title=content.title or None,
            url=content.url,
        )
