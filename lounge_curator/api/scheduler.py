"""Scheduler endpoints for Cloud Scheduler triggers.

Cloud Scheduler에 의해 호출되는 내부 엔드포인트입니다.
/internal/* 경로는 Cloud Run IAM + OIDC 토큰으로 보호됩니다.
"""

from dataclasses import asdict
from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from lounge_curator.config.logging import bind_run_context
from lounge_curator.config.settings import get_settings
from lounge_curator.models.digest import LoungeDigestConfig
from lounge_curator.repositories.lounge_repo import LoungeRepository
from lounge_curator.services.curation_orchestrator import CurationOrchestrator
from lounge_curator.services.relevancy_pipeline import RelevancyPipeline

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/internal", tags=["scheduler"])


def get_relevancy_pipeline(request: Request) -> RelevancyPipeline:
    """lifespan에서 조립한 RelevancyPipeline 반환."""
    return request.app.state.relevancy_pipeline


def get_curation_orchestrator(request: Request) -> CurationOrchestrator:
    """lifespan에서 조립한 CurationOrchestrator 반환."""
    return request.app.state.curation_orchestrator


def get_lounge_repo(request: Request) -> LoungeRepository:
    return request.app.state.lounge_repo


@router.post("/score-relevancy")
async def score_relevancy(
    request: Request,
    limit: int | None = Query(None, ge=1, le=1000),
) -> dict[str, Any]:
    """관련성 평가 트리거.

    Cloud Scheduler에서 주기적으로 호출됩니다.
    최근 7일 내 미평가 콘텐츠를 라운지별로 평가하고 점수/툼스톤을 기록합니다.

    Args:
        limit: 최대 평가 항목 수 (기본: RELEVANCY_BATCH_LIMIT)

    Returns:
        처리 결과 통계 (processed, errors, tombstoned)
    """
    try:
        settings = get_settings()
        run_id = bind_run_context("relevancy")
        pipeline = get_relevancy_pipeline(request)

        result = await pipeline.process(limit or settings.RELEVANCY_BATCH_LIMIT)

        logger.info(
            "relevancy_trigger_completed",
            run_id=run_id,
            processed=result.processed,
            errors=result.errors,
            tombstoned=result.tombstoned,
        )

        return {
            "status": "success",
            "result": asdict(result),
        }
    except Exception as e:
        logger.error("relevancy_trigger_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail={"status": "error", "error": str(e)},
        ) from e


@router.post("/generate-digest/{lounge_id}")
async def generate_digest(
    request: Request,
    lounge_id: str,
    max_bullets: int = Query(5, ge=1, le=20),
    max_special_section: int = Query(5, ge=0, le=20),
) -> dict[str, Any]:
    """라운지 일일 다이제스트 생성 트리거.

    같은 날 다시 호출하면 그날의 다이제스트를 교체합니다.

    Args:
        lounge_id: 라운지 ID
        max_bullets: 최대 bullet 수
        max_special_section: 최대 special section 항목 수

    Returns:
        저장된 다이제스트
    """
    lounge = await get_lounge_repo(request).get_by_id(lounge_id)
    if lounge is None:
        raise HTTPException(
            status_code=404,
            detail={"status": "error", "error": f"Lounge not found: {lounge_id}"},
        )

    try:
        settings = get_settings()
        bind_run_context("digest", lounge_id=lounge_id)
        orchestrator = get_curation_orchestrator(request)

        config = LoungeDigestConfig(
            lounge_id=lounge.id,
            topic=lounge.name,
            max_bullets=max_bullets,
            max_special_section=max_special_section,
            special_section_title=settings.FUNDING_SECTION_TITLE,
        )
        stored = await orchestrator.generate_and_store(config)

        return {
            "status": "success",
            "result": stored.model_dump(mode="json"),
        }
    except Exception as e:
        logger.error("digest_generation_failed", lounge_id=lounge_id, error=str(e))
        raise HTTPException(
            status_code=500,
            detail={"status": "error", "error": str(e)},
        ) from e
