"""Relevancy scoring models.

라운지별 관련성 평가 입력(RelevancyCheckItem)과 결과(RelevancyAssessment).
둘 다 한 번의 실행 동안만 존재하며 저장되지 않습니다.
"""

from pydantic import BaseModel, Field

from lounge_curator.models.content import ReferencedContent, ReferenceType
from lounge_curator.models.lounge import LoungeRules


class RelevancyCheckItem(BaseModel):
    """(콘텐츠, 라운지) 평가 단위.

    라운지 규칙/테마는 배치 조회 시점의 스냅샷입니다.
    승인된 PromptAdjustment는 평가 시점에 새로 조회합니다.
    """

    content_id: str
    lounge_id: str
    lounge_name: str
    theme_description: str = ""
    rules: LoungeRules = Field(default_factory=LoungeRules)
    threshold: int = Field(60, ge=0, le=100, description="라운지 실제 임계값")
    content_title: str = ""
    content_description: str | None = None
    content_url: str
    creator_name: str
    reference_type: ReferenceType | None = None
    referenced_content: ReferencedContent | None = None


class RelevancyAssessment(BaseModel):
    """오라클 평가 결과 (콘텐츠 x 라운지 1건)."""

    content_id: str
    lounge_id: str
    score: int = Field(..., ge=0, le=100)
    reason: str
    failed: bool = Field(False, description="중립 점수 폴백 여부")
