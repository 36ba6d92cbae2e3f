"""Lounge models: themed communities, memberships and rule adjustments.

라운지 규칙(keep/borderline/filter)은 코드 분기가 아니라 라운지 레코드의 데이터입니다.
"""

from enum import Enum

from pydantic import BaseModel, Field


class AdjustmentType(str, Enum):
    """규칙 조정 카테고리."""

    KEEP = "keep"
    FILTER = "filter"
    BORDERLINE = "borderline"


class LoungeRules(BaseModel):
    """라운지 기본 규칙 세트."""

    keep: list[str] = Field(default_factory=list, description="유지 대상 주제")
    borderline: list[str] = Field(default_factory=list, description="경계 주제")
    filter: list[str] = Field(default_factory=list, description="제외 대상 주제")
    default_threshold: int = Field(
        60, ge=0, le=100, description="relevancy_threshold 미지정 시 기준점"
    )


class Lounge(BaseModel):
    """테마 커뮤니티.

    Firestore Collection: lounges
    """

    id: str
    name: str
    theme_description: str = ""
    relevancy_threshold: int | None = Field(None, ge=0, le=100)
    rules: LoungeRules = Field(default_factory=LoungeRules)

    @property
    def effective_threshold(self) -> int:
        """실제 적용 임계값."""
        if self.relevancy_threshold is not None:
            return self.relevancy_threshold
        return self.rules.default_threshold

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "lng_saas",
                "name": "SaaS",
                "theme_description": "Software-as-a-Service businesses and tooling",
                "relevancy_threshold": 60,
                "rules": {
                    "keep": ["SaaS metrics (MRR, ARR, churn)", "AI tools"],
                    "borderline": ["Generic startup advice"],
                    "filter": ["Celebrity/entertainment content"],
                    "default_threshold": 60,
                },
            }
        }
    }


class Creator(BaseModel):
    """크리에이터.

    Firestore Collection: creators
    """

    id: str
    display_name: str


class CreatorLoungeMembership(BaseModel):
    """크리에이터-라운지 소속 관계.

    Firestore Collection: creator_lounges
    """

    creator_id: str
    lounge_id: str


class PromptAdjustment(BaseModel):
    """큐레이터가 승인한 동적 규칙.

    Firestore Collection: prompt_adjustments
    """

    id: str
    lounge_id: str
    adjustment_type: AdjustmentType
    adjustment_text: str
    approved: bool = False
    active: bool = False
