"""Digest models for generated daily news digests.

라운지별 일일 다이제스트 결과와 저장 이력을 정의합니다.
저장 이력은 {lounge_id}:{YYYY-MM-DD} 키로 하루 1건만 유지됩니다.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from lounge_curator.models.article import FeedSource

DEFAULT_SPECIAL_SECTION_TITLE = "Funding & M&A"


class GenerationMode(str, Enum):
    """다이제스트 생성 경로."""

    CURATED = "curated"  # 피드 기사 기반 큐레이션
    PURE = "pure"  # 기사 없이 오라클 단독 생성


def generate_digest_key(lounge_id: str, digest_date: date) -> str:
    """다이제스트 멱등성 키 생성.

    Format: {lounge_id}:{YYYY-MM-DD}
    """
    return f"{lounge_id}:{digest_date.isoformat()}"


class NewsItem(BaseModel):
    """다이제스트 목록 항목 (bullet / special section)."""

    text: str
    summary: str = ""
    source: str = "Unknown"
    source_url: str
    amount: str | None = None
    series: str | None = None


class BigStory(BaseModel):
    """다이제스트 최상단 주요 기사."""

    title: str
    summary: str = ""
    source: str = "Unknown"
    source_url: str


class DigestResult(BaseModel):
    """다이제스트 생성 결과.

    섹션 간 같은 URL이 중복되지 않아야 합니다 (curator_tool에서 보장).
    """

    big_story: BigStory | None = None
    bullets: list[NewsItem] = Field(default_factory=list)
    special_section: list[NewsItem] | None = None
    special_section_title: str | None = None
    topic: str
    generated_at: datetime
    generation_mode: GenerationMode = GenerationMode.CURATED


class LoungeDigestConfig(BaseModel):
    """라운지 다이제스트 생성 요청."""

    lounge_id: str
    topic: str = Field(..., description="다이제스트 주제 (예: SaaS)")
    max_bullets: int = Field(5, ge=1, le=20)
    max_special_section: int = Field(5, ge=0, le=20)
    feeds: list[FeedSource] | None = Field(
        None, description="라운지 전용 피드 (없으면 기본 피드)"
    )
    special_section_title: str = DEFAULT_SPECIAL_SECTION_TITLE


class StoredDigest(BaseModel):
    """저장된 일일 다이제스트.

    Firestore Collection: digests
    """

    id: str = Field(..., description="{lounge_id}:{YYYY-MM-DD}")
    lounge_id: str
    digest_date: date
    result: DigestResult
    stored_at: datetime

    @model_validator(mode="after")
    def validate_digest_key(self) -> "StoredDigest":
        """id 검증: generate_digest_key(lounge_id, digest_date)와 같아야 함."""
        if self.id != generate_digest_key(self.lounge_id, self.digest_date):
            raise ValueError("id must be '{lounge_id}:{YYYY-MM-DD}' for this digest")
        return self
