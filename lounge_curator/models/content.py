"""Content model for creator-owned content items.

외부 수집 프로세스가 생성한 콘텐츠. 이 코어는 관련성 필드만 갱신합니다.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ReferenceType(str, Enum):
    """인용/리트윗/답글 관계."""

    QUOTE = "quote"
    RETWEET = "retweet"
    REPLY = "reply"


class ReferencedContent(BaseModel):
    """참조 대상 콘텐츠 (인용된 트윗 등)."""

    text: str | None = None
    description: str | None = None
    author_username: str | None = None

    @property
    def body(self) -> str:
        return self.text or self.description or ""


class ContentItem(BaseModel):
    """크리에이터 콘텐츠.

    Firestore Collection: contents
    """

    id: str = Field(..., description="고유 ID")
    platform_content_id: str = Field(..., description="플랫폼 원본 ID")
    platform: str = Field(..., description="플랫폼 (twitter, linkedin, youtube, rss...)")
    creator_id: str = Field(..., description="크리에이터 참조")

    title: str = Field("", description="제목")
    description: str | None = Field(None, description="본문/설명")
    url: str = Field(..., description="원문 URL")

    # 인용/리트윗/답글
    reference_type: ReferenceType | None = None
    referenced_content: ReferencedContent | None = None

    # 관련성 (이 코어만 갱신)
    relevancy_score: int | None = Field(None, ge=0, le=100)
    relevancy_reason: str | None = None
    relevancy_checked_at: datetime | None = None

    created_at: datetime = Field(..., description="수집 시간")
