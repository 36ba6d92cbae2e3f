"""Tombstone model for soft-deleted content.

관련성 미달 콘텐츠는 물리 삭제하지 않고 deleted_content에 기록합니다.
자연 키 (platform_content_id, platform, creator_id)가 곧 문서 ID입니다.
"""

import hashlib
from datetime import datetime

from pydantic import BaseModel, Field

LOW_RELEVANCY_REASON = "low_relevancy"


def generate_tombstone_key(
    platform_content_id: str, platform: str, creator_id: str
) -> str:
    """툼스톤 멱등성 키 생성.

    Format: {platform}:{sha256(platform|creator_id|platform_content_id)[:24]}

    Firestore 문서 ID에 '/'를 쓸 수 없으므로 원본 ID는 해시합니다.
    """
    raw = f"{platform}|{creator_id}|{platform_content_id}"
    digest = hashlib.sha256(raw.encode()).hexdigest()[:24]
    return f"{platform}:{digest}"


class DeletedContentRecord(BaseModel):
    """삭제(툼스톤) 기록.

    Firestore Collection: deleted_content
    """

    platform_content_id: str
    platform: str
    creator_id: str
    deleted_at: datetime
    deletion_reason: str = Field(LOW_RELEVANCY_REASON, description="삭제 사유")
    title: str | None = None
    url: str | None = None

    @property
    def id(self) -> str:
        return generate_tombstone_key(
            self.platform_content_id, self.platform, self.creator_id
        )
