"""Repository for StoredDigest entities.

Firestore digests 컬렉션에 대한 데이터 접근 레이어.
"""

from datetime import UTC, date, datetime

from lounge_curator.models.digest import DigestResult, StoredDigest, generate_digest_key
from lounge_curator.repositories.base import BaseRepository


class DigestRepository(BaseRepository[StoredDigest]):
    """StoredDigest 엔티티 Repository.

    Firestore Collection: digests
    """

    collection_name = "digests"
    model_class = StoredDigest

    async def upsert_for_date(
        self,
        lounge_id: str,
        result: DigestResult,
        digest_date: date | None = None,
    ) -> StoredDigest:
        """날짜별 다이제스트 저장 (같은 날 재생성 시 교체).

        Args:
            lounge_id: 라운지 ID.
            result: 생성된 다이제스트.
            digest_date: 다이제스트 날짜 (기본: 생성 시각의 UTC 날짜).

        Returns:
            저장된 다이제스트.
        """
        digest_date = digest_date or result.generated_at.astimezone(UTC).date()
        stored = StoredDigest(
            id=generate_digest_key(lounge_id, digest_date),
            lounge_id=lounge_id,
            digest_date=digest_date,
            result=result,
            stored_at=datetime.now(UTC),
        )
        await self.create(stored)
        return stored
