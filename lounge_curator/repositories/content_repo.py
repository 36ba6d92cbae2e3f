"""Repository for ContentItem entities.

Firestore contents 컬렉션에 대한 데이터 접근 레이어.
관련성 필드(relevancy_score/reason/checked_at) 외에는 수정하지 않습니다.
"""

from datetime import UTC, datetime, timedelta

from lounge_curator.adapters.firestore_client import FirestoreClient
from lounge_curator.models.content import ContentItem
from lounge_curator.repositories.base import BaseRepository


class ContentRepository(BaseRepository[ContentItem]):
    """ContentItem 엔티티 Repository.

    Firestore Collection: contents
    """

    collection_name = "contents"
    model_class = ContentItem

    def __init__(self, firestore_client: FirestoreClient) -> None:
        """Initialize ContentRepository.

        Args:
            firestore_client: Firestore 클라이언트 인스턴스.
        """
        super().__init__(firestore_client)

    async def find_unchecked(
        self, lookback_days: int = 7, limit: int = 100
    ) -> list[ContentItem]:
        """관련성 미평가 콘텐츠 조회 (최신순).

        Args:
            lookback_days: 조회 기간 (일).
            limit: 최대 조회 수.

        Returns:
            relevancy_checked_at이 비어 있는 최근 콘텐츠 목록.
        """
        cutoff = datetime.now(UTC) - timedelta(days=lookback_days)
        return await self.find_by(
            [
                ("relevancy_checked_at", "==", None),
                ("created_at", ">=", cutoff),
            ],
            order_by="created_at",
            descending=True,
            limit=limit,
        )

    async def update_relevancy(
        self,
        content_id: str,
        score: int,
        reason: str,
        checked_at: datetime | None = None,
    ) -> None:
        """관련성 점수 갱신.

        Args:
            content_id: 콘텐츠 ID.
            score: 최고 점수.
            reason: 최고 점수의 사유.
            checked_at: 평가 시각 (기본: 현재).
        """
        await self._db.update(
            self.collection_name,
            content_id,
            {
                "relevancy_score": score,
                "relevancy_reason": reason,
                "relevancy_checked_at": checked_at or datetime.now(UTC),
            },
        )

    async def mark_checked(
        self, content_id: str, checked_at: datetime | None = None
    ) -> None:
        """점수 없이 평가 완료 시각만 기록 (평가 대상 라운지가 없는 콘텐츠).

        Args:
            content_id: 콘텐츠 ID.
            checked_at: 평가 시각 (기본: 현재).
        """
        await self._db.update(
            self.collection_name,
            content_id,
            {"relevancy_checked_at": checked_at or datetime.now(UTC)},
        )
