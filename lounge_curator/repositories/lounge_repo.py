"""Repository for Lounge entities."""

from lounge_curator.models.lounge import Lounge
from lounge_curator.repositories.base import BaseRepository


class LoungeRepository(BaseRepository[Lounge]):
    """Lounge 엔티티 Repository.

    Firestore Collection: lounges
    """

    collection_name = "lounges"
    model_class = Lounge

    async def get_thresholds(
        self, lounge_ids: list[str], default: int = 60
    ) -> dict[str, int]:
        """라운지별 실제 임계값을 한 번에 조회.

        Args:
            lounge_ids: 라운지 ID 목록.
            default: 라운지 레코드가 없을 때 사용할 임계값.

        Returns:
            {lounge_id: threshold} dict (요청한 모든 ID 포함).
        """
        lounges = await self.get_many(lounge_ids)
        return {
            lounge_id: (
                lounges[lounge_id].effective_threshold
                if lounge_id in lounges
                else default
            )
            for lounge_id in lounge_ids
        }
