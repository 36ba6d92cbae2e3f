"""Repository for PromptAdjustment entities.

큐레이터가 승인한 동적 규칙을 조회합니다. 캐시하지 않습니다.
"""

from lounge_curator.models.lounge import PromptAdjustment
from lounge_curator.repositories.base import BaseRepository


class PromptAdjustmentRepository(BaseRepository[PromptAdjustment]):
    """PromptAdjustment 엔티티 Repository.

    Firestore Collection: prompt_adjustments
    """

    collection_name = "prompt_adjustments"
    model_class = PromptAdjustment

    async def find_active_for_lounge(self, lounge_id: str) -> list[PromptAdjustment]:
        """라운지에 적용할 승인+활성 규칙 조회.

        Args:
            lounge_id: 라운지 ID.

        Returns:
            approved and active인 규칙 목록.
        """
        return await self.find_by(
            [
                ("lounge_id", "==", lounge_id),
                ("approved", "==", True),
                ("active", "==", True),
            ]
        )
