"""Repository for creator-lounge memberships."""

from lounge_curator.models.lounge import CreatorLoungeMembership
from lounge_curator.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[CreatorLoungeMembership]):
    """CreatorLoungeMembership Repository.

    Firestore Collection: creator_lounges
    """

    collection_name = "creator_lounges"
    model_class = CreatorLoungeMembership

    async def find_by_creator(self, creator_id: str) -> list[CreatorLoungeMembership]:
        """크리에이터의 라운지 소속 조회.

        Args:
            creator_id: 크리에이터 ID.

        Returns:
            소속 목록.
        """
        return await self.find_by([("creator_id", "==", creator_id)])
