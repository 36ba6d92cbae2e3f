"""Repository for tombstones (soft-deleted content).

Firestore deleted_content 컬렉션. 문서 ID가 자연 키이므로
같은 콘텐츠에 대한 툼스톤은 최대 1건만 존재합니다.
"""

import structlog

from lounge_curator.models.deleted_content import DeletedContentRecord
from lounge_curator.repositories.base import BaseRepository

logger = structlog.get_logger(__name__)


class DeletedContentRepository(BaseRepository[DeletedContentRecord]):
    """DeletedContentRecord Repository.

    Firestore Collection: deleted_content
    """

    collection_name = "deleted_content"
    model_class = DeletedContentRecord

    async def exists_for(self, record: DeletedContentRecord) -> bool:
        """같은 자연 키의 툼스톤 존재 여부.

        Args:
            record: 확인할 툼스톤.

        Returns:
            이미 존재하면 True.
        """
        return await self.exists(record.id)

    async def insert_if_absent(self, record: DeletedContentRecord) -> bool:
        """툼스톤을 멱등하게 삽입.

        기존 툼스톤은 덮어쓰지 않습니다 (최초 삭제 사유 유지).
        동시 실행으로 존재 확인 이후 생성된 경우에도 create()가 거부합니다.

        Args:
            record: 삽입할 툼스톤.

        Returns:
            새로 삽입했으면 True, 이미 있었으면 False.
        """
        if await self.exists_for(record):
            return False

        created = await self._db.create(
            self.collection_name, record.id, self._model_to_dict(record)
        )
        if not created:
            logger.info("tombstone_race_skipped", tombstone_id=record.id)
        return created
