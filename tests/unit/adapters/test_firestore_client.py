"""Tests for Firestore client."""

from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.api_core.exceptions import AlreadyExists

from lounge_curator.adapters.firestore_client import FirestoreClient


def _snapshot(doc_id: str, data: dict[str, Any] | None) -> MagicMock:
    return MagicMock(id=doc_id, exists=data is not None, to_dict=lambda: data)


async def _stream(docs: list[MagicMock]) -> AsyncIterator[MagicMock]:
    for doc in docs:
        yield doc


class TestFirestoreClient:
    """Test FirestoreClient class."""

    @pytest.fixture
    def mock_db(self) -> MagicMock:
        """Mock firestore.AsyncClient."""
        db = MagicMock()
        doc_ref = db.collection.return_value.document.return_value
        doc_ref.get = AsyncMock(return_value=_snapshot("doc_id", {"field": "value"}))
        doc_ref.set = AsyncMock()
        doc_ref.update = AsyncMock()
        doc_ref.create = AsyncMock()
        return db

    @pytest.fixture
    def client(self, mock_db: MagicMock) -> FirestoreClient:
        with patch("lounge_curator.adapters.firestore_client.firestore") as mock_fs:
            mock_fs.AsyncClient.return_value = mock_db
            return FirestoreClient(project_id="test-project")

    @pytest.mark.asyncio
    async def test_get_document_exists(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """문서가 있으면 id를 포함한 데이터 반환."""
        result = await client.get("lounges", "doc_id")

        assert result == {"id": "doc_id", "field": "value"}
        mock_db.collection.assert_called_with("lounges")

    @pytest.mark.asyncio
    async def test_get_document_not_exists(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """문서가 없으면 None."""
        mock_db.collection.return_value.document.return_value.get.return_value = (
            _snapshot("doc_id", None)
        )

        assert await client.get("lounges", "doc_id") is None

    @pytest.mark.asyncio
    async def test_get_many_skips_missing(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """없는 문서는 결과에서 제외."""
        mock_db.get_all = MagicMock(
            return_value=_stream(
                [_snapshot("a", {"name": "A"}), _snapshot("b", None)]
            )
        )

        result = await client.get_many("lounges", ["a", "b"])

        assert result == {"a": {"id": "a", "name": "A"}}

    @pytest.mark.asyncio
    async def test_get_many_empty(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """빈 ID 목록은 조회하지 않음."""
        assert await client.get_many("lounges", []) == {}
        mock_db.get_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_set_document(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """set은 문서를 생성하거나 교체."""
        await client.set("digests", "doc_id", {"name": "test"})

        mock_db.collection.return_value.document.return_value.set.assert_awaited_once_with(
            {"name": "test"}
        )

    @pytest.mark.asyncio
    async def test_create_new_document(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """새 문서 생성 시 True."""
        assert await client.create("deleted_content", "doc_id", {"a": 1}) is True

    @pytest.mark.asyncio
    async def test_create_existing_document(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """이미 있으면 False (덮어쓰지 않음)."""
        mock_db.collection.return_value.document.return_value.create.side_effect = (
            AlreadyExists("exists")
        )

        assert await client.create("deleted_content", "doc_id", {"a": 1}) is False

    @pytest.mark.asyncio
    async def test_update_document(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """update는 지정 필드만 갱신."""
        await client.update("contents", "doc_id", {"relevancy_score": 75})

        mock_db.collection.return_value.document.return_value.update.assert_awaited_once_with(
            {"relevancy_score": 75}
        )

    @pytest.mark.asyncio
    async def test_query_with_order_and_limit(
        self, client: FirestoreClient, mock_db: MagicMock
    ) -> None:
        """필터, 정렬, limit 적용."""
        query = MagicMock()
        query.where.return_value = query
        query.order_by.return_value = query
        query.limit.return_value = query
        query.stream = MagicMock(
            return_value=_stream([_snapshot("cnt_1", {"title": "T"})])
        )
        mock_db.collection.return_value = query

        result = await client.query(
            "contents",
            [("relevancy_checked_at", "==", None)],
            order_by="created_at",
            descending=True,
            limit=10,
        )

        assert result == [{"id": "cnt_1", "title": "T"}]
        query.where.assert_called_once()
        query.order_by.assert_called_once()
        query.limit.assert_called_once_with(10)
