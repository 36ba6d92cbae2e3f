"""Tests for BaseRepository."""

from datetime import UTC, date, datetime
from enum import Enum
from unittest.mock import MagicMock

import pytest

from lounge_curator.models.lounge import Lounge
from lounge_curator.repositories.base import BaseRepository


class LoungeTestRepository(BaseRepository[Lounge]):
    collection_name = "lounges"
    model_class = Lounge


class Color(Enum):
    RED = "red"


class TestBaseRepository:
    """Tests for BaseRepository."""

    @pytest.fixture
    def repo(self, mock_firestore: MagicMock) -> LoungeTestRepository:
        return LoungeTestRepository(mock_firestore)

    @pytest.mark.asyncio
    async def test_get_by_id_found(
        self, repo: LoungeTestRepository, mock_firestore: MagicMock
    ) -> None:
        """문서를 모델로 변환."""
        mock_firestore.get.return_value = {"id": "lng_saas", "name": "SaaS"}

        lounge = await repo.get_by_id("lng_saas")

        assert lounge is not None
        assert lounge.name == "SaaS"
        mock_firestore.get.assert_awaited_once_with("lounges", "lng_saas")

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, repo: LoungeTestRepository) -> None:
        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_get_many_dedups_ids(
        self, repo: LoungeTestRepository, mock_firestore: MagicMock
    ) -> None:
        """중복 ID는 한 번만 조회."""
        mock_firestore.get_many.return_value = {
            "lng_a": {"id": "lng_a", "name": "A"},
        }

        result = await repo.get_many(["lng_a", "lng_b", "lng_a"])

        mock_firestore.get_many.assert_awaited_once_with("lounges", ["lng_a", "lng_b"])
        assert list(result) == ["lng_a"]

    @pytest.mark.asyncio
    async def test_create_uses_model_id(
        self, repo: LoungeTestRepository, mock_firestore: MagicMock
    ) -> None:
        """model.id를 문서 ID로 저장."""
        await repo.create(Lounge(id="lng_saas", name="SaaS"))

        collection, doc_id, data = mock_firestore.set.call_args.args
        assert (collection, doc_id) == ("lounges", "lng_saas")
        assert data["name"] == "SaaS"

    @pytest.mark.asyncio
    async def test_find_by_passes_options(
        self, repo: LoungeTestRepository, mock_firestore: MagicMock
    ) -> None:
        mock_firestore.query.return_value = [{"id": "lng_a", "name": "A"}]

        result = await repo.find_by(
            [("name", "==", "A")], order_by="name", descending=True, limit=5
        )

        assert [lounge.id for lounge in result] == ["lng_a"]
        mock_firestore.query.assert_awaited_once_with(
            "lounges",
            [("name", "==", "A")],
            order_by="name",
            descending=True,
            limit=5,
        )

    @pytest.mark.asyncio
    async def test_exists(
        self, repo: LoungeTestRepository, mock_firestore: MagicMock
    ) -> None:
        mock_firestore.get.return_value = {"id": "lng_a", "name": "A"}

        assert await repo.exists("lng_a") is True

    def test_serialize_for_firestore(self, repo: LoungeTestRepository) -> None:
        """Enum, date, 중첩 구조 직렬화."""
        data = {
            "color": Color.RED,
            "day": date(2026, 3, 5),
            "when": datetime(2026, 3, 5, 9, tzinfo=UTC),
            "items": [Color.RED, {"nested": date(2026, 1, 1)}],
        }

        result = repo._serialize_for_firestore(data)

        assert result["color"] == "red"
        assert result["day"] == datetime(2026, 3, 5)
        assert result["when"] == datetime(2026, 3, 5, 9, tzinfo=UTC)
        assert result["items"] == ["red", {"nested": datetime(2026, 1, 1)}]
