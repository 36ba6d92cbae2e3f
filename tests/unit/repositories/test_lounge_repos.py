"""Tests for lounge, membership and prompt adjustment repositories."""

from unittest.mock import MagicMock

import pytest

from lounge_curator.repositories.lounge_repo import LoungeRepository
from lounge_curator.repositories.membership_repo import MembershipRepository
from lounge_curator.repositories.prompt_adjustment_repo import (
    PromptAdjustmentRepository,
)


class TestLoungeRepository:
    """Tests for LoungeRepository."""

    @pytest.mark.asyncio
    async def test_get_thresholds(self, mock_firestore: MagicMock) -> None:
        """라운지별 실제 임계값, 없는 라운지는 기본값."""
        mock_firestore.get_many.return_value = {
            "lng_a": {"id": "lng_a", "name": "A", "relevancy_threshold": 70},
            "lng_b": {
                "id": "lng_b",
                "name": "B",
                "rules": {"default_threshold": 45},
            },
        }
        repo = LoungeRepository(mock_firestore)

        result = await repo.get_thresholds(["lng_a", "lng_b", "lng_gone"], default=60)

        assert result == {"lng_a": 70, "lng_b": 45, "lng_gone": 60}


class TestMembershipRepository:
    """Tests for MembershipRepository."""

    @pytest.mark.asyncio
    async def test_find_by_creator(self, mock_firestore: MagicMock) -> None:
        mock_firestore.query.return_value = [
            {"id": "m_1", "creator_id": "crt_1", "lounge_id": "lng_a"},
            {"id": "m_2", "creator_id": "crt_1", "lounge_id": "lng_b"},
        ]
        repo = MembershipRepository(mock_firestore)

        result = await repo.find_by_creator("crt_1")

        assert [m.lounge_id for m in result] == ["lng_a", "lng_b"]
        assert mock_firestore.query.call_args.args[:2] == (
            "creator_lounges",
            [("creator_id", "==", "crt_1")],
        )


class TestPromptAdjustmentRepository:
    """Tests for PromptAdjustmentRepository."""

    @pytest.mark.asyncio
    async def test_find_active_for_lounge(self, mock_firestore: MagicMock) -> None:
        """승인 + 활성 필터."""
        repo = PromptAdjustmentRepository(mock_firestore)

        await repo.find_active_for_lounge("lng_saas")

        filters = mock_firestore.query.call_args.args[1]
        assert ("lounge_id", "==", "lng_saas") in filters
        assert ("approved", "==", True) in filters
        assert ("active", "==", True) in filters
