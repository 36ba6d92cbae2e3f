"""Tests for DigestRepository."""

from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest

from lounge_curator.models.digest import DigestResult, GenerationMode
from lounge_curator.repositories.digest_repo import DigestRepository


class TestDigestRepository:
    """Tests for DigestRepository."""

    @pytest.fixture
    def repo(self, mock_firestore: MagicMock) -> DigestRepository:
        return DigestRepository(mock_firestore)

    @pytest.fixture
    def result(self) -> DigestResult:
        return DigestResult(
            topic="SaaS",
            generated_at=datetime(2026, 3, 5, 23, 30, tzinfo=UTC),
            generation_mode=GenerationMode.CURATED,
        )

    @pytest.mark.asyncio
    async def test_upsert_for_date_uses_daily_key(
        self, repo: DigestRepository, result: DigestResult, mock_firestore: MagicMock
    ) -> None:
        """생성 시각 UTC 날짜 기준 키."""
        stored = await repo.upsert_for_date("lng_saas", result)

        assert stored.id == "lng_saas:2026-03-05"
        collection, doc_id, data = mock_firestore.set.call_args.args
        assert (collection, doc_id) == ("digests", "lng_saas:2026-03-05")
        assert data["result"]["generation_mode"] == "curated"
        assert data["digest_date"] == datetime(2026, 3, 5)

    @pytest.mark.asyncio
    async def test_upsert_explicit_date(
        self, repo: DigestRepository, result: DigestResult
    ) -> None:
        stored = await repo.upsert_for_date("lng_saas", result, digest_date=date(2026, 3, 6))

        assert stored.id == "lng_saas:2026-03-06"
