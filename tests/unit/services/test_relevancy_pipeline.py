"""Tests for RelevancyPipeline."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from lounge_curator.models.content import ContentItem
from lounge_curator.models.lounge import Creator, CreatorLoungeMembership, Lounge
from lounge_curator.models.relevancy import RelevancyAssessment
from lounge_curator.services.relevancy_aggregator import AggregationSummary
from lounge_curator.services.relevancy_pipeline import RelevancyPipeline


def _content(content_id: str, creator_id: str) -> ContentItem:
    return ContentItem(
        id=content_id,
        platform_content_id=f"tw_{content_id}",
        platform="twitter",
        creator_id=creator_id,
        title="",
        description=f"Post {content_id}",
        url=f"https://x.com/a/status/{content_id}",
        created_at=datetime.now(UTC),
    )


class TestRelevancyPipeline:
    """Tests for RelevancyPipeline."""

    @pytest.fixture
    def memberships(self) -> dict[str, list[CreatorLoungeMembership]]:
        return {
            "crt_1": [
                CreatorLoungeMembership(creator_id="crt_1", lounge_id="lng_a"),
                CreatorLoungeMembership(creator_id="crt_1", lounge_id="lng_b"),
            ],
            "crt_2": [CreatorLoungeMembership(creator_id="crt_2", lounge_id="lng_a")],
            "crt_3": [],
        }

    @pytest.fixture
    def repos(self, memberships: dict) -> dict[str, MagicMock]:
        content_repo = MagicMock()
        content_repo.find_unchecked = AsyncMock(return_value=[])
        content_repo.mark_checked = AsyncMock()

        membership_repo = MagicMock()
        membership_repo.find_by_creator = AsyncMock(
            side_effect=lambda creator_id: memberships.get(creator_id, [])
        )

        lounge_repo = MagicMock()
        lounge_repo.get_many = AsyncMock(
            return_value={
                "lng_a": Lounge(id="lng_a", name="SaaS", relevancy_threshold=60),
                "lng_b": Lounge(id="lng_b", name="AI", relevancy_threshold=70),
            }
        )

        creator_repo = MagicMock()
        creator_repo.get_many = AsyncMock(
            return_value={"crt_1": Creator(id="crt_1", display_name="Jane")}
        )
        return {
            "content_repo": content_repo,
            "membership_repo": membership_repo,
            "lounge_repo": lounge_repo,
            "creator_repo": creator_repo,
        }

    @pytest.fixture
    def mock_scorer(self) -> MagicMock:
        scorer = MagicMock()
        scorer.score = AsyncMock(return_value=[])
        return scorer

    @pytest.fixture
    def mock_aggregator(self) -> MagicMock:
        aggregator = MagicMock()
        aggregator.aggregate_and_persist = AsyncMock(return_value=AggregationSummary())
        return aggregator

    @pytest.fixture
    def pipeline(
        self, repos: dict, mock_scorer: MagicMock, mock_aggregator: MagicMock
    ) -> RelevancyPipeline:
        return RelevancyPipeline(
            **repos, scorer=mock_scorer, aggregator=mock_aggregator
        )

    @pytest.mark.asyncio
    async def test_fetch_batch_expands_lounges(
        self, pipeline: RelevancyPipeline, repos: dict
    ) -> None:
        """콘텐츠 x 라운지 항목으로 펼침."""
        repos["content_repo"].find_unchecked.return_value = [
            _content("cnt_1", "crt_1"),
            _content("cnt_2", "crt_2"),
            _content("cnt_3", "crt_3"),
        ]

        items = await pipeline.fetch_batch(limit=10)

        assert [(i.content_id, i.lounge_id) for i in items] == [
            ("cnt_1", "lng_a"),
            ("cnt_1", "lng_b"),
            ("cnt_2", "lng_a"),
        ]
        assert items[0].creator_name == "Jane"
        assert items[2].creator_name == "Unknown"
        assert items[1].threshold == 70
        assert items[1].lounge_name == "AI"
        assert items[0].content_description == "Post cnt_1"

    @pytest.mark.asyncio
    async def test_fetch_batch_keeps_content_lounges_together(
        self, pipeline: RelevancyPipeline, repos: dict
    ) -> None:
        """한 콘텐츠의 라운지는 배치 경계에서 나뉘지 않음."""
        repos["content_repo"].find_unchecked.return_value = [
            _content("cnt_2", "crt_2"),
            _content("cnt_1", "crt_1"),
        ]

        items = await pipeline.fetch_batch(limit=2)

        assert [i.content_id for i in items] == ["cnt_2"]

    @pytest.mark.asyncio
    async def test_fetch_batch_first_content_always_included(
        self, pipeline: RelevancyPipeline, repos: dict
    ) -> None:
        repos["content_repo"].find_unchecked.return_value = [_content("cnt_1", "crt_1")]

        items = await pipeline.fetch_batch(limit=1)

        assert len(items) == 2

    @pytest.mark.asyncio
    async def test_fetch_batch_skips_unknown_lounges(
        self, pipeline: RelevancyPipeline, repos: dict, memberships: dict
    ) -> None:
        """삭제된 라운지 소속은 무시."""
        memberships["crt_2"].append(
            CreatorLoungeMembership(creator_id="crt_2", lounge_id="lng_deleted")
        )
        repos["content_repo"].find_unchecked.return_value = [_content("cnt_2", "crt_2")]

        items = await pipeline.fetch_batch(limit=10)

        assert [i.lounge_id for i in items] == ["lng_a"]

    @pytest.mark.asyncio
    async def test_fetch_batch_marks_content_without_lounges(
        self, pipeline: RelevancyPipeline, repos: dict
    ) -> None:
        """라운지 없는 콘텐츠는 평가 완료로 표시."""
        repos["content_repo"].find_unchecked.return_value = [
            _content("cnt_3", "crt_3"),
            _content("cnt_2", "crt_2"),
        ]

        items = await pipeline.fetch_batch(limit=10)

        assert [i.content_id for i in items] == ["cnt_2"]
        repos["content_repo"].mark_checked.assert_awaited_once_with("cnt_3")

    @pytest.mark.asyncio
    async def test_process_reaches_member_content_behind_lounge_less_content(
        self,
        pipeline: RelevancyPipeline,
        repos: dict,
        mock_scorer: MagicMock,
    ) -> None:
        """라운지 없는 최신 콘텐츠가 limit을 채워도 다음 실행에서 소속 콘텐츠를 평가."""
        unchecked = [
            _content("cnt_new_1", "crt_3"),
            _content("cnt_new_2", "crt_3"),
            _content("cnt_new_3", "crt_3"),
            _content("cnt_old", "crt_2"),
        ]

        async def find_unchecked(lookback_days: int, limit: int) -> list[ContentItem]:
            return unchecked[:limit]

        async def mark_checked(content_id: str) -> None:
            unchecked[:] = [c for c in unchecked if c.id != content_id]

        repos["content_repo"].find_unchecked.side_effect = find_unchecked
        repos["content_repo"].mark_checked.side_effect = mark_checked
        mock_scorer.score.return_value = [
            RelevancyAssessment(content_id="cnt_old", lounge_id="lng_a", score=80, reason="x")
        ]

        first = await pipeline.process(limit=3)
        second = await pipeline.process(limit=3)

        assert first.processed == 0
        assert second.processed == 1
        mock_scorer.score.assert_awaited_once()
        scored = mock_scorer.score.await_args.args[0]
        assert [i.content_id for i in scored] == ["cnt_old"]

    @pytest.mark.asyncio
    async def test_process_counts(
        self,
        pipeline: RelevancyPipeline,
        repos: dict,
        mock_scorer: MagicMock,
        mock_aggregator: MagicMock,
    ) -> None:
        """processed / errors / tombstoned 집계."""
        repos["content_repo"].find_unchecked.return_value = [_content("cnt_1", "crt_1")]
        mock_scorer.score.return_value = [
            RelevancyAssessment(content_id="cnt_1", lounge_id="lng_a", score=30, reason="x"),
            RelevancyAssessment(
                content_id="cnt_1",
                lounge_id="lng_b",
                score=50,
                reason="Error during relevancy check",
                failed=True,
            ),
        ]
        mock_aggregator.aggregate_and_persist.return_value = AggregationSummary(
            checked=1, updated=1, tombstoned=1
        )

        result = await pipeline.process(limit=10)

        assert result.processed == 2
        assert result.errors == 1
        assert result.tombstoned == 1

    @pytest.mark.asyncio
    async def test_process_nothing_to_do(
        self, pipeline: RelevancyPipeline, mock_scorer: MagicMock
    ) -> None:
        result = await pipeline.process()

        assert (result.processed, result.errors, result.tombstoned) == (0, 0, 0)
        mock_scorer.score.assert_not_called()

    @pytest.mark.asyncio
    async def test_process_never_raises(
        self, pipeline: RelevancyPipeline, repos: dict
    ) -> None:
        """조회 실패도 통계로 반환."""
        repos["content_repo"].find_unchecked.side_effect = RuntimeError("firestore down")

        result = await pipeline.process()

        assert (result.processed, result.errors, result.tombstoned) == (0, 1, 0)
