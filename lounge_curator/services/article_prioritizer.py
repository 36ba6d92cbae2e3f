"""Article prioritizer for balanced curation input.

카테고리 비율(funding 40%, news 40%, wire 20%)로 기사를 고른 뒤
부족분은 원래 최신순으로 채웁니다.
"""

import structlog

from lounge_curator.models.article import Article, ArticleCategory, CategorizedArticles

logger = structlog.get_logger(__name__)

CATEGORY_SHARES: dict[ArticleCategory, float] = {
    ArticleCategory.FUNDING: 0.4,
    ArticleCategory.NEWS: 0.4,
    ArticleCategory.WIRE: 0.2,
}


class ArticlePrioritizer:
    """큐레이션 오라클에 전달할 기사 선택."""

    def __init__(self, shares: dict[ArticleCategory, float] | None = None) -> None:
        self.shares = shares or CATEGORY_SHARES

    def prioritize(
        self,
        articles: list[Article],
        categorized: CategorizedArticles,
        limit: int,
    ) -> list[Article]:
        """비율 할당 + 최신순 보충.

        Args:
            articles: 최신순 전체 기사 (categorized의 원본).
            categorized: 카테고리별 버킷.
            limit: 최대 선택 수.

        Returns:
            min(limit, len(articles))개의 기사.
        """
        if limit <= 0:
            return []

        selected: list[Article] = []
        used: set[int] = set()

        for category, share in self.shares.items():
            quota = int(limit * share)
            for article in categorized.bucket(category)[:quota]:
                if id(article) not in used:
                    used.add(id(article))
                    selected.append(article)

        for article in articles:
            if len(selected) >= limit:
                break
            if id(article) not in used:
                used.add(id(article))
                selected.append(article)

        logger.info(
            "articles_prioritized",
            available=len(articles),
            selected=len(selected),
            limit=limit,
        )
        return selected[:limit]
