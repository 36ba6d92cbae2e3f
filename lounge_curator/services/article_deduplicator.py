"""Article deduplication and categorization.

같은 소식을 다룬 여러 소스의 기사를 하나로 합치고 funding/news/wire로 분류합니다.
"""

import re

import structlog

from lounge_curator.models.article import (
    Article,
    CategorizedArticles,
    FeedCategory,
)

logger = structlog.get_logger(__name__)

FUNDING_KEYWORDS = (
    "raises",
    "secures",
    "funding",
    "series",
    "seed",
    "investment",
    "valuation",
    "acquires",
    "acquisition",
    "merger",
    "m&a",
    "ipo",
)

_AMOUNT_RE = re.compile(r"\$[\d.]+[mb]", re.IGNORECASE)
_COMPANY_RE = re.compile(
    r"^([^,]+?)(?:\s+raises|\s+secures|\s+closes|\s+gets)", re.IGNORECASE
)


def fingerprint(article: Article) -> str:
    """기사 중복 판별 키.

    제목에서 회사명(raises/secures/closes/gets 앞)과 금액($12m, $1.5b)을
    모두 찾으면 "{company}_{amount}", 아니면 제목 앞 50자를 정규화해 사용합니다.

    Args:
        article: 대상 기사.

    Returns:
        영숫자(와 '_')만 남은 소문자 키.
    """
    title = article.title.lower()

    amount_match = _AMOUNT_RE.search(title)
    company_match = _COMPANY_RE.match(title)
    if amount_match and company_match:
        company = company_match.group(1).strip()
        return re.sub(r"[^a-z0-9_]", "", f"{company}_{amount_match.group(0)}")

    return re.sub(r"[^a-z0-9]", "", title[:50])


def is_funding_title(title: str) -> bool:
    """제목에 펀딩/M&A 키워드 포함 여부."""
    title_lower = title.lower()
    return any(keyword in title_lower for keyword in FUNDING_KEYWORDS)


class ArticleDeduplicator:
    """기사 중복 제거 및 분류 서비스."""

    def dedup(self, articles: list[Article]) -> list[Article]:
        """fingerprint 기준 중복 제거.

        충돌 시 source_priority가 낮은(신뢰도 높은) 기사를 유지하고,
        같으면 먼저 나온 기사를 유지합니다. 유지된 기사는 첫 등장 위치를 차지합니다.

        Args:
            articles: 입력 기사 목록.

        Returns:
            fingerprint가 모두 다른 기사 목록.
        """
        kept: list[Article] = []
        positions: dict[str, int] = {}

        for article in articles:
            key = fingerprint(article)
            index = positions.get(key)
            if index is None:
                positions[key] = len(kept)
                kept.append(article)
            elif article.source_priority < kept[index].source_priority:
                kept[index] = article

        logger.info(
            "articles_deduplicated",
            before=len(articles),
            after=len(kept),
        )
        return kept

    def categorize(self, articles: list[Article]) -> CategorizedArticles:
        """키워드/소스 카테고리 기반 분류.

        제목에 펀딩 키워드가 있으면 소스와 무관하게 funding,
        그 외에는 소스 카테고리를 따르고 news/mixed는 news로 분류합니다.

        Args:
            articles: 분류할 기사 목록.

        Returns:
            카테고리별 버킷 (각 버킷은 입력 순서 유지).
        """
        categorized = CategorizedArticles()

        for article in articles:
            if (
                is_funding_title(article.title)
                or article.source_category == FeedCategory.FUNDING
            ):
                categorized.funding.append(article)
            elif article.source_category == FeedCategory.WIRE:
                categorized.wire.append(article)
            else:
                categorized.news.append(article)

        logger.info(
            "articles_categorized",
            funding=len(categorized.funding),
            news=len(categorized.news),
            wire=len(categorized.wire),
        )
        return categorized
