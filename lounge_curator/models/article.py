"""Article models for external feed ingestion.

외부 피드에서 수집한 기사는 다이제스트 생성 1회 동안만 존재하며 저장되지 않습니다.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from pydantic import BaseModel, Field

# 추적 파라미터 목록
TRACKING_PARAMS = {
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "ref",
    "ref_src",
    "fbclid",
    "gclid",
    "source",
}


def normalize_url(url: str) -> str:
    """URL 정규화 (동일 기사 판별용).

    Rules:
    - scheme/host 소문자화
    - trailing '/' 제거
    - 추적 파라미터 제거 (utm_*, ref, fbclid, etc.)
    - fragment 제거
    """
    parsed = urlparse(url.strip().lower())
    query = parse_qs(parsed.query)

    filtered_query = {k: v for k, v in query.items() if k not in TRACKING_PARAMS}

    return urlunparse(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path.rstrip("/") or "/",
            "",
            urlencode(filtered_query, doseq=True),
            "",  # fragment 제거
        )
    ).rstrip("/")


class FeedCategory(str, Enum):
    """피드 소스가 선언한 카테고리."""

    FUNDING = "funding"
    NEWS = "news"
    WIRE = "wire"
    MIXED = "mixed"


class ArticleCategory(str, Enum):
    """기사 분류 버킷."""

    FUNDING = "funding"
    NEWS = "news"
    WIRE = "wire"


class FeedSource(BaseModel):
    """수집 대상 피드.

    priority가 낮을수록 신뢰도가 높은 소스입니다 (중복 시 우선).
    """

    name: str = Field(..., description="소스 이름 (예: TechCrunch)")
    url: str = Field(..., description="RSS/Atom 피드 URL")
    category: FeedCategory = Field(FeedCategory.NEWS, description="선언 카테고리")
    priority: int = Field(1, ge=1, description="우선순위 (1이 최상)")


class Article(BaseModel):
    """정규화된 피드 기사."""

    title: str
    link: str
    published_at: datetime
    body_snippet: str = ""
    body: str = ""
    source_name: str
    source_category: FeedCategory = FeedCategory.NEWS
    source_priority: int = 999
    guid: str | None = None


@dataclass
class CategorizedArticles:
    """카테고리별 기사 버킷 (각 버킷은 입력 순서 유지)."""

    funding: list[Article] = field(default_factory=list)
    news: list[Article] = field(default_factory=list)
    wire: list[Article] = field(default_factory=list)

    def bucket(self, category: ArticleCategory) -> list[Article]:
        """카테고리에 해당하는 버킷 반환."""
        return getattr(self, category.value)

    def total(self) -> int:
        return len(self.funding) + len(self.news) + len(self.wire)


DEFAULT_FEEDS: list[FeedSource] = [
    # Funding / investment
    FeedSource(
        name="TechCrunch",
        url="https://techcrunch.com/feed/",
        category=FeedCategory.MIXED,
        priority=1,
    ),
    FeedSource(
        name="TechCrunch Venture",
        url="https://techcrunch.com/category/venture/feed/",
        category=FeedCategory.FUNDING,
        priority=1,
    ),
    FeedSource(
        name="Crunchbase News",
        url="https://news.crunchbase.com/feed/",
        category=FeedCategory.FUNDING,
        priority=1,
    ),
    FeedSource(
        name="TechStartups",
        url="https://techstartups.com/feed/",
        category=FeedCategory.FUNDING,
        priority=1,
    ),
    FeedSource(
        name="EU-Startups",
        url="https://www.eu-startups.com/feed/",
        category=FeedCategory.FUNDING,
        priority=2,
    ),
    FeedSource(
        name="Sifted",
        url="https://sifted.eu/feed",
        category=FeedCategory.FUNDING,
        priority=2,
    ),
    # Tech news
    FeedSource(
        name="SiliconANGLE",
        url="https://siliconangle.com/feed/",
        category=FeedCategory.NEWS,
        priority=1,
    ),
    FeedSource(
        name="CNBC Technology",
        url="https://search.cnbc.com/rs/search/combinedcms/view.xml?partnerId=wrss01&id=19854910",
        category=FeedCategory.NEWS,
        priority=1,
    ),
    FeedSource(
        name="BBC Technology",
        url="https://feeds.bbci.co.uk/news/technology/rss.xml",
        category=FeedCategory.NEWS,
        priority=1,
    ),
    FeedSource(
        name="VentureBeat",
        url="https://feeds.feedburner.com/venturebeat/SZYF",
        category=FeedCategory.NEWS,
        priority=2,
    ),
]
