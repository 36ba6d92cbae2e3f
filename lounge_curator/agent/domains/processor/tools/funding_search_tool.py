"""Funding search tool.

Google Search grounding으로 최근 투자/M&A 소식을 찾습니다.
오라클 오류는 예외 대신 빈 결과로 반환됩니다.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import structlog

from lounge_curator.adapters.gemini_client import GeminiClient
from lounge_curator.models.digest import NewsItem

logger = structlog.get_logger(__name__)

UNDISCLOSED_AMOUNT = "Undisclosed"

FUNDING_SYSTEM_PROMPT = (
    "You are a specialized funding news aggregator. "
    "Focus on finding REAL, RECENT funding rounds and M&A activity."
)


@dataclass
class FundingSearchResult:
    """펀딩 검색 결과."""

    items: list[NewsItem] = field(default_factory=list)
    searched_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    error: str | None = None

    @property
    def total_found(self) -> int:
        return len(self.items)


def build_funding_prompt(topic: str, max_results: int, timeframe: str) -> str:
    """펀딩 검색 프롬프트 생성."""
    return f"""Search for and extract {max_results} RECENT {topic} funding rounds and M&A deals.

CRITICAL REQUIREMENTS:
1. Include RECENT funding news (prioritize the last {timeframe} but include older if needed)
2. MUST have actual funding amounts (e.g., "$15 million", "$2.5 billion")
3. MUST use real article URLs from search results - NO fake URLs
4. Include company name, amount raised, series/round, and investors when available
5. Include both funding rounds AND acquisitions/M&A deals

ALWAYS return this EXACT JSON structure (even with 0 items):

{{
  "fundingItems": [
    {{
      "text": "Company raises $X million in Series Y",
      "summary": "Brief 1-2 sentence description of the deal and why it matters",
      "amount": "$X million",
      "series": "Series A/B/C/D or Acquisition",
      "source": "Publication name",
      "sourceUrl": "ACTUAL article URL from search results"
    }}
  ]
}}

If no funding items found, return: {{"fundingItems": []}}"""


def _text(value: Any) -> str:
    """문자열 필드 정리 (숫자는 문자열로, 그 외 타입은 빈 값)."""
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return value.strip() if isinstance(value, str) else ""


def parse_funding_items(raw: Any, max_results: int) -> list[NewsItem]:
    """펀딩 항목 검증.

    text 또는 sourceUrl이 없는 항목은 버리고 amount는 기본값 "Undisclosed".
    문자열이 아닌 필드는 숫자만 문자열로 변환하고 나머지는 기본값을 씁니다.

    Args:
        raw: fundingItems 값.
        max_results: 최대 항목 수.

    Returns:
        검증된 NewsItem 목록.
    """
    if not isinstance(raw, list):
        return []

    items: list[NewsItem] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        text = _text(entry.get("text"))
        source_url = _text(entry.get("sourceUrl"))
        if not text or not source_url:
            continue
        items.append(
            NewsItem(
                text=text,
                summary=_text(entry.get("summary")),
                source=_text(entry.get("source")) or "Unknown",
                source_url=source_url,
                amount=_text(entry.get("amount")) or UNDISCLOSED_AMOUNT,
                series=_text(entry.get("series")) or None,
            )
        )
    return items[:max_results]


async def search_funding_news(
    gemini_client: GeminiClient,
    topic: str,
    max_results: int = 5,
    timeframe: str = "48h",
    model: str | None = None,
) -> FundingSearchResult:
    """최근 펀딩/M&A 뉴스 검색.

    Args:
        gemini_client: Gemini 클라이언트.
        topic: 다이제스트 주제.
        max_results: 최대 항목 수.
        timeframe: 우선 검색 기간 (예: 48h).
        model: 사용할 모델.

    Returns:
        검색 결과 (오류 시 빈 결과와 error 메시지).
    """
    try:
        data = await gemini_client.generate_json(
            prompt=build_funding_prompt(topic, max_results, timeframe),
            system_prompt=FUNDING_SYSTEM_PROMPT,
            model=model,
            use_search=True,
        )
        items = parse_funding_items(data.get("fundingItems"), max_results)
    except Exception as e:
        logger.warning("funding_search_failed", topic=topic, error=str(e))
        return FundingSearchResult(error=str(e))

    logger.info("funding_search_completed", topic=topic, total_found=len(items))
    return FundingSearchResult(items=items)
