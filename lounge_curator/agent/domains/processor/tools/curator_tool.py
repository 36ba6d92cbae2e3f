"""Curator tool for daily digest generation.

피드 기사로 다이제스트를 큐레이션하거나(curated) 기사 없이 생성(pure)합니다.
오라클 응답은 모두 검증을 거쳐 부분 구조가 남지 않도록 정리됩니다.
"""

import json
from datetime import UTC, datetime
from typing import Any

from lounge_curator.adapters.gemini_client import GeminiClient
from lounge_curator.models.article import Article, normalize_url
from lounge_curator.models.digest import (
    BigStory,
    DigestResult,
    GenerationMode,
    LoungeDigestConfig,
    NewsItem,
)

_ITEM_SCHEMA = """{
  "bigStory": {
    "title": "Exact headline",
    "summary": "2-3 sentences explaining significance and impact",
    "source": "Source name",
    "sourceUrl": "Exact URL"
  },
  "bullets": [
    {
      "text": "Concise news headline",
      "summary": "1-2 sentence context",
      "source": "Source name",
      "sourceUrl": "Exact URL"
    }
  ],
  "specialSection": [
    {
      "text": "Company funding/M&A headline",
      "summary": "Brief context",
      "amount": "$X million/billion",
      "series": "Series A/B/C/D or M&A",
      "source": "Source name",
      "sourceUrl": "Exact URL"
    }
  ]
}"""


def _text(value: Any) -> str:
    """문자열 필드 정리 (문자열이 아니면 빈 값)."""
    return value.strip() if isinstance(value, str) else ""


def _today(now: datetime | None = None) -> str:
    return (now or datetime.now(UTC)).strftime("%A, %B %d, %Y")


def build_curation_prompt(
    articles: list[Article],
    topic: str,
    max_bullets: int,
    max_special_section: int,
) -> str:
    """피드 기사 기반 큐레이션 프롬프트 생성."""
    prepared = [
        {
            "title": a.title,
            "snippet": a.body_snippet or a.title,
            "source": a.source_name,
            "url": a.link,
            "category": a.source_category.value,
            "pubDate": a.published_at.isoformat(),
        }
        for a in articles
    ]

    return f"""You have access to {len(articles)} real news articles from the last 48 hours.
Your task is to curate the MOST IMPORTANT and IMPACTFUL {topic} industry news.

ARTICLES:
{json.dumps(prepared, indent=2, ensure_ascii=False)}

REQUIREMENTS:
1. Select ONE big story - the most significant/impactful news
2. Select EXACTLY {max_bullets} diverse news items for bullet points
3. Select up to {max_special_section} funding/M&A announcements for special section
4. DO NOT duplicate stories across sections
5. Use the ACTUAL URLs provided - do not modify them
6. Write concise, informative summaries that explain WHY each story matters

CRITICAL:
- Every URL must be from the articles provided above
- Never invent or modify URLs

Return ONLY valid JSON with this structure:
{_ITEM_SCHEMA}"""


def build_pure_generation_prompt(
    topic: str,
    max_bullets: int,
    max_special_section: int,
) -> str:
    """기사 없이 생성할 때의 프롬프트."""
    return f"""Search for the most important {topic} industry news from the last 24 hours and build a daily digest.

Create a structured news digest with:
1. One big story - the most impactful {topic} news
2. {max_bullets} bullet points - diverse important stories
3. {max_special_section} funding/M&A items in special section

Guidelines:
- Each story must be UNIQUE - no duplicates across sections
- Use real article URLs from your search results only
- Include specific metrics and dollar amounts where available

Return ONLY valid JSON with this structure:
{_ITEM_SCHEMA}"""


def validate_news_items(raw: Any) -> list[NewsItem]:
    """목록 항목 검증.

    text와 sourceUrl이 모두 있는 항목만 남기고 나머지 필드는 기본값으로 채웁니다.

    Args:
        raw: 오라클 응답의 목록 값.

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
                amount=_text(entry.get("amount")) or None,
                series=_text(entry.get("series")) or None,
            )
        )
    return items


def validate_big_story(raw: Any) -> BigStory | None:
    """빅 스토리 검증 (title, sourceUrl 없으면 버림)."""
    if not isinstance(raw, dict):
        return None
    title = _text(raw.get("title"))
    source_url = _text(raw.get("sourceUrl"))
    if not title or not source_url:
        return None
    return BigStory(
        title=title,
        summary=_text(raw.get("summary")),
        source=_text(raw.get("source")) or "Unknown",
        source_url=source_url,
    )


def remove_cross_section_duplicates(result: DigestResult) -> DigestResult:
    """섹션 간 같은 URL 제거.

    우선순위: big story > bullets > special section.
    같은 섹션 안의 중복도 첫 항목만 남깁니다.

    Args:
        result: 다이제스트.

    Returns:
        중복이 제거된 새 다이제스트.
    """
    seen: set[str] = set()
    if result.big_story is not None:
        seen.add(normalize_url(result.big_story.source_url))

    def _unique(items: list[NewsItem]) -> list[NewsItem]:
        kept = []
        for item in items:
            key = normalize_url(item.source_url)
            if key in seen:
                continue
            seen.add(key)
            kept.append(item)
        return kept

    bullets = _unique(result.bullets)
    special = (
        _unique(result.special_section)
        if result.special_section is not None
        else None
    )
    return result.model_copy(update={"bullets": bullets, "special_section": special})


def build_digest_result(
    data: dict[str, Any],
    config: LoungeDigestConfig,
    mode: GenerationMode,
) -> DigestResult:
    """오라클 응답을 검증된 DigestResult로 변환."""
    special = validate_news_items(data.get("specialSection"))
    result = DigestResult(
        big_story=validate_big_story(data.get("bigStory")),
        bullets=validate_news_items(data.get("bullets"))[: config.max_bullets],
        special_section=special[: config.max_special_section] or None,
        special_section_title=config.special_section_title if special else None,
        topic=config.topic,
        generated_at=datetime.now(UTC),
        generation_mode=mode,
    )
    return remove_cross_section_duplicates(result)


async def curate_from_articles(
    articles: list[Article],
    config: LoungeDigestConfig,
    gemini_client: GeminiClient,
    model: str | None = None,
) -> DigestResult:
    """피드 기사로 다이제스트 큐레이션.

    Args:
        articles: 우선순위가 정해진 기사 목록.
        config: 라운지 다이제스트 설정.
        gemini_client: Gemini 클라이언트.
        model: 사용할 모델.

    Returns:
        curated 모드 다이제스트.

    Raises:
        OracleResponseError: 응답에서 JSON을 찾을 수 없음.
    """
    data = await gemini_client.generate_json(
        prompt=build_curation_prompt(
            articles,
            topic=config.topic,
            max_bullets=config.max_bullets,
            max_special_section=config.max_special_section,
        ),
        system_prompt=(
            f"You are a professional {config.topic} news curator. "
            f"Today's date is {_today()}. Your task is to select and summarize "
            "the most important news from the provided articles."
        ),
        model=model,
    )
    return build_digest_result(data, config, GenerationMode.CURATED)


async def generate_pure_digest(
    config: LoungeDigestConfig,
    gemini_client: GeminiClient,
    model: str | None = None,
) -> DigestResult:
    """기사 없이 다이제스트 생성 (Google Search grounding 사용).

    Args:
        config: 라운지 다이제스트 설정.
        gemini_client: Gemini 클라이언트.
        model: 사용할 모델.

    Returns:
        pure 모드 다이제스트.

    Raises:
        OracleResponseError: 응답에서 JSON을 찾을 수 없음.
    """
    data = await gemini_client.generate_json(
        prompt=build_pure_generation_prompt(
            topic=config.topic,
            max_bullets=config.max_bullets,
            max_special_section=config.max_special_section,
        ),
        system_prompt=(
            f"You are a professional {config.topic} industry news curator. "
            f"Today is {_today()}. Focus on accuracy and real sources."
        ),
        temperature=0.7,
        model=model,
        use_search=True,
    )
    return build_digest_result(data, config, GenerationMode.PURE)
