"""RSS feed collection tool.

httpx로 피드를 받아 feedparser로 파싱하고, 기사 텍스트를 정규화합니다.
"""

import re
from datetime import UTC, datetime

import feedparser
import httpx
from bs4 import BeautifulSoup

from lounge_curator.models.article import Article, FeedSource

_WHITESPACE_RE = re.compile(r"\s+")


class FeedFetchError(Exception):
    """피드 수집 실패 (HTTP 오류, 타임아웃, 파싱 불가)."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


def clean_text(text: str | None) -> str:
    """HTML 태그 제거, 엔티티 디코딩, 공백 정리.

    Args:
        text: 원본 텍스트 (HTML 포함 가능).

    Returns:
        정리된 평문.
    """
    if not text:
        return ""

    if "<" in text or "&" in text:
        text = BeautifulSoup(text, "lxml").get_text(" ")

    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_snippet(content: str | None, max_length: int = 200) -> str:
    """본문에서 스니펫 추출.

    max_length 안의 마지막 마침표가 70% 지점 이후라면 문장 단위로 자르고,
    아니면 마지막 단어 경계에서 자른 뒤 '...'을 붙입니다.

    Args:
        content: 본문.
        max_length: 목표 길이.

    Returns:
        스니펫 (단어 중간에서 잘리지 않음).
    """
    cleaned = clean_text(content)
    if len(cleaned) <= max_length:
        return cleaned

    truncated = cleaned[:max_length]
    last_period = truncated.rfind(".")
    if last_period > max_length * 0.7:
        return truncated[: last_period + 1]

    last_space = truncated.rfind(" ")
    if last_space <= 0:
        # 공백 없는 긴 토큰
        return truncated + "..."
    return truncated[:last_space] + "..."


def _entry_published_at(entry: dict, fallback: datetime) -> datetime:
    """엔트리 발행일 (없거나 잘못되면 fallback)."""
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return fallback
    try:
        return datetime(
            year=parsed[0],
            month=parsed[1],
            day=parsed[2],
            hour=parsed[3],
            minute=parsed[4],
            second=parsed[5],
            tzinfo=UTC,
        )
    except (TypeError, ValueError, IndexError):
        return fallback


def _entry_body(entry: dict) -> str:
    """본문: content > summary > description."""
    content_list = entry.get("content")
    if content_list and isinstance(content_list, list):
        value = content_list[0].get("value", "")
        if value:
            return value
    return entry.get("summary") or entry.get("description") or ""


def parse_feed_entries(
    feed_text: str,
    source: FeedSource,
    fetched_at: datetime | None = None,
    snippet_length: int = 200,
) -> list[Article]:
    """피드 문서를 Article 목록으로 변환.

    제목 또는 링크가 없는 엔트리는 건너뛰고,
    발행일이 없으면 수집 시각을 사용합니다.

    Args:
        feed_text: RSS/Atom 문서 본문.
        source: 피드 소스.
        fetched_at: 수집 시각 (기본: 현재).
        snippet_length: 스니펫 목표 길이.

    Returns:
        정규화된 기사 목록.

    Raises:
        FeedFetchError: 문서를 피드로 해석할 수 없음.
    """
    feed = feedparser.parse(feed_text)

    if feed.bozo and not feed.entries:
        raise FeedFetchError(source.name, f"Failed to parse feed: {feed.bozo_exception}")

    fetched_at = fetched_at or datetime.now(UTC)
    articles: list[Article] = []

    for entry in feed.entries:
        title = clean_text(entry.get("title"))
        link = (entry.get("link") or "").strip()
        if not title or not link:
            continue

        raw_body = _entry_body(entry)
        snippet_source = entry.get("summary") or raw_body

        articles.append(
            Article(
                title=title,
                link=link,
                published_at=_entry_published_at(entry, fetched_at),
                body_snippet=extract_snippet(snippet_source, snippet_length),
                body=clean_text(raw_body),
                source_name=source.name,
                source_category=source.category,
                source_priority=source.priority,
                guid=entry.get("id") or link,
            )
        )

    return articles


async def fetch_feed(
    client: httpx.AsyncClient,
    source: FeedSource,
    snippet_length: int = 200,
) -> list[Article]:
    """피드 1개 수집.

    Args:
        client: 타임아웃/User-Agent가 설정된 httpx 클라이언트.
        source: 피드 소스.
        snippet_length: 스니펫 목표 길이.

    Returns:
        정규화된 기사 목록.

    Raises:
        FeedFetchError: HTTP 오류, 타임아웃 또는 파싱 실패.
    """
    try:
        response = await client.get(source.url, follow_redirects=True)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise FeedFetchError(source.name, "Timed out") from e
    except httpx.HTTPError as e:
        raise FeedFetchError(source.name, str(e) or type(e).__name__) from e

    return parse_feed_entries(
        response.text,
        source,
        fetched_at=datetime.now(UTC),
        snippet_length=snippet_length,
    )
