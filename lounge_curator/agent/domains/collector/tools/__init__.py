"""Collector tools for external feed collection.

RSS/Atom 피드 수집 및 텍스트 정규화 도구들.
"""

from lounge_curator.agent.domains.collector.tools.rss_tool import (
    FeedFetchError,
    clean_text,
    extract_snippet,
    fetch_feed,
    parse_feed_entries,
)

__all__ = [
    "FeedFetchError",
    "clean_text",
    "extract_snippet",
    "fetch_feed",
    "parse_feed_entries",
]
