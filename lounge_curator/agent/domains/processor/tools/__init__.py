"""Processor tools for oracle calls.

관련성 스코어링, 다이제스트 큐레이션, 펀딩 검색 도구들.
"""

from lounge_curator.agent.domains.processor.tools.curator_tool import (
    curate_from_articles,
    generate_pure_digest,
    remove_cross_section_duplicates,
    validate_big_story,
    validate_news_items,
)
from lounge_curator.agent.domains.processor.tools.funding_search_tool import (
    FundingSearchResult,
    search_funding_news,
)
from lounge_curator.agent.domains.processor.tools.scorer_tool import (
    build_content_text,
    score_item,
)

__all__ = [
    "FundingSearchResult",
    "build_content_text",
    "curate_from_articles",
    "generate_pure_digest",
    "remove_cross_section_duplicates",
    "score_item",
    "search_funding_news",
    "validate_big_story",
    "validate_news_items",
]
