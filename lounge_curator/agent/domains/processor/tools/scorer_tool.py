"""Scorer tool for lounge relevancy scoring.

Gemini API를 사용하여 콘텐츠가 라운지 테마에 얼마나 맞는지 0~100 점수로 평가합니다.
"""

from typing import TYPE_CHECKING, Any

from lounge_curator.adapters.gemini_client import GeminiClient, OracleResponseError
from lounge_curator.models.content import ReferenceType
from lounge_curator.models.relevancy import RelevancyAssessment, RelevancyCheckItem

if TYPE_CHECKING:
    from lounge_curator.services.lounge_context import LoungeContext

MISSING_REASON = "No reason provided"

# 시스템 프롬프트
RELEVANCY_SYSTEM_PROMPT = (
    "You are a content relevancy evaluator. Always respond in valid JSON format."
)


def build_content_text(item: RelevancyCheckItem) -> str:
    """오라클에 전달할 콘텐츠 본문 구성.

    - quote: 본문 뒤에 인용 원문과 작성자를 덧붙임
    - retweet: 원문으로 본문을 대체
    - reply: 답글 대상 작성자만 덧붙임

    Args:
        item: 평가 항목.

    Returns:
        재구성된 본문.
    """
    text = item.content_description or item.content_title
    ref = item.referenced_content
    if item.reference_type is None or ref is None:
        return text

    author = ref.author_username
    if item.reference_type == ReferenceType.QUOTE:
        text += f"\n\n[QUOTED TWEET: {ref.body}]"
        if author:
            text += f" by @{author}"
    elif item.reference_type == ReferenceType.RETWEET:
        text = f"[RETWEET: {ref.body or text}]"
        if author:
            text += f" by @{author}"
    elif item.reference_type == ReferenceType.REPLY:
        text += f"\n\n[REPLYING TO: @{author or 'unknown'}]"

    return text


def build_relevancy_prompt(item: RelevancyCheckItem, context: "LoungeContext") -> str:
    """스코어링 프롬프트 생성."""
    return f"""You are a strict content curator for a professional lounge. Be STRICT about filtering off-topic content.

LOUNGE: {item.lounge_name}
{context.render()}

CONTENT TO EVALUATE:
Author: {item.creator_name}
Content: {build_content_text(item)}

CRITICAL FILTERING RULES:
- Be STRICT: Content must be DIRECTLY relevant to the lounge theme, not tangentially related
- For quotes/retweets: BOTH the commentary AND quoted content must be relevant. If either is off-topic, score low.

Score 0-100 based on relevance to the lounge. The threshold is {context.threshold}.

Respond in JSON:
{{
  "score": <0-100>,
  "reason": "<briefly explain relevance>"
}}"""


def parse_assessment(item: RelevancyCheckItem, data: dict[str, Any]) -> RelevancyAssessment:
    """오라클 JSON을 RelevancyAssessment로 변환.

    Args:
        item: 평가 항목.
        data: 오라클 응답.

    Returns:
        점수가 0~100으로 클램핑된 평가 결과.

    Raises:
        OracleResponseError: score가 없거나 숫자가 아님.
    """
    raw_score = data.get("score")
    if isinstance(raw_score, bool) or raw_score is None:
        raise OracleResponseError(f"Missing or invalid score: {raw_score!r}")
    try:
        score = round(float(raw_score))
    except (TypeError, ValueError, OverflowError) as e:
        raise OracleResponseError(f"Non-numeric score: {raw_score!r}") from e

    reason = data.get("reason")
    if not isinstance(reason, str) or not reason.strip():
        reason = MISSING_REASON

    return RelevancyAssessment(
        content_id=item.content_id,
        lounge_id=item.lounge_id,
        score=max(0, min(100, score)),
        reason=reason,
    )


async def score_item(
    item: RelevancyCheckItem,
    context: "LoungeContext",
    gemini_client: GeminiClient,
    model: str | None = None,
) -> RelevancyAssessment:
    """라운지 관련성 점수 계산.

    Args:
        item: 평가 항목.
        context: 라운지 규칙 컨텍스트.
        gemini_client: Gemini 클라이언트.
        model: 사용할 모델 (없으면 클라이언트 기본값).

    Returns:
        평가 결과.

    Raises:
        OracleResponseError: 응답 파싱 실패.
    """
    data = await gemini_client.generate_json(
        prompt=build_relevancy_prompt(item, context),
        system_prompt=RELEVANCY_SYSTEM_PROMPT,
        temperature=0.3,
        model=model,
    )
    return parse_assessment(item, data)
