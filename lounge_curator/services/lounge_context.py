"""Lounge scoring context assembly.

라운지 기본 규칙과 승인된 PromptAdjustment를 합쳐 오라클 프롬프트용 컨텍스트를 만듭니다.
build_context는 순수 함수이며 평가할 때마다 새로 호출됩니다.
"""

from dataclasses import dataclass

from lounge_curator.models.lounge import AdjustmentType, LoungeRules, PromptAdjustment


@dataclass(frozen=True)
class LoungeContext:
    """한 번의 평가에 사용할 라운지 규칙 스냅샷."""

    theme_description: str
    keep: tuple[str, ...]
    borderline: tuple[str, ...]
    filter: tuple[str, ...]
    threshold: int

    def render(self) -> str:
        """프롬프트에 삽입할 규칙 텍스트."""
        sections: list[str] = []
        if self.theme_description:
            sections.append(f"THEME: {self.theme_description}")

        borderline_floor = min(40, self.threshold)
        if self.keep:
            sections.append(
                f"KEEP (Score {self.threshold}+):\n" + _bullets(self.keep)
            )
        if self.borderline:
            sections.append(
                f"BORDERLINE (Score {borderline_floor}-{max(self.threshold - 1, 0)}):\n"
                + _bullets(self.borderline)
            )
        if self.filter:
            cutoff = borderline_floor if self.borderline else self.threshold
            sections.append(f"FILTER OUT (Score <{cutoff}):\n" + _bullets(self.filter))

        return "\n\n".join(sections)


def _bullets(lines: tuple[str, ...]) -> str:
    return "\n".join(f"- {line}" for line in lines)


def build_context(
    rules: LoungeRules,
    adjustments: list[PromptAdjustment],
    theme_description: str = "",
    threshold: int | None = None,
) -> LoungeContext:
    """기본 규칙 + 동적 규칙으로 컨텍스트 생성.

    승인되고 활성화된 조정만 해당 카테고리 뒤에 추가됩니다.

    Args:
        rules: 라운지 기본 규칙.
        adjustments: 라운지의 PromptAdjustment 목록.
        theme_description: 라운지 테마 설명.
        threshold: 실제 임계값 (없으면 rules.default_threshold).

    Returns:
        불변 LoungeContext.
    """
    extra: dict[AdjustmentType, list[str]] = {t: [] for t in AdjustmentType}
    for adjustment in adjustments:
        if adjustment.approved and adjustment.active:
            extra[adjustment.adjustment_type].append(adjustment.adjustment_text)

    return LoungeContext(
        theme_description=theme_description,
        keep=(*rules.keep, *extra[AdjustmentType.KEEP]),
        borderline=(*rules.borderline, *extra[AdjustmentType.BORDERLINE]),
        filter=(*rules.filter, *extra[AdjustmentType.FILTER]),
        threshold=rules.default_threshold if threshold is None else threshold,
    )
