from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .instruments import AssessmentDefinition, ScoreBand

HIGH_RISK_THRESHOLD = 10

NEXT_STEPS: tuple[str, ...] = (
    "Consider sharing these results with a counselor or doctor.",
    'Check out the "Resources" tab for helpful videos.',
    'Try the "Breathing Exercise" to center yourself right now.',
)


@dataclass(frozen=True)
class AssessmentResult:
    total_score: int
    band: ScoreBand
    high_risk: bool

    @property
    def summary(self) -> str:
        return f"Based on your responses, you may be experiencing symptoms of {self.band.label.lower()}."

    @property
    def next_steps(self) -> tuple[str, ...]:
        return NEXT_STEPS if self.high_risk else ()


def total_score(answers: Sequence[int | None]) -> int:
    # 未回答は 0 点として扱う
    return sum(answer or 0 for answer in answers)


def resolve_band(definition: AssessmentDefinition, score: int) -> ScoreBand:
    for band in definition.scoring:
        if band.contains(score):
            return band
    return definition.scoring[-1]


def is_high_risk(score: int) -> bool:
    return score >= HIGH_RISK_THRESHOLD


def score_answers(definition: AssessmentDefinition, answers: Sequence[int | None]) -> AssessmentResult:
    total = total_score(answers)
    return AssessmentResult(
        total_score=total,
        band=resolve_band(definition, total),
        high_risk=is_high_risk(total),
    )
