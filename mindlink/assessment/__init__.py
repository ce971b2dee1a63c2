"""GAD-7 / PHQ-9 self-assessment definitions, scoring and session state."""

from .instruments import (
    ANSWER_OPTIONS,
    ASSESSMENTS,
    GAD7,
    PHQ9,
    AssessmentDefinition,
    InstrumentId,
    ScoreBand,
    get_definition,
)
from .scoring import AssessmentResult, is_high_risk, resolve_band, score_answers, total_score
from .session import AssessmentSession, AssessmentStep
