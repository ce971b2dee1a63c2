from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InstrumentId(str, Enum):
    GAD7 = "gad7"  # Generalized Anxiety Disorder-7
    PHQ9 = "phq9"  # Patient Health Questionnaire-9


@dataclass(frozen=True)
class ScoreBand:
    min: int
    max: int
    label: str
    color_tag: str

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


@dataclass(frozen=True)
class AnswerOption:
    label: str
    score: int


@dataclass(frozen=True)
class AssessmentDefinition:
    id: InstrumentId
    title: str
    description: str
    questions: tuple[str, ...]
    scoring: tuple[ScoreBand, ...]

    @property
    def max_score(self) -> int:
        return MAX_ANSWER_SCORE * len(self.questions)


MAX_ANSWER_SCORE = 3

ANSWER_OPTIONS: tuple[AnswerOption, ...] = (
    AnswerOption("Not at all", 0),
    AnswerOption("Several days", 1),
    AnswerOption("More than half the days", 2),
    AnswerOption("Nearly every day", 3),
)

RECALL_PERIOD = "Over the last 2 weeks"

GAD7 = AssessmentDefinition(
    id=InstrumentId.GAD7,
    title="Generalized Anxiety Disorder (GAD-7)",
    description="A screening tool for signs of anxiety.",
    questions=(
        "Feeling nervous, anxious, or on edge",
        "Not being able to stop or control worrying",
        "Worrying too much about different things",
        "Trouble relaxing",
        "Being so restless that it is hard to sit still",
        "Becoming easily annoyed or irritable",
        "Feeling afraid as if something awful might happen",
    ),
    scoring=(
        ScoreBand(0, 4, "Minimal Anxiety", "green"),
        ScoreBand(5, 9, "Mild Anxiety", "yellow"),
        ScoreBand(10, 14, "Moderate Anxiety", "orange"),
        ScoreBand(15, 21, "Severe Anxiety", "red"),
    ),
)

PHQ9 = AssessmentDefinition(
    id=InstrumentId.PHQ9,
    title="Patient Health Questionnaire (PHQ-9)",
    description="A screening tool for signs of depression.",
    questions=(
        "Little interest or pleasure in doing things",
        "Feeling down, depressed, or hopeless",
        "Trouble falling or staying asleep, or sleeping too much",
        "Feeling tired or having little energy",
        "Poor appetite or overeating",
        "Feeling bad about yourself, or that you are a failure or have let yourself or your family down",
        "Trouble concentrating on things, such as reading the newspaper or watching television",
        "Moving or speaking so slowly that other people could have noticed? Or the opposite, being so "
        "fidgety or restless that you have been moving around a lot more than usual",
        "Thoughts that you would be better off dead or of hurting yourself in some way",
    ),
    scoring=(
        ScoreBand(0, 4, "Minimal Depression", "green"),
        ScoreBand(5, 9, "Mild Depression", "yellow"),
        ScoreBand(10, 14, "Moderate Depression", "orange"),
        ScoreBand(15, 19, "Moderately Severe Depression", "dark-orange"),
        ScoreBand(20, 27, "Severe Depression", "red"),
    ),
)

ASSESSMENTS: dict[InstrumentId, AssessmentDefinition] = {
    InstrumentId.GAD7: GAD7,
    InstrumentId.PHQ9: PHQ9,
}


def get_definition(definition_id: str | InstrumentId) -> AssessmentDefinition | None:
    try:
        return ASSESSMENTS[InstrumentId(definition_id)]
    except ValueError:
        return None
