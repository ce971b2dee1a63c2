from __future__ import annotations

import logging
from enum import Enum

from .instruments import MAX_ANSWER_SCORE, AssessmentDefinition, InstrumentId, get_definition
from .scoring import AssessmentResult, score_answers

logger = logging.getLogger(__name__)


class AssessmentStep(str, Enum):
    SELECTION = "selection"
    QUESTIONS = "questions"
    RESULT = "result"


class AssessmentSession:
    """
    Questionnaire state machine: selection -> questions -> result.

    Recording an answer and moving to the next question are separate calls so
    that the caller can pace the move (the dialog waits briefly to let the
    chosen option highlight). Invalid calls are ignored and leave the state
    untouched. Nothing here is ever persisted.
    """

    def __init__(self) -> None:
        self._step = AssessmentStep.SELECTION
        self._definition: AssessmentDefinition | None = None
        self._answers: list[int | None] = []
        self._current_index = 0

    @property
    def step(self) -> AssessmentStep:
        return self._step

    @property
    def definition(self) -> AssessmentDefinition | None:
        return self._definition

    @property
    def answers(self) -> tuple[int | None, ...]:
        return tuple(self._answers)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> str | None:
        if self._step != AssessmentStep.QUESTIONS or self._definition is None:
            return None
        return self._definition.questions[self._current_index]

    @property
    def current_answer(self) -> int | None:
        if self._step != AssessmentStep.QUESTIONS:
            return None
        return self._answers[self._current_index]

    def start(self, definition_id: str | InstrumentId) -> bool:
        if self._step != AssessmentStep.SELECTION:
            logger.debug("Ignoring start(%s) in step %s", definition_id, self._step.value)
            return False
        definition = get_definition(definition_id)
        if definition is None:
            logger.debug("Unknown assessment id: %r", definition_id)
            return False
        self._definition = definition
        self._answers = [None] * len(definition.questions)
        self._current_index = 0
        self._step = AssessmentStep.QUESTIONS
        return True

    def answer(self, score: int) -> bool:
        if self._step != AssessmentStep.QUESTIONS:
            return False
        if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= MAX_ANSWER_SCORE:
            logger.debug("Rejected out-of-range answer: %r", score)
            return False
        # 進む前に選び直した場合は上書きする
        self._answers[self._current_index] = score
        return True

    def advance(self) -> AssessmentStep:
        """Move past the current question once it has an answer."""

        if self._step != AssessmentStep.QUESTIONS:
            return self._step
        if self._answers[self._current_index] is None:
            return self._step
        if self._current_index < len(self._answers) - 1:
            self._current_index += 1
        else:
            self._current_index = len(self._answers)
            self._step = AssessmentStep.RESULT
        return self._step

    def result(self) -> AssessmentResult | None:
        if self._definition is None:
            return None
        return score_answers(self._definition, self._answers)

    def restart(self) -> bool:
        if self._step != AssessmentStep.RESULT:
            return False
        self._reset()
        return True

    def close(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._step = AssessmentStep.SELECTION
        self._definition = None
        self._answers = []
        self._current_index = 0
