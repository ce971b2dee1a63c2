from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from ..assessment import AssessmentSession, AssessmentStep, InstrumentId


class AssessmentFlow(QObject):
    """
    Drives an :class:`AssessmentSession` for the assessment dialog.

    An answer is recorded immediately; moving on to the next question waits
    ``advance_delay_ms`` so the chosen option can highlight first. Answering
    again during the delay overwrites the answer and restarts the wait, so at
    most one move is ever pending.
    """

    step_changed = Signal(str)
    question_changed = Signal(int)
    answer_recorded = Signal(int, int)  # (question index, score)
    result_ready = Signal(object)  # AssessmentResult
    closed = Signal()

    def __init__(self, advance_delay_ms: int = 250, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = AssessmentSession()

        self._advance_timer = QTimer(self)
        self._advance_timer.setSingleShot(True)
        self._advance_timer.setInterval(max(0, advance_delay_ms))
        self._advance_timer.timeout.connect(self._advance)

    @property
    def session(self) -> AssessmentSession:
        return self._session

    @property
    def step(self) -> AssessmentStep:
        return self._session.step

    @property
    def is_advance_pending(self) -> bool:
        return self._advance_timer.isActive()

    def start(self, definition_id: str | InstrumentId) -> bool:
        if not self._session.start(definition_id):
            return False
        self.step_changed.emit(self._session.step.value)
        self.question_changed.emit(self._session.current_index)
        return True

    def answer(self, score: int) -> bool:
        index = self._session.current_index
        if not self._session.answer(score):
            return False
        self.answer_recorded.emit(index, score)
        self._advance_timer.start()
        return True

    def restart(self) -> bool:
        self._advance_timer.stop()
        if not self._session.restart():
            return False
        self.step_changed.emit(self._session.step.value)
        return True

    def close(self) -> None:
        # 閉じたセッションに対してタイマーが発火しないよう必ず止める
        self._advance_timer.stop()
        self._session.close()
        self.closed.emit()

    def _advance(self) -> None:
        step = self._session.advance()
        if step == AssessmentStep.RESULT:
            self.step_changed.emit(step.value)
            self.result_ready.emit(self._session.result())
        elif step == AssessmentStep.QUESTIONS:
            self.question_changed.emit(self._session.current_index)
