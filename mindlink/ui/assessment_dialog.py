from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from ..assessment import ANSWER_OPTIONS, AssessmentResult, AssessmentStep, InstrumentId
from ..assessment.instruments import RECALL_PERIOD
from .assessment_flow import AssessmentFlow

_BAND_COLORS = {
    "green": "#22c55e",
    "yellow": "#eab308",
    "orange": "#f97316",
    "dark-orange": "#ea580c",
    "red": "#ef4444",
}


class AssessmentDialog(QDialog):
    """Modal questionnaire. Closing it discards the session; nothing is saved."""

    def __init__(self, advance_delay_ms: int = 250, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Health Check-in")
        self.setMinimumSize(560, 420)

        self._flow = AssessmentFlow(advance_delay_ms, self)
        self._flow.step_changed.connect(self._handle_step_changed)
        self._flow.question_changed.connect(self._render_question)
        self._flow.answer_recorded.connect(self._handle_answer_recorded)
        self._flow.result_ready.connect(self._render_result)

        self._stack = QStackedWidget(self)
        self._selection_page = self._build_selection_page()
        self._question_page = self._build_question_page()
        self._result_page = self._build_result_page()
        for page in (self._selection_page, self._question_page, self._result_page):
            self._stack.addWidget(page)

        layout = QVBoxLayout()
        layout.addWidget(self._stack)
        layout.setContentsMargins(16, 16, 16, 16)
        self.setLayout(layout)

    @property
    def flow(self) -> AssessmentFlow:
        return self._flow

    # Qt overrides -------------------------------------------------------
    def done(self, result: int) -> None:  # type: ignore[override]
        self._flow.close()
        super().done(result)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._flow.close()
        super().closeEvent(event)

    # Page builders ------------------------------------------------------
    def _build_selection_page(self) -> QWidget:
        page = QWidget(self)
        title = QLabel("<h2>Self-Assessment Check-in</h2>", page)
        intro = QLabel(
            "These tools can help you understand your feelings, but they are "
            "<b>NOT a medical diagnosis</b>.",
            page,
        )
        intro.setWordWrap(True)

        gad_button = QPushButton("Anxiety Check\nGAD-7 Scale (7 Questions)", page)
        gad_button.clicked.connect(lambda: self._flow.start(InstrumentId.GAD7))
        phq_button = QPushButton("Depression Check\nPHQ-9 Scale (9 Questions)", page)
        phq_button.clicked.connect(lambda: self._flow.start(InstrumentId.PHQ9))

        buttons = QHBoxLayout()
        buttons.addWidget(gad_button)
        buttons.addWidget(phq_button)

        notice = QLabel(
            "Your responses are private and stored only on this device. If you are in crisis, "
            "please contact emergency services or use the SOS button.",
            page,
        )
        notice.setWordWrap(True)
        notice.setStyleSheet("color: #b45309;")

        layout = QVBoxLayout()
        layout.addWidget(title)
        layout.addWidget(intro)
        layout.addLayout(buttons)
        layout.addStretch()
        layout.addWidget(notice)
        page.setLayout(layout)
        return page

    def _build_question_page(self) -> QWidget:
        page = QWidget(self)
        self._progress_label = QLabel("", page)
        recall_label = QLabel(RECALL_PERIOD, page)
        recall_label.setAlignment(Qt.AlignRight)
        header = QHBoxLayout()
        header.addWidget(self._progress_label)
        header.addWidget(recall_label)

        self._question_label = QLabel("", page)
        self._question_label.setWordWrap(True)
        self._question_label.setStyleSheet("font-size: 18px; font-weight: 600;")

        self._option_buttons: list[QPushButton] = []
        options_layout = QVBoxLayout()
        for option in ANSWER_OPTIONS:
            button = QPushButton(option.label, page)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, score=option.score: self._flow.answer(score))
            self._option_buttons.append(button)
            options_layout.addWidget(button)

        layout = QVBoxLayout()
        layout.addLayout(header)
        layout.addWidget(self._question_label)
        layout.addLayout(options_layout)
        layout.addStretch()
        page.setLayout(layout)
        return page

    def _build_result_page(self) -> QWidget:
        page = QWidget(self)
        self._score_label = QLabel("", page)
        self._score_label.setAlignment(Qt.AlignCenter)
        self._score_label.setStyleSheet("font-size: 40px; font-weight: 700;")
        self._band_label = QLabel("", page)
        self._band_label.setAlignment(Qt.AlignCenter)
        self._summary_label = QLabel("", page)
        self._summary_label.setWordWrap(True)
        self._next_steps_label = QLabel("", page)
        self._next_steps_label.setWordWrap(True)
        self._next_steps_label.setTextFormat(Qt.RichText)

        restart_button = QPushButton("Take another check-in", page)
        restart_button.clicked.connect(self._flow.restart)
        close_button = QPushButton("Close", page)
        close_button.clicked.connect(self.accept)
        buttons = QHBoxLayout()
        buttons.addWidget(restart_button)
        buttons.addWidget(close_button)

        layout = QVBoxLayout()
        layout.addWidget(self._score_label)
        layout.addWidget(self._band_label)
        layout.addWidget(self._summary_label)
        layout.addWidget(self._next_steps_label)
        layout.addStretch()
        layout.addLayout(buttons)
        page.setLayout(layout)
        return page

    # Signal handlers ----------------------------------------------------
    def _handle_step_changed(self, step: str) -> None:
        definition = self._flow.session.definition
        if step == AssessmentStep.SELECTION.value:
            self.setWindowTitle("Health Check-in")
            self._stack.setCurrentWidget(self._selection_page)
        elif step == AssessmentStep.QUESTIONS.value:
            if definition:
                self.setWindowTitle(definition.title)
            self._stack.setCurrentWidget(self._question_page)
        else:
            self._stack.setCurrentWidget(self._result_page)

    def _render_question(self, index: int) -> None:
        session = self._flow.session
        definition = session.definition
        if definition is None:
            return
        self._progress_label.setText(f"Question {index + 1} of {len(definition.questions)}")
        self._question_label.setText(f"“{definition.questions[index]}”")
        self._sync_option_buttons(session.current_answer)

    def _handle_answer_recorded(self, _index: int, score: int) -> None:
        self._sync_option_buttons(score)

    def _sync_option_buttons(self, selected: int | None) -> None:
        for option, button in zip(ANSWER_OPTIONS, self._option_buttons):
            button.setChecked(option.score == selected)

    def _render_result(self, result: AssessmentResult | None) -> None:
        if result is None:
            return
        color = _BAND_COLORS.get(result.band.color_tag, "#6366f1")
        self._score_label.setText(str(result.total_score))
        self._band_label.setText(f'<h3 style="color:{color}">{result.band.label}</h3>')
        self._summary_label.setText(result.summary)
        if result.next_steps:
            items = "".join(f"<li>{step}</li>" for step in result.next_steps)
            self._next_steps_label.setText(f"<b>Recommended Next Steps</b><ul>{items}</ul>")
        else:
            self._next_steps_label.clear()
