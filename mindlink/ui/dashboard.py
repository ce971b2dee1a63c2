from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QStackedLayout,
    QVBoxLayout,
    QWidget,
)

from ..catalog import CHECKIN_PROMPT, checkin_thanks_html
from ..ledger import CheckInLedger
from ..models import local_today
from ..streaks import compute_streak
from .typed_reveal import TypedTextReveal


class CheckInCard(QFrame):
    checked_in = Signal()

    def __init__(self, ledger: CheckInLedger, reveal_interval_ms: int = 30, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._ledger = ledger
        self.setFrameShape(QFrame.StyledPanel)

        self._reveal = TypedTextReveal(CHECKIN_PROMPT, reveal_interval_ms, self)

        # 未チェックイン: プロンプト + 入力欄
        self._prompt_page = QWidget(self)
        self._prompt_label = QLabel("", self._prompt_page)
        self._prompt_label.setWordWrap(True)
        self._prompt_label.setStyleSheet("font-size: 16px;")
        self._reveal.text_changed.connect(self._prompt_label.setText)

        self._note_input = QLineEdit(self._prompt_page)
        self._note_input.setPlaceholderText("How are you feeling?")
        self._note_input.returnPressed.connect(self._handle_submit)
        submit_button = QPushButton("Check in", self._prompt_page)
        submit_button.clicked.connect(self._handle_submit)
        form = QHBoxLayout()
        form.addWidget(self._note_input, stretch=1)
        form.addWidget(submit_button)

        prompt_layout = QVBoxLayout()
        prompt_layout.addWidget(self._prompt_label)
        prompt_layout.addLayout(form)
        self._prompt_page.setLayout(prompt_layout)

        # チェックイン済み
        self._done_page = QWidget(self)
        self._done_label = QLabel("", self._done_page)
        self._done_label.setWordWrap(True)
        done_layout = QVBoxLayout()
        done_layout.addWidget(self._done_label)
        self._done_page.setLayout(done_layout)

        self._stack = QStackedLayout()
        self._stack.addWidget(self._prompt_page)
        self._stack.addWidget(self._done_page)
        self.setLayout(self._stack)

    def refresh(self) -> None:
        today = local_today()
        records = self._ledger.records()
        today_record = next((r for r in records if r.date == today.isoformat()), None)
        self._reveal.set_checked_in(today_record is not None)
        if today_record is None:
            self._stack.setCurrentWidget(self._prompt_page)
            return
        self._done_label.setText(checkin_thanks_html(today_record.note))
        self._stack.setCurrentWidget(self._done_page)

    def stop(self) -> None:
        self._reveal.reset()

    def _handle_submit(self) -> None:
        note = self._note_input.text()
        if self._ledger.submit(note) is None:
            return
        self._note_input.clear()
        self.refresh()
        self.checked_in.emit()


class DashboardView(QWidget):
    breathing_requested = Signal()
    companion_requested = Signal()
    assessment_requested = Signal()
    checked_in = Signal()

    def __init__(
        self,
        ledger: CheckInLedger,
        streak_window_days: int = 30,
        reveal_interval_ms: int = 30,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._ledger = ledger
        self._window_days = streak_window_days

        self._check_in_card = CheckInCard(ledger, reveal_interval_ms, self)
        self._check_in_card.checked_in.connect(self._handle_checked_in)

        self._streak_label = QLabel("", self)
        self._streak_label.setStyleSheet("font-size: 24px; font-weight: 700;")
        streak_caption = QLabel("Your current streak", self)

        breathing_button = QPushButton("🌬 Breathing Exercise\n2 min to calm your mind", self)
        breathing_button.clicked.connect(self.breathing_requested)
        companion_button = QPushButton("💬 AI Companion\nTalk through your thoughts", self)
        companion_button.clicked.connect(self.companion_requested)
        assessment_button = QPushButton("🩺 Self-Assessment\nA quick, private check on anxiety or mood", self)
        assessment_button.clicked.connect(self.assessment_requested)

        side = QVBoxLayout()
        side.addWidget(streak_caption)
        side.addWidget(self._streak_label)
        side.addWidget(breathing_button)
        side.addWidget(companion_button)
        side.addStretch()

        top = QHBoxLayout()
        top.addWidget(self._check_in_card, stretch=2)
        top.addLayout(side, stretch=1)

        layout = QVBoxLayout()
        layout.addLayout(top)
        layout.addWidget(assessment_button)
        layout.addStretch()
        self.setLayout(layout)

    def refresh(self) -> None:
        self._check_in_card.refresh()
        streak = compute_streak(self._ledger.records(), local_today(), self._window_days)
        self._streak_label.setText(f"{streak} {'day' if streak == 1 else 'days'} 🔥")

    def stop(self) -> None:
        self._check_in_card.stop()

    def _handle_checked_in(self) -> None:
        self.refresh()
        self.checked_in.emit()
