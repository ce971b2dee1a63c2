from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialog, QLabel, QPushButton, QVBoxLayout, QWidget

from .breathing import BreathingSession, format_clock


class BreathingDialog(QDialog):
    def __init__(
        self,
        duration_sec: int = 120,
        ready_delay_ms: int = 2000,
        close_delay_ms: int = 3000,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Breathing Exercise")
        self.setMinimumSize(360, 280)

        self._session = BreathingSession(duration_sec, ready_delay_ms, close_delay_ms, parent=self)
        self._session.instruction_changed.connect(self._handle_instruction)
        self._session.time_left_changed.connect(self._handle_time_left)
        self._session.close_requested.connect(self.accept)

        self._instruction_label = QLabel(self._session.instruction, self)
        self._instruction_label.setAlignment(Qt.AlignCenter)
        self._instruction_label.setStyleSheet("font-size: 26px; font-weight: 700;")

        self._clock_label = QLabel(format_clock(duration_sec), self)
        self._clock_label.setAlignment(Qt.AlignCenter)
        self._clock_label.setStyleSheet("font-size: 18px; color: #64748b;")

        end_button = QPushButton("End Early", self)
        end_button.clicked.connect(self.reject)

        layout = QVBoxLayout()
        layout.addStretch()
        layout.addWidget(self._instruction_label)
        layout.addWidget(self._clock_label)
        layout.addStretch()
        layout.addWidget(end_button)
        self.setLayout(layout)

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        if not self._session.is_active:
            self._session.start()

    def done(self, result: int) -> None:  # type: ignore[override]
        self._session.stop()
        super().done(result)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._session.stop()
        super().closeEvent(event)

    def _handle_instruction(self, text: str) -> None:
        self._instruction_label.setText(text)

    def _handle_time_left(self, seconds: int) -> None:
        self._clock_label.setText(format_clock(seconds))
