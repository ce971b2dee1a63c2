from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

GET_READY = "Get ready..."
BREATHE_IN = "Breathe In..."
BREATHE_OUT = "Breathe Out..."
FINISHED = "Finished! Well done."

BREATH_CYCLE_SEC = 8


def instruction_for(time_left: int) -> str:
    if time_left <= 0:
        return FINISHED
    # 8 秒周期: 前半 4 秒で吸って、後半 4 秒で吐く
    return BREATHE_IN if time_left % BREATH_CYCLE_SEC >= BREATH_CYCLE_SEC // 2 else BREATHE_OUT


def format_clock(seconds: int) -> str:
    seconds = max(0, seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


class BreathingSession(QObject):
    """Guided breathing countdown with a short lead-in and an auto-close delay."""

    time_left_changed = Signal(int)
    instruction_changed = Signal(str)
    finished = Signal()
    close_requested = Signal()

    def __init__(
        self,
        duration_sec: int = 120,
        ready_delay_ms: int = 2000,
        close_delay_ms: int = 3000,
        tick_ms: int = 1000,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._duration = max(1, duration_sec)
        self._time_left = self._duration
        self._instruction = GET_READY
        self._ready = False

        self._ready_timer = QTimer(self)
        self._ready_timer.setSingleShot(True)
        self._ready_timer.setInterval(max(0, ready_delay_ms))
        self._ready_timer.timeout.connect(self._handle_ready)

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(max(1, tick_ms))
        self._tick_timer.timeout.connect(self._tick)

        self._close_timer = QTimer(self)
        self._close_timer.setSingleShot(True)
        self._close_timer.setInterval(max(0, close_delay_ms))
        self._close_timer.timeout.connect(self.close_requested)

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def instruction(self) -> str:
        return self._instruction

    @property
    def is_active(self) -> bool:
        return any(timer.isActive() for timer in (self._ready_timer, self._tick_timer, self._close_timer))

    def start(self) -> None:
        self.stop()
        self._time_left = self._duration
        self._ready = False
        self.time_left_changed.emit(self._time_left)
        self._set_instruction(GET_READY)
        self._ready_timer.start()
        self._tick_timer.start()

    def stop(self) -> None:
        self._ready_timer.stop()
        self._tick_timer.stop()
        self._close_timer.stop()

    def _handle_ready(self) -> None:
        self._ready = True
        self._set_instruction(BREATHE_IN)

    def _tick(self) -> None:
        self._time_left = max(0, self._time_left - 1)
        self.time_left_changed.emit(self._time_left)
        if self._time_left == 0:
            self._tick_timer.stop()
            self._ready_timer.stop()
            self._set_instruction(FINISHED)
            self.finished.emit()
            self._close_timer.start()
            return
        if self._ready:
            self._set_instruction(instruction_for(self._time_left))

    def _set_instruction(self, text: str) -> None:
        if text == self._instruction:
            return
        self._instruction = text
        self.instruction_changed.emit(text)
