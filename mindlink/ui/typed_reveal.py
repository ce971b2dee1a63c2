from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal


class TypedTextReveal(QObject):
    """
    Reveals a message one character per tick while the user has not checked in.

    The reveal restarts from an empty string each time the gate switches to
    "not checked in yet", and stops for good once the whole message is shown or
    the user checks in.
    """

    text_changed = Signal(str)
    finished = Signal()

    def __init__(self, message: str, interval_ms: int = 30, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._message = message
        self._revealed = 0
        self._checked_in: bool | None = None

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, interval_ms))
        self._timer.timeout.connect(self._tick)

    @property
    def message(self) -> str:
        return self._message

    @property
    def displayed_text(self) -> str:
        return self._message[: self._revealed]

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    @property
    def is_complete(self) -> bool:
        return self._revealed >= len(self._message)

    def set_checked_in(self, checked_in: bool) -> None:
        checked_in = bool(checked_in)
        if checked_in == self._checked_in:
            return
        self._checked_in = checked_in
        if checked_in:
            self.stop()
            return
        self._restart()

    def stop(self) -> None:
        self._timer.stop()

    def reset(self) -> None:
        """Stop and forget the gate, so the next ``set_checked_in(False)`` starts over."""

        self._timer.stop()
        self._checked_in = None

    def _restart(self) -> None:
        self._timer.stop()
        self._revealed = 0
        self.text_changed.emit("")
        if self._message:
            self._timer.start()
        else:
            self.finished.emit()

    def _tick(self) -> None:
        if self._revealed >= len(self._message):
            self._timer.stop()
            return
        self._revealed += 1
        self.text_changed.emit(self.displayed_text)
        if self._revealed >= len(self._message):
            self._timer.stop()
            self.finished.emit()
