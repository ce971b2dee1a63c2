from __future__ import annotations

from PySide6.QtCore import QObject, Signal, Slot

from ..companion_client import CompanionClient


class CompanionWorker(QObject):
    finished = Signal(str)
    failed = Signal(str)

    def __init__(self, client: CompanionClient, prompt: str) -> None:
        super().__init__()
        self._client = client
        self._prompt = prompt

    @Slot()
    def run(self) -> None:
        try:
            # GUI スレッドを塞がないよう別スレッドで問い合わせる
            reply = self._client.chat(self._prompt)
        except Exception as exc:  # pragma: no cover - runtime safety
            self.failed.emit(str(exc))
            return
        self.finished.emit(reply)


class ImageWorker(QObject):
    finished = Signal(str)
    failed = Signal(str)

    def __init__(self, client: CompanionClient, prompt: str) -> None:
        super().__init__()
        self._client = client
        self._prompt = prompt

    @Slot()
    def run(self) -> None:
        try:
            image_url = self._client.generate_image(self._prompt)
        except Exception as exc:  # pragma: no cover - runtime safety
            self.failed.emit(str(exc))
            return
        self.finished.emit(image_url)
