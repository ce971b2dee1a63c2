from __future__ import annotations

import html
import logging

import markdown
from PySide6.QtCore import QThread, Signal
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from ..catalog import COMPANION_GREETING
from ..companion_client import CompanionClient
from ..models import ChatMessage
from .workers import CompanionWorker, ImageWorker

logger = logging.getLogger(__name__)

ERROR_REPLY = "Oops! Please try again."
IMAGE_ERROR_REPLY = "Failed to generate image."


class CompanionPanel(QWidget):
    """Chat with the companion service. History lives only in memory."""

    close_requested = Signal()

    def __init__(self, client: CompanionClient, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._client = client
        self._messages: list[ChatMessage] = []
        self._is_busy = False
        self._thread: QThread | None = None
        self._worker: CompanionWorker | ImageWorker | None = None

        title = QLabel("<b>AI Companion</b>", self)
        close_button = QPushButton("✕", self)
        close_button.setFixedWidth(32)
        close_button.clicked.connect(self.close_requested)
        header = QHBoxLayout()
        header.addWidget(title)
        header.addStretch()
        header.addWidget(close_button)

        self._transcript = QTextEdit(self)
        self._transcript.setReadOnly(True)

        self._status_label = QLabel("", self)
        self._status_label.setStyleSheet("color: #666666;")

        self._input = QLineEdit(self)
        self._input.setPlaceholderText("Type a message...")
        self._input.returnPressed.connect(self._handle_send)

        self._image_button = QPushButton("🖼", self)
        self._image_button.setToolTip("Generate an image from the prompt")
        self._image_button.clicked.connect(self._handle_image)
        self._send_button = QPushButton("Send", self)
        self._send_button.clicked.connect(self._handle_send)

        input_row = QHBoxLayout()
        input_row.addWidget(self._input, stretch=1)
        input_row.addWidget(self._image_button)
        input_row.addWidget(self._send_button)

        layout = QVBoxLayout()
        layout.addLayout(header)
        layout.addWidget(self._transcript, stretch=1)
        layout.addWidget(self._status_label)
        layout.addLayout(input_row)
        layout.setContentsMargins(8, 8, 8, 8)
        self.setLayout(layout)

        self._append(ChatMessage(role="ai", text=COMPANION_GREETING))
        self._refresh_controls()

    def shutdown(self) -> None:
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait(2000)

    # Internal helpers ---------------------------------------------------
    def _handle_send(self) -> None:
        text = self._input.text().strip()
        if not text or self._is_busy:
            return
        self._input.clear()
        self._append(ChatMessage(role="user", text=text))
        worker = CompanionWorker(self._client, text)
        worker.finished.connect(self._handle_reply)
        worker.failed.connect(self._handle_reply_failed)
        self._run_worker(worker, "Thinking...")

    def _handle_image(self) -> None:
        prompt = self._input.text().strip()
        if not prompt or self._is_busy:
            return
        self._input.clear()
        self._append(ChatMessage(role="user", text=f"Generate image: {prompt}"))
        worker = ImageWorker(self._client, prompt)
        worker.finished.connect(self._handle_image_ready)
        worker.failed.connect(self._handle_image_failed)
        self._run_worker(worker, "Generating image...")

    def _run_worker(self, worker: CompanionWorker | ImageWorker, status: str) -> None:
        thread = QThread(self)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.failed.connect(thread.quit)
        thread.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.finished.connect(self._clear_thread)
        self._thread = thread
        self._worker = worker
        self._set_busy(True, status)
        thread.start()

    def _clear_thread(self) -> None:
        self._thread = None
        self._worker = None

    def _handle_reply(self, text: str) -> None:
        self._append(ChatMessage(role="ai", text=text))
        self._set_busy(False)

    def _handle_reply_failed(self, error: str) -> None:
        logger.warning("Companion chat failed: %s", error)
        self._append(ChatMessage(role="ai", text=ERROR_REPLY))
        self._set_busy(False)

    def _handle_image_ready(self, image_url: str) -> None:
        self._append(ChatMessage(role="ai", text="Here's your image:", image_url=image_url))
        self._set_busy(False)

    def _handle_image_failed(self, error: str) -> None:
        logger.warning("Image generation failed: %s", error)
        self._append(ChatMessage(role="ai", text=IMAGE_ERROR_REPLY))
        self._set_busy(False)

    def _set_busy(self, is_busy: bool, status_text: str | None = None) -> None:
        self._is_busy = is_busy
        self._status_label.setText(status_text or "")
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        self._send_button.setDisabled(self._is_busy)
        self._image_button.setDisabled(self._is_busy or not self._client.can_generate_images)
        self._input.setReadOnly(self._is_busy)

    def _append(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self._transcript.moveCursor(QTextCursor.End)
        self._transcript.insertHtml(self._format_message(message))
        self._transcript.insertPlainText("\n")
        self._transcript.moveCursor(QTextCursor.End)

    def _format_message(self, message: ChatMessage) -> str:
        if message.role == "user":
            label = "👤 You"
            color = "#4f46e5"
            content = html.escape(message.text).replace("\n", "<br>")
        else:
            label = "🌱 Companion"
            color = "#16a34a"
            # 返答は Markdown として HTML に変換する
            content = markdown.markdown(message.text, extensions=["fenced_code", "nl2br"])
            if content.startswith("<p>") and content.endswith("</p>"):
                content = content[3:-4]
        if message.image_url:
            url = html.escape(message.image_url, quote=True)
            content += f'<br><a href="{url}">{url}</a>'
        return f'<div style="margin-bottom: 10px;"><b style="color:{color}">{label}</b><br>{content}</div>'
