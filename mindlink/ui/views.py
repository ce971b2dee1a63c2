from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QUrl, Signal
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QCheckBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..catalog import MINDFUL_MISSIONS, RESOURCES, Resource
from ..community import CommunityBoard, MissionTracker, ProfileRepository
from ..ledger import CheckInLedger
from ..models import local_today
from ..storage import KeyValueStore
from ..streaks import compute_badges, compute_streak

logger = logging.getLogger(__name__)


class ResourcesView(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._list = QListWidget(self)
        for resource in RESOURCES:
            item = QListWidgetItem(f"[{resource.kind}] {resource.title}  ({resource.length})")
            item.setData(Qt.UserRole, resource.id)
            self._list.addItem(item)
        self._list.itemActivated.connect(self._open_item)

        layout = QVBoxLayout()
        layout.addWidget(QLabel("<h2>Resources</h2>", self))
        layout.addWidget(self._list)
        self.setLayout(layout)

    def _open_item(self, item: QListWidgetItem) -> None:
        resource = next((r for r in RESOURCES if r.id == item.data(Qt.UserRole)), None)
        if resource is not None:
            self._open(resource)

    def _open(self, resource: Resource) -> None:
        if resource.kind == "video" and resource.src:
            # 動画はブラウザで開く
            QDesktopServices.openUrl(QUrl(resource.src))
            return
        QMessageBox.information(self, resource.title, resource.content or "")


class CommunityView(QWidget):
    def __init__(self, board: CommunityBoard, profiles: ProfileRepository, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._board = board
        self._profiles = profiles

        self._editor = QPlainTextEdit(self)
        self._editor.setPlaceholderText("Share something anonymously...")
        self._editor.setFixedHeight(80)
        post_button = QPushButton("Post", self)
        post_button.clicked.connect(self._handle_post)
        editor_row = QHBoxLayout()
        editor_row.addWidget(self._editor, stretch=1)
        editor_row.addWidget(post_button)

        self._list = QListWidget(self)
        self._list.itemDoubleClicked.connect(self._handle_upvote)

        layout = QVBoxLayout()
        layout.addWidget(QLabel("<h2>Community</h2>", self))
        layout.addLayout(editor_row)
        layout.addWidget(QLabel("Double-click a post to upvote it.", self))
        layout.addWidget(self._list, stretch=1)
        self.setLayout(layout)

    def refresh(self) -> None:
        self._list.clear()
        for post in self._board.posts():
            item = QListWidgetItem(f"▲ {post.up}   {post.handle}\n{post.text}")
            item.setData(Qt.UserRole, post.id)
            self._list.addItem(item)

    def _handle_post(self) -> None:
        handle = self._profiles.load().anonymous_handle
        if self._board.submit(handle, self._editor.toPlainText()) is None:
            return
        self._editor.clear()
        self.refresh()

    def _handle_upvote(self, item: QListWidgetItem) -> None:
        if self._board.upvote(item.data(Qt.UserRole)) is not None:
            self.refresh()


class RewardsView(QWidget):
    def __init__(self, ledger: CheckInLedger, streak_window_days: int = 30, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._ledger = ledger
        self._window_days = streak_window_days
        self._grid = QGridLayout()

        layout = QVBoxLayout()
        layout.addWidget(QLabel("<h2>Rewards</h2>", self))
        layout.addLayout(self._grid)
        layout.addStretch()
        self.setLayout(layout)

    def refresh(self) -> None:
        while self._grid.count():
            widget = self._grid.takeAt(0).widget()
            if widget is not None:
                widget.deleteLater()
        records = self._ledger.records()
        streak = compute_streak(records, local_today(), self._window_days)
        for index, badge in enumerate(compute_badges(streak, len(records))):
            label = QLabel(f"🏅\n{badge.label}\n{'Unlocked' if badge.unlocked else 'Locked'}", self)
            label.setAlignment(Qt.AlignCenter)
            label.setEnabled(badge.unlocked)
            self._grid.addWidget(label, index // 4, index % 4)


class MissionsView(QWidget):
    def __init__(self, tracker: MissionTracker, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._tracker = tracker
        self._buttons: dict[str, QPushButton] = {}

        layout = QVBoxLayout()
        layout.addWidget(QLabel("<h2>Mindful Missions</h2>", self))
        for mission in MINDFUL_MISSIONS:
            text = QLabel(mission.text, self)
            text.setWordWrap(True)
            button = QPushButton(self)
            button.clicked.connect(lambda _checked=False, mission_id=mission.id: self._complete(mission_id))
            self._buttons[mission.id] = button
            row = QHBoxLayout()
            row.addWidget(text, stretch=1)
            row.addWidget(button)
            layout.addLayout(row)
        layout.addStretch()
        self.setLayout(layout)

    def refresh(self) -> None:
        done = set(self._tracker.completed())
        for mission_id, button in self._buttons.items():
            completed = mission_id in done
            button.setText("✓ Completed" if completed else "Mark Complete")
            button.setDisabled(completed)

    def _complete(self, mission_id: str) -> None:
        self._tracker.complete(mission_id)
        self.refresh()


class SettingsView(QWidget):
    profile_changed = Signal()
    data_cleared = Signal()

    def __init__(self, profiles: ProfileRepository, store: KeyValueStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._profiles = profiles
        self._store = store

        self._handle_input = QLineEdit(self)
        self._handle_input.editingFinished.connect(self._save_handle)
        regenerate_button = QPushButton("Randomize", self)
        regenerate_button.clicked.connect(self._regenerate_handle)
        handle_row = QHBoxLayout()
        handle_row.addWidget(self._handle_input, stretch=1)
        handle_row.addWidget(regenerate_button)

        self._notifications = QCheckBox("Enable Reminders", self)
        self._notifications.toggled.connect(self._save_notifications)

        clear_button = QPushButton("Clear All Data", self)
        clear_button.setStyleSheet("background-color: #dc2626; color: white;")
        clear_button.clicked.connect(self._clear_all)

        layout = QVBoxLayout()
        layout.addWidget(QLabel("<h2>Settings</h2>", self))
        layout.addWidget(QLabel("<b>Anonymous Handle</b>", self))
        layout.addLayout(handle_row)
        layout.addWidget(self._notifications)
        layout.addWidget(QLabel('<b style="color:#dc2626">Danger Zone</b>', self))
        layout.addWidget(clear_button)
        layout.addStretch()
        self.setLayout(layout)

    def refresh(self) -> None:
        profile = self._profiles.load()
        self._handle_input.setText(profile.anonymous_handle)
        self._notifications.blockSignals(True)
        self._notifications.setChecked(profile.notifications)
        self._notifications.blockSignals(False)

    def _save_handle(self) -> None:
        profile = self._profiles.set_handle(self._handle_input.text())
        self._handle_input.setText(profile.anonymous_handle)
        self.profile_changed.emit()

    def _regenerate_handle(self) -> None:
        profile = self._profiles.regenerate_handle()
        self._handle_input.setText(profile.anonymous_handle)
        self.profile_changed.emit()

    def _save_notifications(self, enabled: bool) -> None:
        self._profiles.set_notifications(enabled)

    def _clear_all(self) -> None:
        answer = QMessageBox.question(
            self,
            "Clear All Data",
            "Are you sure you want to delete all your local data? This cannot be undone.",
        )
        if answer != QMessageBox.Yes:
            return
        self._store.clear()
        logger.info("All local data cleared by user")
        self.refresh()
        self.data_cleared.emit()
