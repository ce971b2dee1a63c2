from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDockWidget,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from ..community import CommunityBoard, MissionTracker, ProfileRepository
from ..companion_client import CompanionClient
from ..config import AppConfig
from ..ledger import CheckInLedger
from ..settings import get_float_setting, get_int_setting, get_str_setting
from ..storage import JsonFileStore
from .assessment_dialog import AssessmentDialog
from .breathing_dialog import BreathingDialog
from .companion_panel import CompanionPanel
from .dashboard import DashboardView
from .views import CommunityView, MissionsView, ResourcesView, RewardsView, SettingsView

logger = logging.getLogger(__name__)

NAV_ITEMS = ("Dashboard", "Resources", "Community", "Rewards", "Mindful Missions", "Settings")
SOS_TEXT = "If you are in immediate danger, please contact your local emergency services right now."


class MainWindow(QMainWindow):
    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        self._config = config
        settings = config.settings
        self.setWindowTitle("MindLink")
        self.resize(1100, 720)

        # 各データはキーごとに独立して保存する
        self._store = JsonFileStore(
            config.paths.data_dir,
            prefix=get_str_setting(settings, "storage.key_prefix", "mlk-"),
        )
        self._ledger = CheckInLedger(self._store)
        self._profiles = ProfileRepository(self._store)
        self._board = CommunityBoard(self._store)
        self._missions = MissionTracker(self._store)

        window_days = get_int_setting(settings, "checkin.streak_window_days", 30) or 30
        reveal_ms = get_int_setting(settings, "checkin.reveal_interval_ms", 30) or 30
        self._advance_delay_ms = get_int_setting(settings, "assessment.advance_delay_ms", 250) or 0
        self._breathing_args = (
            get_int_setting(settings, "breathing.duration_sec", 120) or 120,
            get_int_setting(settings, "breathing.ready_delay_ms", 2000) or 0,
            get_int_setting(settings, "breathing.close_delay_ms", 3000) or 0,
        )

        self._dashboard = DashboardView(self._ledger, window_days, reveal_ms, self)
        self._dashboard.breathing_requested.connect(self._open_breathing)
        self._dashboard.companion_requested.connect(self._open_companion)
        self._dashboard.assessment_requested.connect(self._open_assessment)
        self._settings_view = SettingsView(self._profiles, self._store, self)
        self._settings_view.profile_changed.connect(self._refresh_header)
        self._settings_view.data_cleared.connect(self._refresh_all)

        self._views: dict[str, QWidget] = {
            "Dashboard": self._dashboard,
            "Resources": ResourcesView(self),
            "Community": CommunityView(self._board, self._profiles, self),
            "Rewards": RewardsView(self._ledger, window_days, self),
            "Mindful Missions": MissionsView(self._missions, self),
            "Settings": self._settings_view,
        }
        self._stack = QStackedWidget(self)
        for name in NAV_ITEMS:
            self._stack.addWidget(self._views[name])

        self._nav = QListWidget(self)
        self._nav.addItems(NAV_ITEMS)
        self._nav.setFixedWidth(200)
        self._nav.currentRowChanged.connect(self._handle_nav)

        sos_button = QPushButton("☎ SOS", self)
        sos_button.clicked.connect(lambda: QMessageBox.warning(self, "SOS", SOS_TEXT))

        sidebar = QVBoxLayout()
        sidebar.addWidget(QLabel("<h2>💜 MindLink</h2>", self))
        sidebar.addWidget(self._nav, stretch=1)
        sidebar.addWidget(sos_button)

        self._handle_label = QLabel("", self)
        header = QHBoxLayout()
        header.addWidget(QLabel("<h1>Welcome Back!</h1>Let's make today a good day.", self))
        header.addStretch()
        header.addWidget(self._handle_label)

        content = QVBoxLayout()
        content.addLayout(header)
        content.addWidget(self._stack, stretch=1)

        root = QHBoxLayout()
        root.addLayout(sidebar)
        root.addLayout(content, stretch=1)
        central = QWidget(self)
        central.setLayout(root)
        self.setCentralWidget(central)

        client = CompanionClient(
            chat_url=get_str_setting(settings, "companion.chat_url", "") or None,
            image_url=get_str_setting(settings, "companion.image_url", "") or None,
            timeout=get_float_setting(settings, "companion.timeout_sec", 30.0),
        )
        self._companion = CompanionPanel(client, self)
        self._companion_dock = QDockWidget("AI Companion", self)
        self._companion_dock.setWidget(self._companion)
        self._companion_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self._companion.close_requested.connect(self._companion_dock.hide)
        self.addDockWidget(Qt.RightDockWidgetArea, self._companion_dock)
        self._companion_dock.hide()

        self._refresh_header()
        default_view = get_str_setting(settings, "app.default_view", "Dashboard")
        self._nav.setCurrentRow(NAV_ITEMS.index(default_view) if default_view in NAV_ITEMS else 0)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._dashboard.stop()
        self._companion.shutdown()
        super().closeEvent(event)

    # Internal helpers ---------------------------------------------------
    def _handle_nav(self, row: int) -> None:
        if row < 0:
            return
        view = self._views[NAV_ITEMS[row]]
        if view is not self._dashboard:
            # ダッシュボードから離れたら文字送りを止める
            self._dashboard.stop()
        self._stack.setCurrentWidget(view)
        refresh = getattr(view, "refresh", None)
        if callable(refresh):
            refresh()

    def _refresh_header(self) -> None:
        self._handle_label.setText(self._profiles.load().anonymous_handle)

    def _refresh_all(self) -> None:
        self._refresh_header()
        self._handle_nav(self._nav.currentRow())

    def _open_breathing(self) -> None:
        logger.debug("Opening breathing exercise")
        dialog = BreathingDialog(*self._breathing_args, parent=self)
        dialog.exec()

    def _open_assessment(self) -> None:
        # 毎回新しいダイアログを作るので前回の回答は残らない
        logger.debug("Opening self-assessment")
        dialog = AssessmentDialog(self._advance_delay_ms, self)
        dialog.exec()

    def _open_companion(self) -> None:
        self._companion_dock.show()
        self._companion_dock.raise_()
