from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from .config import AppConfig, configure_logging
from .ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # Qt アプリのエントリポイント。設定→ログ→メインウィンドウの順に生成して実行する。
    app = QApplication(sys.argv)
    config = AppConfig()
    config.paths.ensure()
    configure_logging(config)
    logger.info("Starting MindLink with data in %s", config.paths.data_dir)
    window = MainWindow(config)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
