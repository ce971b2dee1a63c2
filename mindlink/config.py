from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from .settings import get_str_setting, load_settings, resolve_path_setting

HOME_ENV_VAR = "MINDLINK_HOME"
LOG_FILENAME = "mindlink.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def default_root() -> Path:
    override = os.getenv(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / ".mindlink").resolve()


@dataclass(frozen=True)
class AppPaths:
    root: Path
    data_dir: Path
    log_dir: Path

    def ensure(self) -> None:
        for path in (self.root, self.data_dir, self.log_dir):
            path.mkdir(parents=True, exist_ok=True)


class AppConfig:
    """Resolved settings and on-disk locations for one installation."""

    def __init__(self, root: Path | None = None, settings: dict[str, Any] | None = None) -> None:
        root = Path(root).expanduser().resolve() if root else default_root()
        self.settings: dict[str, Any] = settings if settings is not None else load_settings(root)
        data_dir = resolve_path_setting(self.settings, "storage.data_dir", root) or root / "data"
        self.paths = AppPaths(root=root, data_dir=data_dir, log_dir=root / "logs")


def configure_logging(config: AppConfig) -> None:
    level_name = get_str_setting(config.settings, "app.log_level", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    try:
        config.paths.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.paths.log_dir / LOG_FILENAME,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
    except OSError as exc:
        # ログ出力先が作れなくてもアプリ自体は起動させる
        root_logger.warning("File logging disabled: %s", exc)
        return
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
