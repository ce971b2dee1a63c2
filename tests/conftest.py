from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

from mindlink.storage import JsonFileStore, MemoryStore


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def wait(qapp) -> Callable[[int], None]:
    """Run the Qt event loop for ``ms`` milliseconds."""

    def _wait(ms: int) -> None:
        loop = QEventLoop()
        QTimer.singleShot(ms, loop.quit)
        loop.exec()

    return _wait


@pytest.fixture()
def wait_until(qapp) -> Callable[..., bool]:
    def _wait_until(predicate: Callable[[], bool], timeout_ms: int = 2000) -> bool:
        deadline = time.monotonic() + timeout_ms / 1000
        while time.monotonic() < deadline:
            if predicate():
                return True
            loop = QEventLoop()
            QTimer.singleShot(5, loop.quit)
            loop.exec()
        return predicate()

    return _wait_until


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def file_store(tmp_path: Path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "data")
