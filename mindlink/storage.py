"""
Local-first key/value persistence.

Every piece of shared application state (profile, moods, posts, missions)
lives under its own key so that writing one never risks clobbering another.
"""

from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "mlk-"


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2) + "\n"


class MemoryStore:
    """In-memory store with the same contract as :class:`JsonFileStore`.

    Values are kept as JSON text so callers never share mutable objects
    with the store.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._raw: dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._raw.get(key)
        if raw is None:
            return deepcopy(default)
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding corrupt value for key %r", key)
            return deepcopy(default)

    def set(self, key: str, value: Any) -> None:
        self._raw[key] = _encode(value)

    def delete(self, key: str) -> None:
        self._raw.pop(key, None)

    def clear(self) -> None:
        self._raw.clear()

    def keys(self) -> list[str]:
        return sorted(self._raw)


class JsonFileStore:
    """One JSON file per key inside ``data_dir``.

    ``set`` writes through immediately: temp file, flush + fsync, then
    ``os.replace`` onto the target. ``get`` never raises for missing,
    unreadable or corrupt files; it returns the caller's default instead.
    """

    def __init__(self, data_dir: Path, prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._data_dir = Path(data_dir)
        self._prefix = prefix

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._data_dir / f"{self._prefix}{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self.path_for(key)
        if not path.exists():
            return deepcopy(default)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s: %s", path, exc)
            return deepcopy(default)
        if not text.strip():
            return deepcopy(default)
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            # 壊れたデータは利用者に見せず既定値で置き換える
            logger.warning("Corrupt data in %s, using default", path)
            return deepcopy(default)

    def set(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        payload = _encode(value)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, path)
        try:
            os.chmod(path, 0o600)
        except OSError:
            pass

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return

    def clear(self) -> None:
        if not self._data_dir.exists():
            return
        for path in self._data_dir.glob(f"{self._prefix}*.json"):
            try:
                path.unlink()
            except OSError as exc:
                logger.warning("Failed to remove %s: %s", path, exc)
        logger.info("Cleared local data in %s", self._data_dir)
