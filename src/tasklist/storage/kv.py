# src/tasklist/storage/kv.py

"""
Key-value storage backends.

Both behave like browser localStorage: string keys, string values, every
set_item() is visible to the next get_item() immediately.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
DARK_MODE_KEY = "darkMode"


class MemoryStorage:
    """Volatile storage for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """
    Storage persisted as a single JSON object {key: string value} on disk.

    Every write rewrites the whole file through a temp file + os.replace(),
    so readers never see a half-written file.

    An unreadable file is logged and treated as empty; the next write
    replaces it. A failed write raises and leaves both the file and the
    in-memory view as they were.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._items: dict[str, str] = self._read()
        logger.info("JsonFileStorage ready path=%s keys=%s", self._path, len(self._items))

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Storage file %s is unreadable; starting empty.", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object; starting empty.", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self, items: dict[str, str]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(items, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        items = {**self._items, key: str(value)}
        self._flush(items)
        self._items = items
        logger.debug("Stored key=%s chars=%s", key, len(value))

    def remove_item(self, key: str) -> None:
        if key not in self._items:
            return
        items = {k: v for k, v in self._items.items() if k != key}
        self._flush(items)
        self._items = items
