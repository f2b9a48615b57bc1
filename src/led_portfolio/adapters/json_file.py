"""JSON file keyed store.

Provides ``JsonFileStore``, which keeps every key in a single JSON document
on disk.  Writes go to a temporary sibling file that is then renamed over
the original, so a reader never sees a half-written document.

Usage:
    from led_portfolio.adapters.json_file import JsonFileStore

    store = JsonFileStore("data/site.json")
    await store.set("projects", [])
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from led_portfolio.adapters.base import decode_value, encode_value

logger = logging.getLogger(__name__)


class JsonFileStore:
    """File-backed implementation of the ``KeyValueStore`` protocol.

    The document maps each key to the JSON *text* of its value, which keeps
    per-key decoding independent: one corrupt entry does not hide the rest.

    Args:
        path: Location of the JSON document.  Parent directories are created
            on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r") as f:
                data = json.load(f)
        except ValueError:
            logger.warning(f"Store file {self._path} is not valid JSON, treating as empty")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store file {self._path} does not hold an object, treating as empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(items, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self._path)

    async def get(self, key: str, default: Any = None) -> Any:
        return decode_value(key, self._load().get(key), default)

    async def set(self, key: str, value: Any) -> None:
        items = self._load()
        items[key] = encode_value(value)
        self._dump(items)

    async def delete(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._dump(items)

    async def keys(self) -> list[str]:
        return sorted(self._load())

    async def close(self) -> None:
        """No-op; files are opened per call."""
        pass
