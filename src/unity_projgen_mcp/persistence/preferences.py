"""User preference stores.

Preferences are integers keyed by name and survive process restarts. The JSON
store rewrites its whole file on every set; the file is tiny.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from ..errors import PreferenceStoreError

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    """Opaque integer key-value store."""

    def get_int(self, key: str, default: int = 0) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...


class MemoryPreferenceStore:
    """Preference store kept in process memory."""

    def __init__(self, values: dict[str, int] | None = None):
        self._values: dict[str, int] = dict(values or {})

    def get_int(self, key: str, default: int = 0) -> int:
        return self._values.get(key, default)

    def set_int(self, key: str, value: int) -> None:
        self._values[key] = int(value)


class JsonPreferenceStore:
    """Preference store backed by a JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise PreferenceStoreError(f"Malformed preference file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PreferenceStoreError(f"Preference file {self.path} is not a JSON object")
        return data

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._load().get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        return value

    def set_int(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = int(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug(f"Preference {key}={int(value)} saved to {self.path}")
