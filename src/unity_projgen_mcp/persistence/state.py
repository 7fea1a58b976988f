"""Persisted project generation state."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..errors import StateFileError

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "persisted_state.json"


class PersistedState:
    """Watermark of the last project file write, kept across restarts.

    With no path the state lives only in memory.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        self._last_write: float | None = None

    @property
    def last_write(self) -> float:
        """POSIX timestamp of the last recorded write, 0.0 if none."""
        if self._last_write is None:
            self._last_write = self._load()
        return self._last_write

    @last_write.setter
    def last_write(self, value: float) -> None:
        self._last_write = float(value)
        self._save()

    def _load(self) -> float:
        if self.path is None or not self.path.exists():
            return 0.0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise StateFileError(f"Malformed state file {self.path}: {e}") from e
        value = data.get("lastWrite", 0.0) if isinstance(data, dict) else 0.0
        return float(value) if isinstance(value, (int, float)) else 0.0

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"lastWrite": self._last_write}, indent=2), encoding="utf-8"
        )
        logger.debug(f"Persisted lastWrite={self._last_write} to {self.path}")
