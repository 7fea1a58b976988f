"""Detection of external changes to generated project files.

Generated ``*.csproj`` files and the ``<root-name>.sln`` solution always live
directly in the project root, so only that directory is scanned.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

from ..config import LoggingLevel, PluginSettings
from ..persistence import PersistedState

logger = logging.getLogger(__name__)

PROJECT_FILE_EXTENSION: Final[str] = ".csproj"
SOLUTION_FILE_EXTENSION: Final[str] = ".sln"


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


class LastWriteTracker:
    """Compares generated project files against the persisted watermark.

    Args:
        state: Store holding the last-write watermark
        settings: Plugin settings (file tracking switch, logging level)
        root: Project root; defaults to the current working directory at call time
    """

    def __init__(
        self,
        state: PersistedState,
        settings: PluginSettings | None = None,
        root: str | Path | None = None,
    ):
        self.state = state
        self.settings = settings or PluginSettings()
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        return Path(os.path.abspath(self._root or Path.cwd()))

    def solution_file_name(self) -> str:
        return self.root.name + SOLUTION_FILE_EXTENSION

    def candidate_files(self) -> list[Path]:
        """Project files in the root plus the solution path, present or not."""
        root = self.root
        files = sorted(
            p
            for p in root.iterdir()
            if p.is_file() and p.suffix.lower() == PROJECT_FILE_EXTENSION
        )
        files.append(root / self.solution_file_name())
        return files

    def has_last_write_time_changed(self) -> bool:
        """Whether any generated file is newer than the last recorded write."""
        if not self.settings.track_project_file_changes:
            if self.settings.logging_level >= LoggingLevel.VERBOSE:
                logger.debug("Project files tracking is disabled.")
            return False

        if not self.root.is_dir():
            logger.debug(f"Project root {self.root} does not exist")
            return False

        last_write = self.state.last_write
        for path in self.candidate_files():
            modified = _mtime(path)
            if modified is not None and modified > last_write:
                logger.debug(f"{path.name} changed since last write ({modified} > {last_write})")
                return True
        return False

    def update_last_write_if_needed(self, path: str | Path) -> None:
        """Advance the watermark if ``path`` is a generated file in the root."""
        root = self.root
        file = Path(path)
        if not file.is_absolute():
            file = root / file
        file = Path(os.path.abspath(file))

        if str(file.parent).casefold() != str(root).casefold():
            return

        is_project = file.suffix.casefold() == PROJECT_FILE_EXTENSION
        is_solution = file.name.casefold() == self.solution_file_name().casefold()
        if not (is_project or is_solution):
            return

        modified = _mtime(file)
        if modified is None:
            return
        self.state.last_write = modified
        logger.debug(f"Recorded write of {file.name} at {modified}")
