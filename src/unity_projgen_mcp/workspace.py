"""Project workspace: one project root with its catalog and tracker."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .catalog import AssemblyCatalog, SolutionFileFilter
from .config import PluginSettings
from .persistence import JsonPreferenceStore, PersistedState, PreferenceStore
from .persistence.state import STATE_FILE_NAME
from .sources import EditorSnapshot
from .sources.snapshot import SNAPSHOT_DIRECTORY
from .tracking import LastWriteTracker

logger = logging.getLogger(__name__)


class Workspace:
    """Wires the catalog and the tracker to a project's on-disk data.

    The snapshot and persisted state live under
    ``<root>/Library/ProjectGeneration``; preferences are per-user.
    """

    def __init__(
        self,
        project_root: str | Path,
        settings: PluginSettings | None = None,
        preferences: PreferenceStore | None = None,
    ):
        self.project_root = Path(os.path.abspath(project_root))
        self.settings = settings or PluginSettings.from_env()
        self.snapshot = EditorSnapshot.for_project(self.project_root)
        self.preferences = preferences or JsonPreferenceStore(self.settings.preferences_path)
        self.state = PersistedState(self.project_root / SNAPSHOT_DIRECTORY / STATE_FILE_NAME)
        self.catalog = AssemblyCatalog(
            compilation=self.snapshot,
            packages=self.snapshot,
            assets=self.snapshot,
            plugins=self.snapshot,
            preferences=self.preferences,
            settings=self.settings,
            project_root=self.project_root,
        )
        self.tracker = LastWriteTracker(self.state, self.settings, root=self.project_root)
        self.file_filter = SolutionFileFilter(self.catalog)
        logger.debug(f"Workspace created for {self.project_root}")

    def reload(self) -> None:
        """Re-read the snapshot and forget cached package lookups."""
        self.snapshot.reload()
        self.catalog.reset_package_info_cache()
        logger.info(f"Reloaded compilation snapshot for {self.project_root}")
