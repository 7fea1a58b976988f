"""Editor compilation snapshot.

The editor exports the state of its compilation pipeline, package manager and
asset database to a single JSON document:

    {
        "editorAssemblies": [{"name": "Assembly-CSharp", "sourceFiles": [...], ...}],
        "playerAssemblies": [...],
        "packages": [{"name": "com.unity.test-framework", "source": "registry", ...}],
        "assetPaths": ["Assets/Scripts/Player.cs", ...],
        "plugins": [{"assetPath": "Assets/Analyzers/Foo.dll", "labels": ["RoslynAnalyzer"]}]
    }

EditorSnapshot serves every host source protocol from that document.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..catalog.models import (
    Assembly,
    AssembliesType,
    PackageInfo,
    PluginInfo,
    ResponseFileData,
)
from ..errors import SnapshotError
from .response_file import parse_response_file

logger = logging.getLogger(__name__)

SNAPSHOT_DIRECTORY = Path("Library") / "ProjectGeneration"
SNAPSHOT_FILE_NAME = "snapshot.json"


@dataclass
class SnapshotData:
    """Parsed snapshot document."""

    editor_assemblies: list[Assembly] = field(default_factory=list)
    player_assemblies: list[Assembly] = field(default_factory=list)
    packages: list[PackageInfo] = field(default_factory=list)
    asset_paths: list[str] = field(default_factory=list)
    plugins: list[PluginInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SnapshotData:
        try:
            return cls(
                editor_assemblies=[Assembly.from_dict(a) for a in data.get("editorAssemblies", [])],
                player_assemblies=[Assembly.from_dict(a) for a in data.get("playerAssemblies", [])],
                packages=[PackageInfo.from_dict(p) for p in data.get("packages", [])],
                asset_paths=[str(p) for p in data.get("assetPaths", [])],
                plugins=[PluginInfo.from_dict(p) for p in data.get("plugins", [])],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Invalid snapshot entry: {e}") from e


def default_snapshot_path(project_root: str | Path) -> Path:
    """Snapshot location inside a project."""
    return Path(project_root) / SNAPSHOT_DIRECTORY / SNAPSHOT_FILE_NAME


class EditorSnapshot:
    """Host data sources backed by an exported snapshot file.

    The file is read on first use and cached until reload().
    A missing file reads as an empty snapshot.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: SnapshotData | None = None

    @classmethod
    def for_project(cls, project_root: str | Path) -> EditorSnapshot:
        return cls(default_snapshot_path(project_root))

    @property
    def data(self) -> SnapshotData:
        if self._data is None:
            self._data = self._load()
        return self._data

    def reload(self) -> None:
        """Drop the cached document; the next access re-reads the file."""
        self._data = None

    def _load(self) -> SnapshotData:
        if not self.path.exists():
            logger.info(f"No compilation snapshot at {self.path}")
            return SnapshotData()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Malformed snapshot {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise SnapshotError(f"Snapshot {self.path} is not a JSON object")
        data = SnapshotData.from_dict(raw)
        logger.debug(
            f"Loaded snapshot {self.path}: {len(data.editor_assemblies)} editor, "
            f"{len(data.player_assemblies)} player assemblies, {len(data.packages)} packages"
        )
        return data

    # CompilationSource

    def get_assemblies(self, assemblies_type: AssembliesType) -> Sequence[Assembly]:
        if assemblies_type is AssembliesType.PLAYER:
            return list(self.data.player_assemblies)
        return list(self.data.editor_assemblies)

    def get_assembly_name_from_script_path(self, path: str) -> str | None:
        wanted = _normalize(path)
        for assembly in (*self.data.editor_assemblies, *self.data.player_assemblies):
            if any(_normalize(source) == wanted for source in assembly.source_files):
                return assembly.name
        return None

    def parse_response_file(
        self,
        response_file_path: str,
        project_directory: str,
        system_reference_directories: Sequence[str],
    ) -> ResponseFileData:
        return parse_response_file(
            response_file_path, project_directory, system_reference_directories
        )

    # PackageIndex

    def find_for_asset_path(self, asset_path: str) -> PackageInfo | None:
        wanted = _normalize(asset_path)
        for package in self.data.packages:
            root = _normalize(package.asset_path)
            if wanted == root or wanted.startswith(root + "/"):
                return package
        return None

    # AssetSource

    def get_all_asset_paths(self) -> Sequence[str]:
        return list(self.data.asset_paths)

    # PluginSource

    def get_plugins(self) -> Sequence[PluginInfo]:
        return list(self.data.plugins)


def _normalize(path: str) -> str:
    return path.replace("\\", "/").rstrip("/").lower()
