"""Host data sources."""

from .base import AssetSource, CompilationSource, PackageIndex, PluginSource
from .response_file import parse_response_file
from .snapshot import EditorSnapshot, SnapshotData, default_snapshot_path

__all__ = [
    "CompilationSource",
    "PackageIndex",
    "AssetSource",
    "PluginSource",
    "EditorSnapshot",
    "SnapshotData",
    "default_snapshot_path",
    "parse_response_file",
]
