"""Host data sources consumed by the assembly catalog.

The editor owns compilation, package resolution and asset import. These
protocols describe the slice of it the catalog reads.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..catalog.models import (
    Assembly,
    AssembliesType,
    PackageInfo,
    PluginInfo,
    ResponseFileData,
)


class CompilationSource(Protocol):
    """Compilation pipeline: assemblies per target kind."""

    def get_assemblies(self, assemblies_type: AssembliesType) -> Sequence[Assembly]: ...

    def get_assembly_name_from_script_path(self, path: str) -> str | None: ...

    def parse_response_file(
        self,
        response_file_path: str,
        project_directory: str,
        system_reference_directories: Sequence[str],
    ) -> ResponseFileData: ...


class PackageIndex(Protocol):
    """Package manager lookup by asset path."""

    def find_for_asset_path(self, asset_path: str) -> PackageInfo | None: ...


class AssetSource(Protocol):
    """Asset database listing."""

    def get_all_asset_paths(self) -> Sequence[str]: ...


class PluginSource(Protocol):
    """Imported plugin binaries."""

    def get_plugins(self) -> Sequence[PluginInfo]: ...
