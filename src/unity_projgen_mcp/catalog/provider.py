"""Assembly catalog: the assemblies visible to project generation.

Merges editor and player compilations, applies the user's package and player
policies, and names projects so that one assembly compiled for both targets
yields two distinct projects.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ..config import PluginSettings
from .flags import (
    DEFAULT_PROJECT_GENERATION_FLAG,
    PROJECT_GENERATION_FLAG_KEY,
    ProjectGenerationFlag,
    flag_for_package_source,
)
from .models import (
    Assembly,
    AssembliesType,
    PackageInfo,
    ResponseFileData,
    ScriptCompilerOptions,
)

if TYPE_CHECKING:
    from ..persistence import PreferenceStore
    from ..sources import AssetSource, CompilationSource, PackageIndex, PluginSource

logger = logging.getLogger(__name__)

EDITOR_OUTPUT_PATH: Final[str] = "Temp\\Bin\\Debug\\"
PLAYER_OUTPUT_PATH: Final[str] = "Temp\\Bin\\Debug\\Player\\"
PLAYER_OUTPUT_SUFFIX: Final[str] = "\\Player\\"
PLAYER_PROJECT_SUFFIX: Final[str] = ".Player"

PACKAGES_PREFIX: Final[str] = "packages/"
ROSLYN_ANALYZER_LABEL: Final[str] = "RoslynAnalyzer"


def resolve_potential_parent_package_asset_path(asset_path: str) -> str | None:
    """Lower-cased ``packages/<name>`` root of an asset path.

    Returns None when the path is not under ``packages/``.
    """
    if not asset_path.lower().startswith(PACKAGES_PREFIX):
        return None

    separator = asset_path.find("/", len(PACKAGES_PREFIX))
    if separator == -1:
        return asset_path.lower()

    return asset_path[:separator].lower()


class AssemblyCatalog:
    """Filtered, policy-aware view of the host's assemblies.

    Generation flags are read from the preference store on first use; after
    that the in-memory value is authoritative and every change is written back.

    Not thread-safe: the package cache and the flags assume a single caller.
    """

    def __init__(
        self,
        compilation: CompilationSource,
        packages: PackageIndex,
        assets: AssetSource,
        plugins: PluginSource,
        preferences: PreferenceStore,
        settings: PluginSettings | None = None,
        project_root: str | Path | None = None,
    ):
        self._compilation = compilation
        self._packages = packages
        self._assets = assets
        self._plugins = plugins
        self._preferences = preferences
        self.settings = settings or PluginSettings()
        self._project_root = Path(project_root) if project_root is not None else None
        self._package_info_cache: dict[str, PackageInfo | None] = {}
        self._project_generation_flag: ProjectGenerationFlag | None = None

    # ============== Settings ==============

    @property
    def project_root(self) -> Path:
        """Directory relative plugin paths are taken from; the working directory if unset."""
        return self._project_root or Path.cwd()

    @property
    def project_supported_extensions(self) -> tuple[str, ...]:
        """User-configured extra file extensions."""
        return self.settings.user_extensions

    @property
    def project_generation_root_namespace(self) -> str:
        return self.settings.root_namespace

    @property
    def project_generation_flag(self) -> ProjectGenerationFlag:
        if self._project_generation_flag is None:
            stored = self._preferences.get_int(
                PROJECT_GENERATION_FLAG_KEY, int(DEFAULT_PROJECT_GENERATION_FLAG)
            )
            self._project_generation_flag = ProjectGenerationFlag(stored)
        return self._project_generation_flag

    def _set_project_generation_flag(self, value: ProjectGenerationFlag) -> None:
        self._preferences.set_int(PROJECT_GENERATION_FLAG_KEY, int(value))
        self._project_generation_flag = value

    def toggle_project_generation(self, preference: ProjectGenerationFlag) -> None:
        """Flip the given flag bits and persist the result."""
        current = self.project_generation_flag
        if current & preference == preference:
            updated = current ^ preference
        else:
            updated = current | preference
        self._set_project_generation_flag(updated)
        logger.info(f"Project generation flag: {int(current)} -> {int(updated)}")

    def reset_project_generation_flag(self) -> None:
        self._set_project_generation_flag(ProjectGenerationFlag.NONE)

    # ============== Assemblies ==============

    def get_assembly_name_from_script_path(self, path: str) -> str | None:
        return self._compilation.get_assembly_name_from_script_path(path)

    def get_assemblies(
        self, should_file_be_part_of_solution: Callable[[str], bool]
    ) -> Iterator[Assembly]:
        """Assemblies with at least one source file accepted by the predicate.

        Editor assemblies come first. Player assemblies follow only when
        PLAYER_ASSEMBLIES is set. Each returned assembly is a new object whose
        output path names its target.
        """
        yield from self._get_assemblies_by_type(
            AssembliesType.EDITOR, should_file_be_part_of_solution, EDITOR_OUTPUT_PATH
        )

        if self.project_generation_flag & ProjectGenerationFlag.PLAYER_ASSEMBLIES:
            yield from self._get_assemblies_by_type(
                AssembliesType.PLAYER, should_file_be_part_of_solution, PLAYER_OUTPUT_PATH
            )

    def _get_assemblies_by_type(
        self,
        assemblies_type: AssembliesType,
        should_file_be_part_of_solution: Callable[[str], bool],
        output_path: str,
    ) -> Iterator[Assembly]:
        for assembly in self._compilation.get_assemblies(assemblies_type):
            options = ScriptCompilerOptions(
                response_files=list(assembly.compiler_options.response_files),
                allow_unsafe_code=assembly.compiler_options.allow_unsafe_code,
                api_compatibility_level=assembly.compiler_options.api_compatibility_level,
            )

            if any(should_file_be_part_of_solution(f) for f in assembly.source_files):
                yield Assembly(
                    name=assembly.name,
                    output_path=output_path,
                    source_files=assembly.source_files,
                    defines=assembly.defines,
                    assembly_references=assembly.assembly_references,
                    compiled_assembly_references=assembly.compiled_assembly_references,
                    flags=assembly.flags,
                    compiler_options=options,
                    root_namespace=assembly.root_namespace,
                )

    def get_project_name(self, assembly_output_path: str, assembly_name: str) -> str:
        """Project name for an assembly; player builds get a ``.Player`` suffix.

        The suffix is appended even when the name already ends in ``.Player``.
        """
        if assembly_output_path.endswith(PLAYER_OUTPUT_SUFFIX):
            return assembly_name + PLAYER_PROJECT_SUFFIX
        return assembly_name

    def get_all_asset_paths(self) -> Sequence[str]:
        return self._assets.get_all_asset_paths()

    # ============== Packages ==============

    def find_for_asset_path(self, asset_path: str) -> PackageInfo | None:
        """Package owning an asset, memoized per ``packages/<name>`` root."""
        parent_package_asset_path = resolve_potential_parent_package_asset_path(asset_path)
        if parent_package_asset_path is None:
            return None

        if parent_package_asset_path in self._package_info_cache:
            return self._package_info_cache[parent_package_asset_path]

        logger.debug(f"Package cache miss: {parent_package_asset_path}")
        result = self._packages.find_for_asset_path(parent_package_asset_path)
        self._package_info_cache[parent_package_asset_path] = result
        return result

    def reset_package_info_cache(self) -> None:
        self._package_info_cache.clear()

    def is_internalized_package_path(self, path: str) -> bool:
        """Whether a path belongs to a package the user chose to hide.

        Paths outside packages, and packages of an origin without a flag,
        are never hidden.
        """
        if not path.strip():
            return False

        package_info = self.find_for_asset_path(path)
        if package_info is None:
            return False

        flag = flag_for_package_source(
            package_info.source, local_tarball=self.settings.supports_local_tarball
        )
        if flag is None:
            return False
        return not self.project_generation_flag & flag

    # ============== Compiler inputs ==============

    def parse_response_file(
        self,
        response_file_path: str,
        project_directory: str,
        system_reference_directories: Sequence[str],
    ) -> ResponseFileData:
        return self._compilation.parse_response_file(
            response_file_path, project_directory, system_reference_directories
        )

    def get_roslyn_analyzer_paths(self) -> list[str]:
        """Absolute paths of managed plugins labeled as Roslyn analyzers.

        Relative plugin paths are resolved against the project root.
        """
        root = str(self.project_root)
        paths: list[str] = []
        for plugin in self._plugins.get_plugins():
            if plugin.is_native or ROSLYN_ANALYZER_LABEL not in plugin.labels:
                continue
            path = plugin.asset_path
            if not os.path.isabs(path):
                path = os.path.normpath(os.path.join(root, path))
            if path not in paths:
                paths.append(path)
        return paths

