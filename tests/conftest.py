"""Pytest fixtures for unity-projgen-mcp tests."""

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from unity_projgen_mcp.catalog import (  # noqa: E402
    ApiCompatibilityLevel,
    Assembly,
    AssembliesType,
    AssemblyCatalog,
    PackageInfo,
    PackageSource,
    PluginInfo,
    ScriptCompilerOptions,
)
from unity_projgen_mcp.config import PluginSettings  # noqa: E402
from unity_projgen_mcp.persistence import MemoryPreferenceStore  # noqa: E402
from unity_projgen_mcp.sources import parse_response_file  # noqa: E402


class FakeCompilation:
    """Compilation source serving fixed assembly lists."""

    def __init__(self, editor, player):
        self.assemblies = {AssembliesType.EDITOR: editor, AssembliesType.PLAYER: player}
        self.requested = []

    def get_assemblies(self, assemblies_type):
        self.requested.append(assemblies_type)
        return self.assemblies[assemblies_type]

    def get_assembly_name_from_script_path(self, path):
        for assembly in self.assemblies[AssembliesType.EDITOR]:
            if path in assembly.source_files:
                return assembly.name
        return None

    def parse_response_file(self, path, project_directory, system_reference_directories):
        return parse_response_file(path, project_directory, system_reference_directories)


class FakePackageIndex:
    """Package index keyed by lower-case package root, counting lookups."""

    def __init__(self, packages):
        self.packages = {p.asset_path.lower(): p for p in packages}
        self.lookups = []

    def find_for_asset_path(self, path):
        self.lookups.append(path)
        return self.packages.get(path)


class FakeAssets:
    def __init__(self, paths):
        self.paths = paths

    def get_all_asset_paths(self):
        return list(self.paths)


class FakePlugins:
    def __init__(self, plugins):
        self.plugins = plugins

    def get_plugins(self):
        return list(self.plugins)


@pytest.fixture
def editor_assemblies():
    """Editor compilation: a game assembly, an editor tool and a package."""
    return [
        Assembly(
            name="Assembly-CSharp",
            output_path="Library/ScriptAssemblies/",
            source_files=["Assets/Scripts/Player.cs", "Assets/Scripts/Enemy.cs"],
            defines=["UNITY_EDITOR", "DEBUG"],
            compiled_assembly_references=["/Editor/Data/Managed/UnityEngine.dll"],
            compiler_options=ScriptCompilerOptions(
                response_files=["Assets/csc.rsp"],
                allow_unsafe_code=True,
                api_compatibility_level=ApiCompatibilityLevel.NET_UNITY_4_8,
            ),
            root_namespace="Game",
        ),
        Assembly(
            name="Game.Editor",
            output_path="Library/ScriptAssemblies/",
            source_files=["Assets/Editor/Tools.cs"],
            assembly_references=["Assembly-CSharp"],
        ),
        Assembly(
            name="Unity.TextMeshPro",
            output_path="Library/ScriptAssemblies/",
            source_files=["Packages/com.unity.textmeshpro/Scripts/Runtime/TMP_Text.cs"],
        ),
    ]


@pytest.fixture
def player_assemblies():
    """Player compilation of the game assembly."""
    return [
        Assembly(
            name="Assembly-CSharp",
            output_path="Library/PlayerScriptAssemblies/",
            source_files=["Assets/Scripts/Player.cs", "Assets/Scripts/Enemy.cs"],
            defines=["DEBUG"],
        ),
        Assembly(
            name="Game.Player",
            output_path="Library/PlayerScriptAssemblies/",
            source_files=["Assets/Player/Boot.cs"],
        ),
    ]


@pytest.fixture
def packages():
    """One package per origin kind."""
    return [
        PackageInfo(name="com.studio.embedded", asset_path="Packages/com.studio.embedded",
                    source=PackageSource.EMBEDDED),
        PackageInfo(name="com.unity.textmeshpro", asset_path="Packages/com.unity.textmeshpro",
                    source=PackageSource.REGISTRY, version="3.0.6"),
        PackageInfo(name="com.unity.modules.ui", asset_path="Packages/com.unity.modules.ui",
                    source=PackageSource.BUILT_IN),
        PackageInfo(name="com.studio.local", asset_path="Packages/com.studio.local",
                    source=PackageSource.LOCAL),
        PackageInfo(name="com.studio.git", asset_path="Packages/com.studio.git",
                    source=PackageSource.GIT),
        PackageInfo(name="com.studio.tarball", asset_path="Packages/com.studio.tarball",
                    source=PackageSource.LOCAL_TARBALL),
        PackageInfo(name="com.studio.mystery", asset_path="Packages/com.studio.mystery",
                    source=PackageSource.UNKNOWN),
    ]


@pytest.fixture
def compilation(editor_assemblies, player_assemblies):
    return FakeCompilation(editor_assemblies, player_assemblies)


@pytest.fixture
def package_index(packages):
    return FakePackageIndex(packages)


@pytest.fixture
def plugins():
    return [
        PluginInfo(asset_path="/opt/analyzers/Custom.Analyzers.dll", labels=["RoslynAnalyzer"]),
        PluginInfo(asset_path="Assets/Plugins/Native.so", is_native=True, labels=["RoslynAnalyzer"]),
        PluginInfo(asset_path="Assets/Plugins/Json.dll", labels=[]),
    ]


@pytest.fixture
def preferences():
    return MemoryPreferenceStore()


@pytest.fixture
def settings():
    return PluginSettings(user_extensions=("txt",), root_namespace="Game")


@pytest.fixture
def catalog(compilation, package_index, plugins, preferences, settings):
    """Catalog with every generation flag off."""
    catalog = AssemblyCatalog(
        compilation=compilation,
        packages=package_index,
        assets=FakeAssets(["Assets/Scripts/Player.cs", "Packages/com.studio.git/package.json"]),
        plugins=FakePlugins(plugins),
        preferences=preferences,
        settings=settings,
    )
    catalog.reset_project_generation_flag()
    return catalog
