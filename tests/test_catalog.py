"""Tests for the assembly catalog - collection, naming and flags."""

import os

import pytest

from unity_projgen_mcp.catalog import (
    DEFAULT_PROJECT_GENERATION_FLAG,
    EDITOR_OUTPUT_PATH,
    PLAYER_OUTPUT_PATH,
    PROJECT_GENERATION_FLAG_KEY,
    ApiCompatibilityLevel,
    AssembliesType,
    AssemblyCatalog,
    PluginInfo,
    ProjectGenerationFlag,
)
from unity_projgen_mcp.errors import ResponseFileError
from unity_projgen_mcp.persistence import MemoryPreferenceStore

from conftest import FakeAssets, FakeCompilation, FakePackageIndex, FakePlugins


def accept_all(_path):
    return True


class TestGetProjectName:
    """Tests for output-path based project naming."""

    @pytest.mark.parametrize(
        "output_path,assembly_name,expected",
        [
            ("Temp\\Bin\\Debug\\", "AssemblyName", "AssemblyName"),
            ("Temp\\Bin\\Debug\\", "My.Player.AssemblyName", "My.Player.AssemblyName"),
            ("Temp\\Bin\\Debug\\", "AssemblyName.Player", "AssemblyName.Player"),
            ("Temp\\Bin\\Debug\\Player\\", "AssemblyName", "AssemblyName.Player"),
            ("Temp\\Bin\\Debug\\Player\\", "AssemblyName.Player", "AssemblyName.Player.Player"),
        ],
    )
    def test_player_and_editor_names(self, catalog, output_path, assembly_name, expected):
        """Test that only player output paths get the .Player suffix."""
        assert catalog.get_project_name(output_path, assembly_name) == expected

    def test_suffix_is_not_idempotent(self, catalog):
        """Test that naming a player project twice appends the suffix twice."""
        once = catalog.get_project_name(PLAYER_OUTPUT_PATH, "Game")
        twice = catalog.get_project_name(PLAYER_OUTPUT_PATH, once)
        assert twice == "Game.Player.Player"

    def test_suffix_match_is_case_sensitive(self, catalog):
        """Test that a lower-case player directory is not a player path."""
        assert catalog.get_project_name("Temp\\Bin\\Debug\\player\\", "Game") == "Game"

    def test_forward_slashes_are_not_player_paths(self, catalog):
        """Test that only the backslash form of the player root matches."""
        assert catalog.get_project_name("Temp/Bin/Debug/Player/", "Game") == "Game"


class TestGetAssemblies:
    """Tests for assembly collection."""

    def test_all_editor_assemblies_collected(self, catalog, editor_assemblies):
        """Test that every editor assembly is collected with the editor output path."""
        collected = list(catalog.get_assemblies(accept_all))

        assert [a.name for a in collected] == [a.name for a in editor_assemblies]
        for assembly in collected:
            assert assembly.output_path == EDITOR_OUTPUT_PATH, assembly.name

    def test_player_assemblies_not_collected_before_toggling(self, catalog, compilation):
        """Test that player assemblies are skipped while the flag is off."""
        collected = list(catalog.get_assemblies(accept_all))

        assert all(a.output_path != PLAYER_OUTPUT_PATH for a in collected)
        assert AssembliesType.PLAYER not in compilation.requested

    def test_player_assemblies_collected_after_toggling(self, catalog, player_assemblies):
        """Test that toggling player assemblies appends them after editor assemblies."""
        catalog.toggle_project_generation(ProjectGenerationFlag.PLAYER_ASSEMBLIES)

        collected = list(catalog.get_assemblies(accept_all))
        player = [a for a in collected if a.output_path == PLAYER_OUTPUT_PATH]

        assert [a.name for a in player] == [a.name for a in player_assemblies]
        assert collected[-len(player):] == player
        assert collected[0].output_path == EDITOR_OUTPUT_PATH

    def test_player_project_names_are_disambiguated(self, catalog):
        """Test that an assembly built for both targets yields two project names."""
        catalog.toggle_project_generation(ProjectGenerationFlag.PLAYER_ASSEMBLIES)

        names = [
            catalog.get_project_name(a.output_path, a.name)
            for a in catalog.get_assemblies(accept_all)
        ]

        assert "Assembly-CSharp" in names
        assert "Assembly-CSharp.Player" in names
        assert "Game.Player.Player" in names
        assert len(names) == len(set(names))

    def test_assembly_without_matching_files_dropped(self, catalog):
        """Test that assemblies with no accepted source file are dropped."""
        collected = list(catalog.get_assemblies(lambda path: path.startswith("Assets/Editor/")))
        assert [a.name for a in collected] == ["Game.Editor"]

    def test_source_files_not_filtered(self, catalog):
        """Test that kept assemblies keep all their source files."""
        collected = list(catalog.get_assemblies(lambda path: path.endswith("Player.cs")))

        game = next(a for a in collected if a.name == "Assembly-CSharp")
        assert game.source_files == ["Assets/Scripts/Player.cs", "Assets/Scripts/Enemy.cs"]

    def test_predicate_rejecting_everything(self, catalog):
        """Test that a predicate rejecting all files yields nothing."""
        catalog.toggle_project_generation(ProjectGenerationFlag.PLAYER_ASSEMBLIES)
        assert list(catalog.get_assemblies(lambda _path: False)) == []

    def test_fields_pass_through(self, catalog, editor_assemblies):
        """Test that assembly fields other than the output path are preserved."""
        original = editor_assemblies[0]
        collected = next(iter(catalog.get_assemblies(accept_all)))

        assert collected.name == original.name
        assert collected.defines == original.defines
        assert collected.compiled_assembly_references == original.compiled_assembly_references
        assert collected.root_namespace == "Game"
        assert collected.all_references == original.all_references

    def test_compiler_options_copied(self, catalog, editor_assemblies):
        """Test that compiler options are copied into a new record."""
        original = editor_assemblies[0]
        collected = next(iter(catalog.get_assemblies(accept_all)))

        assert collected.compiler_options is not original.compiler_options
        assert collected.compiler_options.response_files == ["Assets/csc.rsp"]
        assert collected.compiler_options.allow_unsafe_code is True
        assert (
            collected.compiler_options.api_compatibility_level
            == ApiCompatibilityLevel.NET_UNITY_4_8
        )

    def test_source_assemblies_not_mutated(self, catalog, editor_assemblies):
        """Test that input assemblies keep their own output paths."""
        list(catalog.get_assemblies(accept_all))

        assert all(a.output_path == "Library/ScriptAssemblies/" for a in editor_assemblies)

    def test_repeated_calls_are_equal(self, catalog):
        """Test that collecting twice gives the same result."""
        catalog.toggle_project_generation(ProjectGenerationFlag.PLAYER_ASSEMBLIES)

        first = list(catalog.get_assemblies(accept_all))
        second = list(catalog.get_assemblies(accept_all))

        assert first == second


class TestProjectGenerationFlag:
    """Tests for flag toggling and persistence."""

    def test_default_flag_from_empty_store(self, compilation, package_index):
        """Test that a fresh store yields the default flags."""
        catalog = AssemblyCatalog(
            compilation, package_index, FakeAssets([]), FakePlugins([]), MemoryPreferenceStore()
        )
        assert catalog.project_generation_flag == DEFAULT_PROJECT_GENERATION_FLAG
        assert int(catalog.project_generation_flag) == 3

    def test_flag_loaded_from_store(self, compilation, package_index):
        """Test that the stored value is used."""
        store = MemoryPreferenceStore({PROJECT_GENERATION_FLAG_KEY: 64})
        catalog = AssemblyCatalog(
            compilation, package_index, FakeAssets([]), FakePlugins([]), store
        )
        assert catalog.project_generation_flag == ProjectGenerationFlag.PLAYER_ASSEMBLIES

    def test_flag_loaded_lazily_once(self, compilation, package_index):
        """Test that later store changes do not leak into the in-memory flags."""
        store = MemoryPreferenceStore({PROJECT_GENERATION_FLAG_KEY: 4})
        catalog = AssemblyCatalog(
            compilation, package_index, FakeAssets([]), FakePlugins([]), store
        )
        assert catalog.project_generation_flag == ProjectGenerationFlag.REGISTRY

        store.set_int(PROJECT_GENERATION_FLAG_KEY, 8)
        assert catalog.project_generation_flag == ProjectGenerationFlag.REGISTRY

    def test_toggle_sets_and_persists(self, catalog, preferences):
        """Test that toggling an unset flag sets it and saves it."""
        catalog.toggle_project_generation(ProjectGenerationFlag.GIT)

        assert catalog.project_generation_flag == ProjectGenerationFlag.GIT
        assert preferences.get_int(PROJECT_GENERATION_FLAG_KEY) == 8

    def test_double_toggle_restores(self, catalog):
        """Test that toggling twice restores the original value."""
        catalog.toggle_project_generation(ProjectGenerationFlag.REGISTRY)
        before = catalog.project_generation_flag

        catalog.toggle_project_generation(ProjectGenerationFlag.LOCAL)
        catalog.toggle_project_generation(ProjectGenerationFlag.LOCAL)

        assert catalog.project_generation_flag == before

    def test_toggle_flips_only_given_bit(self, catalog):
        """Test that toggling leaves other bits alone."""
        catalog.toggle_project_generation(ProjectGenerationFlag.EMBEDDED)
        catalog.toggle_project_generation(ProjectGenerationFlag.BUILT_IN)
        catalog.toggle_project_generation(ProjectGenerationFlag.EMBEDDED)

        assert catalog.project_generation_flag == ProjectGenerationFlag.BUILT_IN

    def test_toggle_none_is_noop(self, catalog):
        """Test that toggling NONE changes nothing."""
        catalog.toggle_project_generation(ProjectGenerationFlag.GIT)
        catalog.toggle_project_generation(ProjectGenerationFlag.NONE)

        assert catalog.project_generation_flag == ProjectGenerationFlag.GIT

    def test_reset(self, catalog, preferences):
        """Test that reset clears every flag and persists zero."""
        catalog.toggle_project_generation(ProjectGenerationFlag.PLAYER_ASSEMBLIES)
        catalog.reset_project_generation_flag()

        assert catalog.project_generation_flag == ProjectGenerationFlag.NONE
        assert preferences.get_int(PROJECT_GENERATION_FLAG_KEY, 99) == 0

    def test_flags_survive_new_catalog(self, compilation, package_index):
        """Test that a new catalog on the same store sees toggled flags."""
        store = MemoryPreferenceStore()
        first = AssemblyCatalog(compilation, package_index, FakeAssets([]), FakePlugins([]), store)
        first.toggle_project_generation(ProjectGenerationFlag.PLAYER_ASSEMBLIES)

        second = AssemblyCatalog(compilation, package_index, FakeAssets([]), FakePlugins([]), store)
        assert second.project_generation_flag & ProjectGenerationFlag.PLAYER_ASSEMBLIES


class TestPassThroughs:
    """Tests for host source pass-through operations."""

    def test_settings_exposed(self, catalog):
        """Test user extensions and root namespace come from settings."""
        assert catalog.project_supported_extensions == ("txt",)
        assert catalog.project_generation_root_namespace == "Game"

    def test_assembly_name_from_script_path(self, catalog):
        """Test script-to-assembly lookup."""
        assert catalog.get_assembly_name_from_script_path("Assets/Editor/Tools.cs") == "Game.Editor"
        assert catalog.get_assembly_name_from_script_path("Assets/Nowhere.cs") is None

    def test_all_asset_paths(self, catalog):
        """Test asset listing."""
        assert "Assets/Scripts/Player.cs" in catalog.get_all_asset_paths()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX absolute paths")
    def test_roslyn_analyzer_paths(self, catalog, plugins, tmp_path, monkeypatch):
        """Test that only managed analyzer plugins are returned, made absolute."""
        monkeypatch.chdir(tmp_path)
        plugins.append(
            PluginInfo(asset_path="Assets/Analyzers/Local.dll", labels=["RoslynAnalyzer"])
        )
        plugins.append(
            PluginInfo(asset_path="/opt/analyzers/Custom.Analyzers.dll", labels=["RoslynAnalyzer"])
        )

        paths = catalog.get_roslyn_analyzer_paths()

        assert paths == [
            "/opt/analyzers/Custom.Analyzers.dll",
            os.path.join(os.getcwd(), "Assets", "Analyzers", "Local.dll"),
        ]

    def test_parse_response_file(self, catalog, tmp_path):
        """Test response files are parsed through the compilation source."""
        (tmp_path / "csc.rsp").write_text("-define:A;B\n-unsafe\n")

        data = catalog.parse_response_file("csc.rsp", str(tmp_path), [])

        assert data.defines == ["A", "B"]
        assert data.unsafe is True

    def test_parse_response_file_error_propagates(self, catalog, tmp_path):
        """Test a missing response file raises instead of being swallowed."""
        with pytest.raises(ResponseFileError):
            catalog.parse_response_file("missing.rsp", str(tmp_path), [])


class TestFakeCompilationIsolation:
    """Tests for catalogs over independent sources."""

    def test_empty_sources(self):
        """Test that a catalog over empty sources yields nothing."""
        catalog = AssemblyCatalog(
            FakeCompilation([], []),
            FakePackageIndex([]),
            FakeAssets([]),
            FakePlugins([]),
            MemoryPreferenceStore({PROJECT_GENERATION_FLAG_KEY: 64}),
        )
        assert list(catalog.get_assemblies(accept_all)) == []
