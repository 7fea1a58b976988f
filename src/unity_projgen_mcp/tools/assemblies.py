"""Assembly catalog MCP tools."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server import Server

    from ..workspace import Workspace


def register_assembly_tools(server: "Server", get_workspace: Callable[[], "Workspace"]) -> None:
    """Register assembly tools with MCP server."""

    @server.tool()
    async def list_assemblies(include_all: bool = False) -> dict:
        """
        List the assemblies that project generation would produce projects for.

        Editor assemblies are always listed. Player assemblies are listed too
        when the player_assemblies generation flag is on; their projects carry
        a ".Player" suffix.

        Args:
            include_all: Keep assemblies whose files are all filtered out
                (hidden packages, unsupported extensions)

        Returns:
            Assemblies with their project names and output paths
        """
        try:
            workspace = get_workspace()
            catalog = workspace.catalog
            predicate = (lambda _path: True) if include_all else workspace.file_filter
            assemblies = []
            for assembly in catalog.get_assemblies(predicate):
                entry = assembly.to_dict()
                entry["projectName"] = catalog.get_project_name(
                    assembly.output_path, assembly.name
                )
                assemblies.append(entry)
            return {"success": True, "data": {"assemblies": assemblies, "count": len(assemblies)}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def get_project_name(output_path: str, assembly_name: str) -> dict:
        """
        Get the generated project name for an assembly.

        Args:
            output_path: Assembly output path (e.g. "Temp\\Bin\\Debug\\Player\\")
            assembly_name: Assembly name

        Returns:
            Project name
        """
        try:
            name = get_workspace().catalog.get_project_name(output_path, assembly_name)
            return {"success": True, "data": {"projectName": name}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def get_assembly_for_script(path: str) -> dict:
        """
        Find the assembly a script file compiles into.

        Args:
            path: Asset path of the script (e.g. "Assets/Scripts/Player.cs")

        Returns:
            Assembly name, or null when no assembly contains the script
        """
        try:
            name = get_workspace().catalog.get_assembly_name_from_script_path(path)
            return {"success": True, "data": {"path": path, "assembly": name}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def list_roslyn_analyzers() -> dict:
        """
        List Roslyn analyzer plugins imported into the project.

        Returns:
            Absolute analyzer paths
        """
        try:
            paths = get_workspace().catalog.get_roslyn_analyzer_paths()
            return {"success": True, "data": {"analyzers": paths}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def parse_response_file(
        path: str, system_reference_directories: list[str] | None = None
    ) -> dict:
        """
        Parse a compiler response (.rsp) file.

        Args:
            path: Response file path, relative to the project root unless absolute
            system_reference_directories: Extra directories to resolve references in

        Returns:
            Defines, resolved references, unsafe switch, errors, other arguments
        """
        try:
            workspace = get_workspace()
            data = workspace.catalog.parse_response_file(
                path, str(workspace.project_root), system_reference_directories or []
            )
            return {"success": True, "data": data.to_dict()}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def reload_snapshot() -> dict:
        """
        Re-read the editor compilation snapshot and clear the package cache.

        Call after the editor re-exported its compilation state.
        """
        try:
            get_workspace().reload()
            return {"success": True, "data": {"reloaded": True}}
        except Exception as e:
            return {"success": False, "error": str(e)}
