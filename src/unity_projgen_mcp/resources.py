"""MCP Resources for project generation state."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING

from .tools.generation import describe_flags

if TYPE_CHECKING:
    from mcp.server import Server

    from .workspace import Workspace


def register_resources(server: Server, get_workspace: Callable[[], Workspace]) -> None:
    """Register MCP resources."""

    @server.resource("projgen://flags", mime_type="application/json")
    async def get_flags() -> str:
        """
        Project generation flags.
        Includes: value, and on/off state per flag
        """
        return json.dumps(describe_flags(get_workspace()), indent=2)

    @server.resource("projgen://assemblies", mime_type="application/json")
    async def get_assemblies() -> str:
        """
        Assemblies visible to project generation, editor builds first.
        Each entry includes: projectName, name, outputPath, sourceFileCount
        """
        workspace = get_workspace()
        catalog = workspace.catalog
        result = [
            {
                "projectName": catalog.get_project_name(a.output_path, a.name),
                "name": a.name,
                "outputPath": a.output_path,
                "sourceFileCount": len(a.source_files),
            }
            for a in catalog.get_assemblies(workspace.file_filter)
        ]
        return json.dumps(result, indent=2)
