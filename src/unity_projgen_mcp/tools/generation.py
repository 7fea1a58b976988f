"""Generation flag and project file tracking MCP tools."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from ..catalog import ProjectGenerationFlag

if TYPE_CHECKING:
    from mcp.server import Server

    from ..workspace import Workspace


def describe_flags(workspace: "Workspace") -> dict[str, Any]:
    """Current flag value and the state of each user-facing flag."""
    current = workspace.catalog.project_generation_flag
    supported = ProjectGenerationFlag.supported(
        local_tarball=workspace.settings.supports_local_tarball
    )
    return {
        "value": int(current),
        "flags": {flag.name.lower(): bool(current & flag) for flag in supported},
    }


def register_generation_tools(
    server: "Server",
    get_workspace: Callable[[], "Workspace"],
    on_flags_changed: Callable[[], Awaitable[None]] | None = None,
) -> None:
    """Register generation flag and tracking tools with MCP server."""

    async def notify() -> None:
        if on_flags_changed is not None:
            await on_flags_changed()

    @server.tool()
    async def get_generation_flags() -> dict:
        """
        Get the project generation flags.

        Each flag opts packages of one origin (embedded, local, registry, git,
        built_in, local_tarball, unknown) or player assemblies into the
        generated projects.
        """
        try:
            return {"success": True, "data": describe_flags(get_workspace())}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def toggle_generation_flag(flag: str) -> dict:
        """
        Toggle a project generation flag. The new value is saved in user preferences.

        Args:
            flag: Flag name, e.g. "player_assemblies", "registry", "LocalTarBall"

        Returns:
            Updated flags
        """
        try:
            workspace = get_workspace()
            workspace.catalog.toggle_project_generation(ProjectGenerationFlag.parse(flag))
            await notify()
            return {"success": True, "data": describe_flags(workspace)}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def reset_generation_flags() -> dict:
        """
        Turn every project generation flag off.
        """
        try:
            workspace = get_workspace()
            workspace.catalog.reset_project_generation_flag()
            await notify()
            return {"success": True, "data": describe_flags(workspace)}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def check_project_files() -> dict:
        """
        Check whether generated .csproj/.sln files changed since they were last
        written, meaning projects should be regenerated.

        Always reports unchanged when project file tracking is disabled.
        """
        try:
            workspace = get_workspace()
            changed = workspace.tracker.has_last_write_time_changed()
            return {
                "success": True,
                "data": {
                    "changed": changed,
                    "lastWrite": workspace.state.last_write,
                    "trackingEnabled": workspace.settings.track_project_file_changes,
                },
            }
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def record_project_file_write(path: str) -> dict:
        """
        Record that a project or solution file was just written.

        Files outside the project root, or not a .csproj or the root's .sln,
        are ignored.

        Args:
            path: Path of the written file
        """
        try:
            workspace = get_workspace()
            workspace.tracker.update_last_write_if_needed(path)
            return {"success": True, "data": {"lastWrite": workspace.state.last_write}}
        except Exception as e:
            return {"success": False, "error": str(e)}
