"""MCP Server for Unity project generation."""

from __future__ import annotations

import logging
from pathlib import Path

from mcp.server.fastmcp import Context, FastMCP
from pydantic import AnyUrl

from .resources import register_resources
from .tools import register_assembly_tools, register_generation_tools, register_package_tools
from .utils.project import get_project_root
from .workspace import Workspace

logger = logging.getLogger(__name__)

# Global workspace (single project mode)
_workspace: Workspace | None = None
_initial_project_path: str | None = None


def get_workspace() -> Workspace:
    """Get or create the workspace for the current project root."""
    global _workspace
    if _workspace is None:
        _workspace = Workspace(_initial_project_path or Path.cwd())
    return _workspace


def set_project_root(project_root: str | Path) -> Workspace:
    """Switch to another project root, keeping the current one if unchanged."""
    global _workspace
    current = get_workspace()
    new_root = Path(project_root).resolve()
    if current.project_root.resolve() != new_root:
        logger.info(f"Updating project root: {current.project_root} -> {new_root}")
        _workspace = Workspace(new_root, settings=current.settings)
    return get_workspace()


async def resolve_project_root(ctx: Context) -> Path | None:
    """Adopt the client's project root when it provides one."""
    project_root = await get_project_root(ctx)
    if project_root:
        set_project_root(project_root)
    return project_root


def create_server(project_path: str | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        project_path: Initial Unity project root. Can be updated from MCP
            client roots via the use_client_project_root tool.
    """
    global _initial_project_path, _workspace
    _initial_project_path = project_path
    _workspace = None
    mcp = FastMCP("unity-projgen-mcp")

    async def notify_flags_changed() -> None:
        """Notify the client that projgen://flags has changed."""
        try:
            ctx = mcp.get_context()
            if ctx.session:
                await ctx.session.send_resource_updated(AnyUrl("projgen://flags"))
        except Exception:
            logger.debug("Could not send projgen://flags update", exc_info=True)

    @mcp.tool()
    async def use_client_project_root(ctx: Context) -> dict:
        """
        Switch to the project root provided by the MCP client, if any.

        Returns:
            The project root in use
        """
        try:
            await resolve_project_root(ctx)
            return {"success": True, "data": {"projectRoot": str(get_workspace().project_root)}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    register_assembly_tools(mcp, get_workspace)
    register_package_tools(mcp, get_workspace)
    register_generation_tools(mcp, get_workspace, notify_flags_changed)
    register_resources(mcp, get_workspace)

    return mcp
