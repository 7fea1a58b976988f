"""Package origin MCP tools."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server import Server

    from ..workspace import Workspace


def register_package_tools(server: "Server", get_workspace: Callable[[], "Workspace"]) -> None:
    """Register package tools with MCP server."""

    @server.tool()
    async def find_package(asset_path: str) -> dict:
        """
        Find the package owning an asset.

        Args:
            asset_path: Asset path such as "Packages/com.unity.ugui/Runtime/UI.cs"

        Returns:
            Package info, or null when the asset is not inside a package
        """
        try:
            package = get_workspace().catalog.find_for_asset_path(asset_path)
            return {
                "success": True,
                "data": {"package": package.to_dict() if package else None},
            }
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def is_package_path_excluded(path: str) -> dict:
        """
        Check whether an asset is hidden from generated projects because the
        generation flag for its package origin is off.

        Args:
            path: Asset path

        Returns:
            Exclusion status
        """
        try:
            excluded = get_workspace().catalog.is_internalized_package_path(path)
            return {"success": True, "data": {"path": path, "excluded": excluded}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @server.tool()
    async def reset_package_cache() -> dict:
        """
        Forget cached package lookups. Call after packages were added or removed.
        """
        try:
            get_workspace().catalog.reset_package_info_cache()
            return {"success": True, "data": {"cleared": True}}
        except Exception as e:
            return {"success": False, "error": str(e)}
