"""Utility modules for unity-projgen-mcp."""

from .project import ProjectRootConfig, find_unity_project_root, get_project_root, parse_file_uri

__all__ = [
    "get_project_root",
    "find_unity_project_root",
    "parse_file_uri",
    "ProjectRootConfig",
]
