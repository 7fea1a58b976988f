"""Unity project root detection.

The project root is taken from, in order:
1. MCP Roots from the client (via Context.list_roots())
2. Environment variables (UNITY_PROJECT_ROOT, MCP_PROJECT_ROOT)
3. The --project path
4. A marker search upward from the startup CWD (when --project-from-cwd is used)
5. The startup CWD
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger(__name__)

UNITY_PROJECT_MARKERS = ("Assets", "ProjectSettings")


@dataclass
class ProjectRootConfig:
    """Startup settings for project root detection."""

    startup_cwd: Path | None = None
    use_project_from_cwd: bool = False
    explicit_project_path: Path | None = None
    env_var_names: tuple[str, ...] = field(
        default_factory=lambda: ("UNITY_PROJECT_ROOT", "MCP_PROJECT_ROOT")
    )


_config: ProjectRootConfig = ProjectRootConfig()


def configure_project_root(
    *,
    use_project_from_cwd: bool = False,
    explicit_project_path: str | Path | None = None,
    startup_cwd: str | Path | None = None,
) -> None:
    """Configure project root detection. Called once at server startup."""
    global _config
    _config = ProjectRootConfig(
        use_project_from_cwd=use_project_from_cwd,
        explicit_project_path=Path(explicit_project_path) if explicit_project_path else None,
        startup_cwd=Path(startup_cwd) if startup_cwd else None,
    )
    logger.debug(
        f"Project root configured: use_cwd={use_project_from_cwd}, "
        f"explicit={explicit_project_path}, startup_cwd={startup_cwd}"
    )


def get_config() -> ProjectRootConfig:
    return _config


def parse_file_uri(uri: str) -> Path | None:
    """Parse a file:// URI to an absolute Path.

    Handles ``file:///C:/path`` drive letters and ``file://server/share`` UNC
    hosts on Windows.

    Returns:
        Path if the URI is an absolute file URI, None otherwise
    """
    try:
        parsed = urlparse(str(uri))
    except ValueError as e:
        logger.warning(f"Failed to parse file URI '{uri}': {e}")
        return None

    if parsed.scheme != "file":
        logger.warning(f"Not a file URI: {uri}")
        return None

    path_str = unquote(parsed.path)
    if sys.platform == "win32":
        # "/C:/path" -> "C:/path"
        if len(path_str) > 2 and path_str[0] == "/" and path_str[2] == ":":
            path_str = path_str[1:]
        if parsed.netloc:
            path_str = f"\\\\{parsed.netloc}{path_str}"

    path = Path(path_str)
    if not path.is_absolute():
        logger.warning(f"Parsed path is not absolute: {path}")
        return None
    return path


def is_unity_project(directory: Path) -> bool:
    """Whether a directory holds both Assets/ and ProjectSettings/."""
    return all((directory / marker).is_dir() for marker in UNITY_PROJECT_MARKERS)


def find_unity_project_root(start_dir: Path | None = None, boundary: Path | None = None) -> Path:
    """Find the Unity project root by walking up from a directory.

    Markers, most specific first:
    1. Assets/ and ProjectSettings/ directories
    2. A .sln solution file
    3. .git

    The search does not go above ``boundary`` when given, and falls back to
    the start directory when no marker is found.
    """
    current = (start_dir or Path.cwd()).resolve()
    limit = boundary.resolve() if boundary is not None else None

    def ancestors() -> Iterator[Path]:
        yield current
        if current == limit:
            return
        for parent in current.parents:
            yield parent
            if parent == limit:
                return

    for directory in ancestors():
        if is_unity_project(directory):
            return directory

    for directory in ancestors():
        if any(directory.glob("*.sln")):
            return directory

    for directory in ancestors():
        if (directory / ".git").exists():  # file for worktrees
            return directory

    return current


def _usable_directory(path: Path) -> bool:
    return path.exists() and path.is_dir()


async def get_project_root(ctx: Context | None = None) -> Path | None:
    """Determine the project root from the available sources.

    Args:
        ctx: MCP Context for client-provided roots; None outside a tool call

    Returns:
        Project root, or None if no source yields one
    """
    config = get_config()

    if ctx is not None:
        try:
            roots = await ctx.list_roots()
        except Exception as e:
            # Client may not support roots
            logger.info(f"Could not get roots from client: {e}")
            roots = None
        if roots:
            uri = str(roots[0].uri)
            path = parse_file_uri(uri)
            if path and _usable_directory(path):
                logger.info(f"Using project root from MCP client: {path}")
                return path
            logger.warning(f"MCP root path invalid or not accessible: {uri}")

    for env_var in config.env_var_names:
        env_value = os.environ.get(env_var)
        if not env_value:
            continue
        path = Path(env_value)
        if _usable_directory(path):
            logger.info(f"Using project root from {env_var}: {path}")
            return path
        logger.warning(f"{env_var}={env_value} - path does not exist or is not a directory")

    if config.explicit_project_path:
        if _usable_directory(config.explicit_project_path):
            return config.explicit_project_path
        logger.warning(f"Explicit project path not valid: {config.explicit_project_path}")

    if config.use_project_from_cwd and config.startup_cwd:
        project_root = find_unity_project_root(config.startup_cwd)
        logger.info(f"Using project root from CWD search: {project_root}")
        return project_root

    if config.startup_cwd:
        return config.startup_cwd

    logger.warning("Could not determine project root from any source")
    return None
