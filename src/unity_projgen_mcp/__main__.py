"""Entry point for unity-projgen-mcp server."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from .server import create_server
from .utils.project import configure_project_root, find_unity_project_root


def configure_logging() -> None:
    """Configure logging based on environment."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Unity Project Generation MCP Server - assembly catalog and "
        "project file tracking for IDEs"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--project",
        type=str,
        default=None,
        help="Unity project root. Defaults to the current working directory.",
    )
    group.add_argument(
        "--project-from-cwd",
        action="store_true",
        default=False,
        help="Auto-detect the project from the current working directory. "
        "Searches upward for Assets/ and ProjectSettings/, a .sln file, or .git.",
    )
    return parser.parse_args(argv)


def resolve_startup_project(args: argparse.Namespace) -> str:
    """Project root to start with, from parsed arguments."""
    if args.project_from_cwd:
        return str(find_unity_project_root(Path.cwd()))
    return args.project or os.getcwd()


async def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    configure_logging()
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    project_path = resolve_startup_project(args)
    configure_project_root(
        use_project_from_cwd=args.project_from_cwd,
        explicit_project_path=args.project,
        startup_cwd=os.getcwd(),
    )

    logger.info(f"Starting Unity Project Generation MCP Server (project: {project_path})...")
    mcp = create_server(project_path)

    try:
        await mcp.run_stdio_async()
    except Exception:
        logger.exception("Server error")
        raise
    finally:
        logger.info("Server stopped")


def run() -> None:
    """Run the server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
