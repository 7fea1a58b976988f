"""MCP Tools for project generation."""

from .assemblies import register_assembly_tools
from .generation import register_generation_tools
from .packages import register_package_tools

__all__ = [
    "register_assembly_tools",
    "register_generation_tools",
    "register_package_tools",
]
