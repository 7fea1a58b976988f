"""Assembly discovery and filtering for project generation.

Provides:
- Editor and player assembly collection with output-path based naming
- Package origin lookup with a per-package cache
- User-toggleable generation flags persisted in the preference store
"""

from .filters import SolutionFileFilter
from .flags import (
    DEFAULT_PROJECT_GENERATION_FLAG,
    PROJECT_GENERATION_FLAG_KEY,
    ProjectGenerationFlag,
)
from .models import (
    ApiCompatibilityLevel,
    Assembly,
    AssembliesType,
    AssemblyFlags,
    PackageInfo,
    PackageSource,
    PluginInfo,
    ResponseFileData,
    ScriptCompilerOptions,
)
from .provider import (
    EDITOR_OUTPUT_PATH,
    PLAYER_OUTPUT_PATH,
    AssemblyCatalog,
)

__all__ = [
    "AssemblyCatalog",
    "SolutionFileFilter",
    "ProjectGenerationFlag",
    "PROJECT_GENERATION_FLAG_KEY",
    "DEFAULT_PROJECT_GENERATION_FLAG",
    "EDITOR_OUTPUT_PATH",
    "PLAYER_OUTPUT_PATH",
    "Assembly",
    "AssembliesType",
    "AssemblyFlags",
    "ApiCompatibilityLevel",
    "ScriptCompilerOptions",
    "PackageInfo",
    "PackageSource",
    "PluginInfo",
    "ResponseFileData",
]
