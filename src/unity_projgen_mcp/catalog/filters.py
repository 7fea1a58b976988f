"""Source file filter for solution generation."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .provider import AssemblyCatalog

BUILTIN_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {
        "cs",
        "uxml",
        "uss",
        "shader",
        "compute",
        "cginc",
        "hlsl",
        "glslinc",
        "template",
        "raytrace",
    }
)


class SolutionFileFilter:
    """Decides whether a source file belongs in the generated solution.

    Files of hidden packages are rejected; everything else is accepted by
    extension, built-in or user-configured.
    """

    def __init__(self, catalog: AssemblyCatalog):
        self._catalog = catalog

    def has_valid_extension(self, file: str) -> bool:
        extension = os.path.splitext(file)[1].lstrip(".").lower()
        if not extension:
            return False
        if extension in BUILTIN_EXTENSIONS:
            return True
        return extension in (e.lower() for e in self._catalog.project_supported_extensions)

    def __call__(self, file: str) -> bool:
        if self._catalog.is_internalized_package_path(file):
            return False
        return self.has_valid_extension(file)
