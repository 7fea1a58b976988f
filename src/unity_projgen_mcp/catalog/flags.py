"""Project generation flags.

Each bit opts one class of content into the generated projects: packages of a
given origin, or the player (deployment-side) compilation of every assembly.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Final

from .models import PackageSource

PROJECT_GENERATION_FLAG_KEY: Final[str] = "unity_project_generation_flag"


class ProjectGenerationFlag(IntFlag):
    """Toggleable project generation policies."""

    NONE = 0
    EMBEDDED = 1
    LOCAL = 2
    REGISTRY = 4
    GIT = 8
    BUILT_IN = 16
    UNKNOWN = 32
    PLAYER_ASSEMBLIES = 64
    LOCAL_TARBALL = 128

    @classmethod
    def parse(cls, name: str) -> ProjectGenerationFlag:
        """Parse a flag name such as ``player_assemblies`` or ``LocalTarBall``.

        Raises:
            ValueError: If the name does not denote a flag
        """
        key = name.strip().replace("-", "").replace("_", "").replace(" ", "").upper()
        for member_name, member in cls.__members__.items():
            if member_name.replace("_", "") == key:
                return member
        raise ValueError(f"Unknown project generation flag: {name}")

    @classmethod
    def supported(cls, *, local_tarball: bool = True) -> list[ProjectGenerationFlag]:
        """Flags offered to the user, in menu order."""
        flags = [
            cls.EMBEDDED,
            cls.LOCAL,
            cls.REGISTRY,
            cls.GIT,
            cls.BUILT_IN,
        ]
        if local_tarball:
            flags.append(cls.LOCAL_TARBALL)
        flags.extend([cls.UNKNOWN, cls.PLAYER_ASSEMBLIES])
        return flags


DEFAULT_PROJECT_GENERATION_FLAG: Final[ProjectGenerationFlag] = (
    ProjectGenerationFlag.EMBEDDED | ProjectGenerationFlag.LOCAL
)

PACKAGE_SOURCE_FLAGS: Final[dict[PackageSource, ProjectGenerationFlag]] = {
    PackageSource.EMBEDDED: ProjectGenerationFlag.EMBEDDED,
    PackageSource.REGISTRY: ProjectGenerationFlag.REGISTRY,
    PackageSource.BUILT_IN: ProjectGenerationFlag.BUILT_IN,
    PackageSource.UNKNOWN: ProjectGenerationFlag.UNKNOWN,
    PackageSource.LOCAL: ProjectGenerationFlag.LOCAL,
    PackageSource.GIT: ProjectGenerationFlag.GIT,
    PackageSource.LOCAL_TARBALL: ProjectGenerationFlag.LOCAL_TARBALL,
}


def flag_for_package_source(
    source: PackageSource, *, local_tarball: bool = True
) -> ProjectGenerationFlag | None:
    """Flag gating packages of the given origin, or None when unmapped."""
    if source is PackageSource.LOCAL_TARBALL and not local_tarball:
        return None
    return PACKAGE_SOURCE_FLAGS.get(source)
