"""Plugin settings loaded from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class LoggingLevel(IntEnum):
    """Plugin diagnostic verbosity, ordered from silent to most verbose."""

    OFF = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    VERBOSE = 5
    TRACE = 6


def default_preferences_path() -> Path:
    """Location of the per-user preference file."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "unity-projgen-mcp" / "prefs.json"


def _parse_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning(f"{name}={value!r} is not a boolean, using {default}")
    return default


def _parse_logging_level(name: str, default: LoggingLevel) -> LoggingLevel:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    value = value.strip()
    if value.isdigit():
        try:
            return LoggingLevel(int(value))
        except ValueError:
            pass
    else:
        try:
            return LoggingLevel[value.upper()]
        except KeyError:
            pass
    logger.warning(f"{name}={value!r} is not a logging level, using {default.name}")
    return default


@dataclass
class PluginSettings:
    """Settings that shape project generation and file tracking."""

    track_project_file_changes: bool = True
    """Whether generated project files are checked for external changes."""

    logging_level: LoggingLevel = LoggingLevel.INFO
    """Plugin diagnostic verbosity."""

    user_extensions: tuple[str, ...] = ()
    """Extra file extensions (without dot) that belong in generated projects."""

    root_namespace: str = ""
    """Root namespace written into generated projects."""

    supports_local_tarball: bool = True
    """Whether the host knows about local-tarball packages."""

    preferences_path: Path = field(default_factory=default_preferences_path)
    """File backing the user preference store."""

    @classmethod
    def from_env(cls) -> PluginSettings:
        """Build settings from PROJGEN_* environment variables."""
        raw_extensions = os.environ.get("PROJGEN_USER_EXTENSIONS", "")
        extensions = tuple(
            ext.strip().lstrip(".") for ext in raw_extensions.split(";") if ext.strip()
        )
        preferences = os.environ.get("PROJGEN_PREFERENCES")
        return cls(
            track_project_file_changes=_parse_bool("PROJGEN_TRACK_FILE_CHANGES", True),
            logging_level=_parse_logging_level("PROJGEN_LOGGING_LEVEL", LoggingLevel.INFO),
            user_extensions=extensions,
            root_namespace=os.environ.get("PROJGEN_ROOT_NAMESPACE", ""),
            supports_local_tarball=_parse_bool("PROJGEN_LOCAL_TARBALL", True),
            preferences_path=Path(preferences) if preferences else default_preferences_path(),
        )
