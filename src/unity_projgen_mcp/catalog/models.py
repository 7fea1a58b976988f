"""Assembly, package and plugin types exchanged with the host editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Any


class AssembliesType(str, Enum):
    """Compilation target kinds."""

    EDITOR = "editor"  # Tooling-side compilation
    PLAYER = "player"  # Deployment-side compilation


class AssemblyFlags(IntFlag):
    """Flags the compilation pipeline attaches to an assembly."""

    NONE = 0
    EDITOR_ASSEMBLY = 1


class ApiCompatibilityLevel(str, Enum):
    """Scripting API profile an assembly compiles against."""

    NET_2_0 = "NET_2_0"
    NET_2_0_SUBSET = "NET_2_0_Subset"
    NET_4_6 = "NET_4_6"
    NET_WEB = "NET_Web"
    NET_MICRO = "NET_Micro"
    NET_STANDARD_2_0 = "NET_Standard_2_0"
    NET_UNITY_4_8 = "NET_Unity_4_8"
    NET_STANDARD = "NET_Standard"


class PackageSource(str, Enum):
    """How a package arrived in the project."""

    UNKNOWN = "unknown"
    REGISTRY = "registry"
    BUILT_IN = "builtin"
    EMBEDDED = "embedded"
    LOCAL = "local"
    GIT = "git"
    LOCAL_TARBALL = "local-tarball"

    @classmethod
    def parse(cls, value: str | None) -> PackageSource:
        """Parse a source name, mapping anything unrecognized to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        normalized = value.strip().lower().replace("_", "-")
        if normalized == "built-in":
            normalized = "builtin"
        if normalized == "localtarball":
            normalized = "local-tarball"
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class ScriptCompilerOptions:
    """Compiler options of an assembly."""

    response_files: list[str] = field(default_factory=list)
    allow_unsafe_code: bool = False
    api_compatibility_level: ApiCompatibilityLevel = ApiCompatibilityLevel.NET_STANDARD_2_0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "responseFiles": list(self.response_files),
            "allowUnsafeCode": self.allow_unsafe_code,
            "apiCompatibilityLevel": self.api_compatibility_level.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScriptCompilerOptions:
        level = data.get("apiCompatibilityLevel")
        return cls(
            response_files=list(data.get("responseFiles", [])),
            allow_unsafe_code=bool(data.get("allowUnsafeCode", False)),
            api_compatibility_level=(
                ApiCompatibilityLevel(level) if level else ApiCompatibilityLevel.NET_STANDARD_2_0
            ),
        )


@dataclass
class Assembly:
    """A compilable unit: a named set of source files compiled together.

    Assemblies handed out by a compilation source are read-only input. The
    catalog builds new instances instead of modifying them.
    """

    name: str
    output_path: str
    source_files: list[str] = field(default_factory=list)
    defines: list[str] = field(default_factory=list)
    assembly_references: list[str] = field(default_factory=list)
    """Names of other assemblies this one references."""
    compiled_assembly_references: list[str] = field(default_factory=list)
    """Paths of precompiled binaries this one references."""
    flags: AssemblyFlags = AssemblyFlags.NONE
    compiler_options: ScriptCompilerOptions = field(default_factory=ScriptCompilerOptions)
    root_namespace: str | None = None
    """Root namespace, absent from older compilation schemas."""

    @property
    def all_references(self) -> list[str]:
        """Assembly and compiled references combined."""
        return self.assembly_references + self.compiled_assembly_references

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "outputPath": self.output_path,
            "sourceFiles": list(self.source_files),
            "defines": list(self.defines),
            "assemblyReferences": list(self.assembly_references),
            "compiledAssemblyReferences": list(self.compiled_assembly_references),
            "flags": int(self.flags),
            "compilerOptions": self.compiler_options.to_dict(),
        }
        if self.root_namespace is not None:
            result["rootNamespace"] = self.root_namespace
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Assembly:
        return cls(
            name=data["name"],
            output_path=data.get("outputPath", ""),
            source_files=list(data.get("sourceFiles", [])),
            defines=list(data.get("defines", [])),
            assembly_references=list(data.get("assemblyReferences", [])),
            compiled_assembly_references=list(data.get("compiledAssemblyReferences", [])),
            flags=AssemblyFlags(int(data.get("flags", 0))),
            compiler_options=ScriptCompilerOptions.from_dict(data.get("compilerOptions", {})),
            root_namespace=data.get("rootNamespace"),
        )


@dataclass
class PackageInfo:
    """Metadata of a package owning a `packages/<name>` asset root."""

    name: str
    asset_path: str
    source: PackageSource = PackageSource.UNKNOWN
    version: str = ""
    display_name: str = ""
    resolved_path: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "assetPath": self.asset_path,
            "source": self.source.value,
            "version": self.version,
            "displayName": self.display_name,
            "resolvedPath": self.resolved_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageInfo:
        name = data["name"]
        return cls(
            name=name,
            asset_path=data.get("assetPath") or f"Packages/{name}",
            source=PackageSource.parse(data.get("source")),
            version=data.get("version", ""),
            display_name=data.get("displayName", ""),
            resolved_path=data.get("resolvedPath", ""),
        )


@dataclass
class PluginInfo:
    """An imported plugin binary."""

    asset_path: str
    is_native: bool = False
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginInfo:
        return cls(
            asset_path=data["assetPath"],
            is_native=bool(data.get("isNative", False)),
            labels=list(data.get("labels", [])),
        )


@dataclass
class ResponseFileData:
    """Parsed contents of a compiler response (.rsp) file."""

    defines: list[str] = field(default_factory=list)
    full_path_references: list[str] = field(default_factory=list)
    unsafe: bool = False
    errors: list[str] = field(default_factory=list)
    other_arguments: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "defines": list(self.defines),
            "fullPathReferences": list(self.full_path_references),
            "unsafe": self.unsafe,
            "errors": list(self.errors),
            "otherArguments": list(self.other_arguments),
        }
