"""Compiler response (.rsp) file parsing.

Response files hold extra compiler arguments, one or more per line:

    # comment
    -define:FEATURE_A;FEATURE_B
    -r:"Plugins/My Lib.dll"
    -unsafe
    -nowarn:0169

Defines, references and the unsafe switch are extracted; every other token is
kept verbatim in ``other_arguments``.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..catalog.models import ResponseFileData
from ..errors import ResponseFileError

logger = logging.getLogger(__name__)

_VALUE_SEPARATORS = re.compile(r"[;,]")

DEFINE_OPTIONS = frozenset({"define", "d"})
REFERENCE_OPTIONS = frozenset({"reference", "r"})


def tokenize(line: str) -> Iterator[str]:
    """Split a response file line on whitespace, honouring double quotes.

    Quote characters are removed, so ``-r:"a b.dll"`` yields ``-r:a b.dll``.
    """
    token: list[str] = []
    in_quotes = False
    has_token = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            has_token = True
        elif char.isspace() and not in_quotes:
            if has_token:
                yield "".join(token)
            token = []
            has_token = False
        else:
            token.append(char)
            has_token = True
    if has_token:
        yield "".join(token)


def _resolve_reference(
    reference: str,
    project_directory: str,
    system_reference_directories: Sequence[str],
) -> str | None:
    if os.path.isabs(reference):
        return reference if os.path.exists(reference) else None
    for directory in (project_directory, *system_reference_directories):
        candidate = os.path.join(directory, reference)
        if os.path.exists(candidate):
            return os.path.abspath(candidate)
    return None


def parse_response_file(
    response_file_path: str,
    project_directory: str,
    system_reference_directories: Sequence[str] = (),
) -> ResponseFileData:
    """Parse a response file.

    Args:
        response_file_path: Path to the .rsp file, relative to project_directory
            unless absolute
        project_directory: Directory relative references are resolved against
        system_reference_directories: Further directories searched for references

    Returns:
        Parsed data; unresolvable references are reported in ``errors``

    Raises:
        ResponseFileError: If the file does not exist or cannot be read
    """
    path = Path(response_file_path)
    if not path.is_absolute():
        path = Path(project_directory) / path

    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise ResponseFileError(f"Response file not found: {response_file_path}") from e
    except OSError as e:
        raise ResponseFileError(f"Cannot read response file {response_file_path}: {e}") from e

    data = ResponseFileData()
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        for token in tokenize(line):
            if not token.startswith(("-", "/")):
                data.other_arguments.append(token)
                continue

            name, _, value = token[1:].partition(":")
            option = name.lower()

            if option in DEFINE_OPTIONS:
                data.defines.extend(v.strip() for v in _VALUE_SEPARATORS.split(value) if v.strip())
            elif option in REFERENCE_OPTIONS:
                for reference in _VALUE_SEPARATORS.split(value):
                    reference = reference.strip()
                    if not reference:
                        continue
                    # -r:Alias=Path/To.dll
                    if "=" in reference:
                        reference = reference.split("=", 1)[1]
                    resolved = _resolve_reference(
                        reference, project_directory, system_reference_directories
                    )
                    if resolved is None:
                        data.errors.append(f"Reference '{reference}' not found.")
                    else:
                        data.full_path_references.append(resolved)
            elif option in ("unsafe", "unsafe+"):
                data.unsafe = True
            elif option == "unsafe-":
                data.unsafe = False
            else:
                data.other_arguments.append(token)

    if data.errors:
        logger.debug(f"{response_file_path}: {len(data.errors)} unresolved references")
    return data
