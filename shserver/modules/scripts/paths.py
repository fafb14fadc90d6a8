"""Script and folder path validation.

Script paths live in a flat virtual namespace such as ``/tools/sysinfo.sh``.
Lookups are exact string matches against stored paths, so validation only
normalises the leading slash and whitelists characters; it does not collapse
``.`` or ``..`` segments.
"""

from __future__ import annotations

import re

from .exceptions import InvalidPathError

SCRIPT_SUFFIX = ".sh"
SCRIPT_PATH_PATTERN = re.compile(r"^/[A-Za-z0-9_/.-]+\.sh$")
FOLDER_PATH_PATTERN = re.compile(r"^/[A-Za-z0-9_/.-]+$")
_ALLOWED_CHARS = re.compile(r"^[A-Za-z0-9_/.-]*$")


def validate_script_path(raw_path: str) -> str:
    path = raw_path if raw_path.startswith("/") else "/" + raw_path
    if not path.endswith(SCRIPT_SUFFIX):
        raise InvalidPathError("path must end with .sh")
    if not _ALLOWED_CHARS.match(path):
        raise InvalidPathError("path contains invalid characters")
    if not SCRIPT_PATH_PATTERN.match(path):
        raise InvalidPathError("path must name a script")
    return path


def validate_folder_path(raw_path: str) -> str:
    path = raw_path if raw_path.startswith("/") else "/" + raw_path
    path = path.rstrip("/")
    if not path:
        raise InvalidPathError("folder path must not be the root")
    if not _ALLOWED_CHARS.match(path):
        raise InvalidPathError("path contains invalid characters")
    if path.endswith(SCRIPT_SUFFIX):
        raise InvalidPathError("folder path must not end with .sh")
    if "//" in path:
        raise InvalidPathError("folder path must not contain empty segments")
    if not FOLDER_PATH_PATTERN.match(path):
        raise InvalidPathError("invalid folder path")
    return path


def path_segments(path: str) -> list[str]:
    """Split a path on ``/``, dropping empty segments."""
    return [segment for segment in path.split("/") if segment]


def script_name(path: str) -> str:
    segments = path_segments(path)
    return segments[-1] if segments else ""


def join_segments(segments: list[str]) -> str:
    return "/" + "/".join(segments)


def parent_path(path: str) -> str:
    segments = path_segments(path)
    if len(segments) <= 1:
        return "/"
    return join_segments(segments[:-1])


def ancestor_paths(path: str) -> list[str]:
    """Every folder prefix of ``path``, shallowest first, leaf excluded.

    >>> ancestor_paths("/a/b/c.sh")
    ['/a', '/a/b']
    """
    segments = path_segments(path)
    return [join_segments(segments[:depth]) for depth in range(1, len(segments))]


__all__ = [
    "SCRIPT_PATH_PATTERN",
    "ancestor_paths",
    "join_segments",
    "parent_path",
    "path_segments",
    "script_name",
    "validate_folder_path",
    "validate_script_path",
]
