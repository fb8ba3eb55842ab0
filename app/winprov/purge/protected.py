"""Directories whose contents must never be purged wholesale.

A cleanup pattern is refused when the directory it enumerates is one
of these roots, so a typo such as ``%USERPROFILE%\\*`` or an unset
``%TEMP%`` expanding to ``\\*`` cannot wipe a profile or a drive.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from winprov.core.expand import expand_path

# Placeholders are expanded with the same environment as the pattern.
# Entries whose variables are unset stay unexpanded and never match.
PROTECTED_ROOTS: list[str] = [
    "~",
    "%USERPROFILE%",
    "%USERPROFILE%\\Documents",
    "%USERPROFILE%\\Desktop",
    "%APPDATA%",
    "%LOCALAPPDATA%",
    "%PROGRAMDATA%",
    "%PROGRAMFILES%",
    "%PROGRAMFILES(X86)%",
    "%SYSTEMROOT%",
    "%SYSTEMROOT%\\System32",
    "%WINDIR%",
]


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.normpath(os.path.abspath(path)))


def is_protected_root(directory: str, env: Mapping[str, str] | None = None) -> bool:
    """Check if a directory must not have its contents purged.

    Filesystem anchors (``C:\\``, ``/``) are always protected.

    Args:
        directory: Expanded directory the purge would enumerate.
        env: Environment mapping used to expand the protected roots.

    Returns:
        True if the directory is a protected root, False otherwise.
    """
    normalized = _normalize(directory)
    if normalized == _normalize(Path(normalized).anchor or os.sep):
        return True

    for root in PROTECTED_ROOTS:
        expanded = expand_path(root, env)
        if "%" in expanded:
            continue
        if normalized == _normalize(expanded):
            return True

    return False
