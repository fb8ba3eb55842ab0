"""Environment placeholder expansion for manifest paths.

Manifest paths are written the way they appear in Windows scripts
(``%USERPROFILE%\\.config``) but may also use POSIX ``$HOME`` or a
leading ``~``. The environment is passed in explicitly so callers
and tests can inject their own.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path

_PERCENT_VAR = re.compile(r"%([^%\s]+)%")
_DOLLAR_VAR = re.compile(r"\$(?:\{([^}]+)\}|([A-Za-z_][A-Za-z0-9_]*))")


def _lookup(env: Mapping[str, str], name: str) -> str | None:
    """Look up a variable, falling back to a case-insensitive match."""
    if name in env:
        return env[name]
    upper = name.upper()
    for key, value in env.items():
        if key.upper() == upper:
            return value
    return None


def _home(env: Mapping[str, str]) -> str:
    return _lookup(env, "USERPROFILE") or _lookup(env, "HOME") or str(Path.home())


def expand_path(raw: str, env: Mapping[str, str] | None = None) -> str:
    """Expand environment placeholders in a path string.

    Supports ``%VAR%``, ``$VAR``, ``${VAR}`` and a leading ``~``.
    Unknown variables are left verbatim, matching cmd.exe.

    Args:
        raw: Path string as written in the manifest.
        env: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Expanded path string (not normalized or resolved).
    """
    environ: Mapping[str, str] = os.environ if env is None else env

    def _percent(match: re.Match[str]) -> str:
        value = _lookup(environ, match.group(1))
        return match.group(0) if value is None else value

    def _dollar(match: re.Match[str]) -> str:
        value = _lookup(environ, match.group(1) or match.group(2))
        return match.group(0) if value is None else value

    expanded = _PERCENT_VAR.sub(_percent, raw)
    expanded = _DOLLAR_VAR.sub(_dollar, expanded)

    if expanded == "~" or expanded.startswith(("~/", "~\\")):
        expanded = _home(environ) + expanded[1:]

    return expanded
