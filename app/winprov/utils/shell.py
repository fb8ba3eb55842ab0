"""Process invocation for external tools (winget, choco, scoop, git, cmd)."""

import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit code and captured text of a finished process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """stderr if it has content, else stdout, stripped."""
        return self.stderr.strip() or self.stdout.strip()


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    Output is decoded as UTF-8; undecodable bytes are replaced, since
    installers print in whatever code page the console uses.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds to wait before giving up, None for no limit.
        cwd: Working directory, defaults to the current one.

    Returns:
        CommandResult; a non-zero exit is not an exception.

    Raises:
        subprocess.TimeoutExpired: The command ran past ``timeout``.
        FileNotFoundError: The executable does not exist.
    """
    logger.debug("Running %s", subprocess.list2cmdline(args))
    completed = subprocess.run(
        args,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """True if ``name`` is found on PATH."""
    return shutil.which(name) is not None


def resolve_command(name: str) -> str:
    """Full path of ``name`` on PATH, or ``name`` itself if not found.

    Windows shims such as ``scoop.cmd`` cannot be started by
    CreateProcess under their bare name, so callers pass the resolved
    path instead.
    """
    return shutil.which(name) or name
