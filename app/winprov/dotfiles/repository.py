"""Dotfiles repository checkout.

Clones the personal dotfiles repository on first run and fast-forwards
it afterwards, so link targets always exist before links are reconciled.
"""

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from winprov.core.expand import expand_path
from winprov.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Cloning over a slow connection can take a while
_GIT_TIMEOUT: float = 600.0


class RepositoryAction(str, Enum):
    """What was done (or would be done) to the dotfiles checkout.

    Attributes:
        CLONE: Fresh clone into an empty or missing directory.
        PULL: Fast-forward of an existing clone.
    """

    CLONE = "clone"
    PULL = "pull"


@dataclass(frozen=True, slots=True)
class RepositoryResult:
    """Result of ensuring the dotfiles checkout.

    Attributes:
        repository: Git URL of the repository.
        path: Expanded local checkout path.
        action: Clone or pull.
        success: Whether git completed successfully.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (git not executed).
    """

    repository: str
    path: str
    action: RepositoryAction
    success: bool
    error: str | None = None
    dry_run: bool = False


def ensure_repository(
    repository: str,
    path: str,
    *,
    branch: str | None = None,
    dry_run: bool = False,
    env: Mapping[str, str] | None = None,
) -> RepositoryResult:
    """Clone the repository if missing, otherwise pull with --ff-only.

    Args:
        repository: Git URL to clone.
        path: Checkout location, may contain placeholders.
        branch: Optional branch for the initial clone.
        dry_run: If True, report the planned action without running git.
        env: Environment mapping for placeholder expansion.

    Returns:
        RepositoryResult; git failures are reported, never raised.
    """
    dest = expand_path(path, env)
    is_clone = os.path.isdir(os.path.join(dest, ".git"))
    action = RepositoryAction.PULL if is_clone else RepositoryAction.CLONE

    def _result(success: bool, error: str | None = None) -> RepositoryResult:
        return RepositoryResult(
            repository=repository,
            path=dest,
            action=action,
            success=success,
            error=error,
            dry_run=dry_run,
        )

    if not is_clone and os.path.isdir(dest) and os.listdir(dest):
        return _result(False, f"{dest} exists and is not a git repository")

    if dry_run:
        logger.info("Dry-run: would %s %s into %s", action.value, repository, dest)
        return _result(True)

    if not command_exists("git"):
        return _result(False, "git is not available on this system")

    if is_clone:
        args = ["git", "-C", dest, "pull", "--ff-only"]
    else:
        args = ["git", "clone"]
        if branch:
            args.extend(["--branch", branch])
        args.extend([repository, dest])

    logger.info("Running git %s for %s", action.value, dest)
    try:
        if not is_clone:
            os.makedirs(os.path.dirname(dest) or os.curdir, exist_ok=True)
        result = run_command(args, timeout=_GIT_TIMEOUT)
    except (OSError, subprocess.SubprocessError) as e:
        return _result(False, str(e))

    if not result.success:
        return _result(False, result.error_text or f"git {action.value} failed")

    return _result(True)
