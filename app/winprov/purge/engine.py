"""Glob purge engine for temporary and prefetch directories.

Expands a cleanup pattern, enumerates every matching entry, and
deletes them deepest-first. Entries that disappear during the run are
counted, not reported as errors, and a locked file never aborts the
rest of the purge.
"""

import glob
import logging
import os
import shutil
import stat
from collections.abc import Callable, Iterable, Mapping

from winprov.core.expand import expand_path
from winprov.purge.models import PurgeItem, PurgeRequest, PurgeSummary
from winprov.purge.protected import is_protected_root

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?", "[")

DeleteFn = Callable[[str], None]


def is_glob_pattern(pattern: str) -> bool:
    """Check if a pattern contains glob wildcards."""
    return any(char in pattern for char in _GLOB_CHARS)


def normalize_pattern(expanded: str) -> str:
    """Turn an expanded pattern into an explicit "all entries" glob.

    A bare directory gets ``*`` appended so its contents, not the
    directory itself, are purged. Glob-shaped patterns and paths that
    are not directories are returned unchanged.

    Args:
        expanded: Pattern with placeholders already expanded.

    Returns:
        Normalized pattern.
    """
    if is_glob_pattern(expanded) or not os.path.isdir(expanded):
        return expanded
    return os.path.join(expanded, "*")


def _pattern_base(pattern: str) -> str:
    """Return the deepest directory of a pattern that contains no wildcards."""
    parts: list[str] = []
    for part in pattern.replace("\\", "/").split("/"):
        if is_glob_pattern(part):
            break
        parts.append(part)
    base = os.sep.join(parts) if parts != [""] else os.sep
    if base.endswith(":"):
        # Bare drive ("C:") means the drive root, not its current directory
        base += os.sep
    return base or os.curdir


def _make_writable(path: str) -> None:
    """Add owner write permission (and read/search for directories) to a path."""
    mode = stat.S_IMODE(os.lstat(path).st_mode)
    extra = stat.S_IRWXU if os.path.isdir(path) else stat.S_IREAD | stat.S_IWRITE
    os.chmod(path, mode | extra)


def _clear_readonly(func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """rmtree error hook: make the entry and its parent writable, then retry once."""
    if isinstance(exc, FileNotFoundError):
        return
    parent = os.path.dirname(path)
    if parent and not os.path.islink(parent):
        _make_writable(parent)
    if not os.path.islink(path):
        _make_writable(path)
    func(path)


def force_delete(path: str) -> None:
    """Delete a file, link or directory tree, clearing read-only attributes.

    Links are never chmod-ed; a refused link deletion is raised as is.

    Args:
        path: Absolute path to delete.

    Raises:
        OSError: If the entry cannot be deleted (in use, access denied).
    """
    if os.path.isdir(path) and not os.path.islink(path) and not os.path.isjunction(path):
        shutil.rmtree(path, onexc=_clear_readonly)
        return

    try:
        os.unlink(path)
    except PermissionError:
        if os.path.islink(path) or os.path.isjunction(path):
            raise
        _make_writable(path)
        os.unlink(path)


class PurgeEngine:
    """Deletes every filesystem entry matching cleanup patterns.

    Requests are processed sequentially; no two deletions ever run
    concurrently.

    Attributes:
        _env: Environment used to expand placeholders in patterns.
        _delete: Callable that deletes a single path.
        _dry_run: Enumerate and report without deleting.
    """

    def __init__(
        self,
        *,
        env: Mapping[str, str] | None = None,
        delete: DeleteFn | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the PurgeEngine.

        Args:
            env: Environment mapping for placeholder expansion.
                Defaults to ``os.environ``.
            delete: Deletion callable, defaults to :func:`force_delete`.
            dry_run: If True, count what would be deleted without deleting.
        """
        self._env = env
        self._delete = delete or force_delete
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if engine is in dry-run mode."""
        return self._dry_run

    def purge_all(self, requests: Iterable[PurgeRequest]) -> list[PurgeSummary]:
        """Purge several requests one after another.

        Args:
            requests: Ordered cleanup requests.

        Returns:
            List of PurgeSummary, one per request.
        """
        return [self.purge(request) for request in requests]

    def purge(self, request: PurgeRequest) -> PurgeSummary:
        """Delete every entry matching a single request.

        Args:
            request: The cleanup request.

        Returns:
            PurgeSummary with counts. Never raises for missing targets
            or per-entry failures.
        """
        pattern = normalize_pattern(expand_path(request.pattern, self._env))

        base = _pattern_base(pattern) if is_glob_pattern(pattern) else pattern
        if is_protected_root(base, self._env):
            reason = f"Refusing to purge protected directory: {base}"
            logger.error(reason)
            return PurgeSummary(pattern=pattern, refused=reason)

        try:
            items = self.enumerate(pattern)
        except (OSError, ValueError) as e:
            logger.error("Cannot enumerate %s: %s", pattern, e)
            return PurgeSummary(pattern=pattern)

        if not items:
            logger.info("Nothing to purge for %s", pattern)
            return PurgeSummary(pattern=pattern)

        if self._dry_run:
            logger.info("Dry-run: would purge %d entries for %s", len(items), pattern)
            return PurgeSummary(pattern=pattern, requested=len(items))

        deleted = 0
        already_gone = 0
        errors: list[str] = []

        for item in items:
            # An earlier deletion may already have taken this entry with it
            if not os.path.lexists(item.absolute_path):
                already_gone += 1
                logger.debug("Already gone: %s", item.absolute_path)
                continue

            try:
                self._delete(item.absolute_path)
            except OSError as e:
                errors.append(f"{item.absolute_path}: {e}")
                logger.warning("Cannot delete %s: %s", item.absolute_path, e)
                continue

            deleted += 1

        logger.info(
            "Purged %s: %d deleted, %d already gone, %d failed",
            pattern,
            deleted,
            already_gone,
            len(errors),
        )
        return PurgeSummary(
            pattern=pattern,
            requested=len(items),
            deleted=deleted,
            failed=len(errors),
            already_gone=already_gone,
            errors=tuple(errors),
        )

    def enumerate(self, pattern: str) -> list[PurgeItem]:
        """Enumerate all entries for a normalized pattern, deepest first.

        Two passes are merged and deduplicated by absolute path:

        1. Recursive: glob matches, dot-prefixed ones included, plus
           everything beneath matched directories (links are not followed).
        2. Direct probe: top-level glob matches, plus the literal pattern
           path itself when it exists (a dangling link is still found).

        Args:
            pattern: Normalized pattern (see :func:`normalize_pattern`).

        Returns:
            PurgeItems sorted by path length, longest first.
        """
        merged: dict[str, str] = {}
        for path in (*self._enumerate_recursive(pattern), *self._probe_direct(pattern)):
            absolute = os.path.abspath(path)
            merged.setdefault(os.path.normcase(absolute), absolute)

        items = [
            PurgeItem(
                absolute_path=path,
                is_directory=os.path.isdir(path) and not os.path.islink(path),
                path_length=len(path),
            )
            for path in merged.values()
        ]
        items.sort(key=lambda item: item.path_length, reverse=True)
        return items

    @staticmethod
    def _enumerate_recursive(pattern: str) -> list[str]:
        """First pass: glob matches, hidden ones included, and their full subtrees.

        Missing or unreadable directories yield nothing.
        """
        found: list[str] = []
        for match in glob.glob(pattern, include_hidden=True):
            found.append(match)
            if not os.path.isdir(match) or os.path.islink(match) or os.path.isjunction(match):
                continue
            for root, dirs, files in os.walk(match, onerror=_log_walk_error):
                found.extend(os.path.join(root, name) for name in dirs)
                found.extend(os.path.join(root, name) for name in files)
        return found

    @staticmethod
    def _probe_direct(pattern: str) -> list[str]:
        """Second pass: top-level matches including hidden entries.

        A non-glob pattern is probed literally, without following links.
        """
        if not is_glob_pattern(pattern):
            return [pattern] if os.path.lexists(pattern) else []
        return glob.glob(pattern, include_hidden=True)


def _log_walk_error(error: OSError) -> None:
    logger.debug("Skipping unreadable directory during purge: %s", error)
