"""Declarative filesystem link reconciliation.

Ensures each configured path exists as a link to its target inside
the dotfiles store. Every mapping is handled independently: failures
are reported as results and never abort the batch.
"""

import logging
import os
import shutil
import subprocess
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path, PurePath

from winprov.core.expand import expand_path
from winprov.links.models import LinkKind, LinkOutcome, LinkResult, LinkSpec, LinkSummary
from winprov.utils.shell import run_command

logger = logging.getLogger(__name__)


def is_link(path: Path) -> bool:
    """Check if a path is a symbolic link or an NTFS junction."""
    return path.is_symlink() or path.is_junction()


def _same_location(left: str, right: str) -> bool:
    """Compare two paths after resolving links and normalizing case."""
    return os.path.normcase(os.path.realpath(left)) == os.path.normcase(os.path.realpath(right))


class LinkReconciler:
    """Reconciles link mappings against the filesystem.

    Attributes:
        _overwrite: Replace existing entries that are not the expected link.
        _dry_run: Report what would happen without modifying the filesystem.
        _backup_root: Directory receiving replaced entries, None to delete them.
        _env: Environment used to expand placeholders in paths.
    """

    def __init__(
        self,
        *,
        overwrite: bool = False,
        dry_run: bool = False,
        backup_dir: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the LinkReconciler.

        Args:
            overwrite: If True, replace existing files, directories or
                foreign links at the link path.
            dry_run: If True, report outcomes without touching the filesystem.
            backup_dir: If set, replaced entries are moved into a timestamped
                subdirectory here instead of being deleted.
            env: Environment mapping for placeholder expansion.
                Defaults to ``os.environ``.
        """
        self._overwrite = overwrite
        self._dry_run = dry_run
        self._backup_root = backup_dir
        self._env = env
        self._batch_backup_dir: Path | None = None

    @property
    def dry_run(self) -> bool:
        """Check if reconciler is in dry-run mode."""
        return self._dry_run

    def reconcile_all(self, specs: Iterable[LinkSpec]) -> list[LinkResult]:
        """Reconcile link mappings in order and return one result per mapping.

        Args:
            specs: Ordered link mappings.

        Returns:
            List of LinkResult, one per input mapping.
        """
        results = [self.reconcile(spec) for spec in specs]
        summary = LinkSummary.from_results(results)
        logger.info(
            "Reconciled %d link(s): %d created, %d unchanged, %d failed",
            summary.total,
            summary.count(LinkOutcome.CREATED),
            summary.count(LinkOutcome.ALREADY_CORRECT),
            summary.count(LinkOutcome.FAILED),
        )
        return results

    def reconcile(self, spec: LinkSpec) -> LinkResult:
        """Ensure a single link exists and points at its target.

        Args:
            spec: The link mapping to reconcile.

        Returns:
            LinkResult describing the outcome. Never raises for
            filesystem errors; they are captured in the result.
        """
        path = expand_path(spec.path, self._env)
        target = expand_path(spec.target, self._env)
        link = Path(path)

        if not os.path.exists(target):
            logger.debug("Target missing, skipping %s -> %s", path, target)
            return LinkResult(path=path, target=target, outcome=LinkOutcome.SKIPPED_TARGET_MISSING)

        if not self._dry_run:
            try:
                link.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning("Cannot create parent directory for %s: %s", path, e)
                return self._failed(path, target, str(e))

        backup_path: str | None = None
        if os.path.lexists(path):
            if is_link(link) and _same_location(path, target):
                return LinkResult(
                    path=path,
                    target=target,
                    outcome=LinkOutcome.ALREADY_CORRECT,
                    dry_run=self._dry_run,
                )

            if not self._overwrite:
                logger.info("Path exists and overwrite is off, skipping %s", path)
                return LinkResult(
                    path=path,
                    target=target,
                    outcome=LinkOutcome.SKIPPED_EXISTS,
                    dry_run=self._dry_run,
                )

            if self._dry_run:
                logger.info("Dry-run: would replace %s with link to %s", path, target)
                return self._planned(path, target)

            try:
                backup_path = self._clear_path(link)
            except OSError as e:
                logger.warning("Cannot remove existing entry %s: %s", path, e)
                return self._failed(path, target, str(e))

        if self._dry_run:
            logger.info("Dry-run: would link %s -> %s", path, target)
            return self._planned(path, target)

        try:
            kind = self._create_link(path, target)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Cannot link %s -> %s: %s", path, target, e)
            return self._failed(path, target, str(e), backup_path=backup_path)

        logger.info("Linked %s -> %s (%s)", path, target, kind.value)
        return LinkResult(
            path=path,
            target=target,
            outcome=LinkOutcome.CREATED,
            kind=kind,
            backup_path=backup_path,
        )

    def _clear_path(self, link: Path) -> str | None:
        """Move aside or delete whatever currently occupies the link path.

        Existing links are always unlinked. Files and directories are
        moved to the backup directory when one is configured; a failed
        backup falls back to deletion.

        Args:
            link: Path to clear.

        Returns:
            Backup location as string, or None if the entry was deleted.

        Raises:
            OSError: If the entry cannot be removed.
        """
        if is_link(link):
            link.unlink()
            return None

        if self._backup_root is not None:
            backup_path = self._backup(link)
            if backup_path is not None:
                return backup_path

        if link.is_dir():
            shutil.rmtree(link)
        else:
            link.unlink()
        return None

    def _backup(self, source: Path) -> str | None:
        """Move an entry into this batch's backup directory.

        The path below the drive or root is preserved, so
        ``C:\\Users\\me\\.gitconfig`` lands at ``<batch>\\Users\\me\\.gitconfig``.

        Args:
            source: Entry to move.

        Returns:
            Backup path as string if successful, None on failure.
        """
        try:
            relative = PurePath(source.absolute()).parts[1:]
            dest = self._get_batch_backup_dir().joinpath(*relative)
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(dest))
        except OSError as e:
            logger.warning("Backup failed for %s: %s", source, e)
            return None
        logger.info("Backed up %s to %s", source, dest)
        return str(dest)

    def _get_batch_backup_dir(self) -> Path:
        """Return the timestamped backup directory for this reconciler."""
        if self._batch_backup_dir is None:
            timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")
            self._batch_backup_dir = Path(self._backup_root or ".") / timestamp
        return self._batch_backup_dir

    @staticmethod
    def _create_link(path: str, target: str) -> LinkKind:
        """Create a link of the kind the target requires.

        Directories get a junction on Windows (no privilege needed) and
        a directory symlink elsewhere; files get a file symlink.

        Args:
            path: Link location.
            target: Existing file or directory to point at.

        Returns:
            The LinkKind that was created.

        Raises:
            OSError: If the link cannot be created.
            subprocess.SubprocessError: If ``mklink`` times out.
        """
        if os.path.isdir(target):
            if os.name == "nt":
                result = run_command(["cmd", "/c", "mklink", "/J", path, target], timeout=30.0)
                if not result.success:
                    raise OSError(result.error_text or "mklink /J failed")
                return LinkKind.JUNCTION
            os.symlink(target, path, target_is_directory=True)
            return LinkKind.DIRECTORY_SYMLINK

        os.symlink(target, path)
        return LinkKind.FILE_SYMLINK

    @staticmethod
    def _planned(path: str, target: str) -> LinkResult:
        return LinkResult(path=path, target=target, outcome=LinkOutcome.CREATED, dry_run=True)

    @staticmethod
    def _failed(
        path: str,
        target: str,
        error: str,
        backup_path: str | None = None,
    ) -> LinkResult:
        return LinkResult(
            path=path,
            target=target,
            outcome=LinkOutcome.FAILED,
            error=error,
            backup_path=backup_path,
        )
