"""Abstract base class for package operators.

This module defines the Operator interface that all package manager
operators implement. Installation runs one package per command so a
single failing package never hides the others.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from winprov.models.action import ActionResult
from winprov.models.package import PackageManager, PackageSpec
from winprov.utils.shell import CommandResult, command_exists, resolve_command, run_command

logger = logging.getLogger(__name__)


class Operator(ABC):
    """Abstract base class for all package operators.

    Attributes:
        dry_run: If True, only simulate actions without executing them.

    Example:
        >>> operator = WingetOperator(dry_run=True)
        >>> if operator.is_available():
        ...     for result in operator.install(packages):
        ...         print(f"{result.package.id}: {result.success}")
    """

    # Installers can be slow (30 minutes)
    _INSTALL_TIMEOUT: float = 1800.0

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only simulate actions without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def manager(self) -> PackageManager:
        """Return the package manager this operator handles."""

    @property
    @abstractmethod
    def executable(self) -> str:
        """Return the command name of the package manager."""

    @abstractmethod
    def build_install_args(self, package: PackageSpec) -> list[str]:
        """Build the install command line (without the executable).

        Args:
            package: Package to install.

        Returns:
            Arguments following the executable.
        """

    def is_available(self) -> bool:
        """Check if this package manager is available on the system."""
        return command_exists(self.executable)

    def install(self, packages: list[PackageSpec]) -> list[ActionResult]:
        """Install packages one at a time.

        Args:
            packages: Packages to install; all must belong to this manager.

        Returns:
            List of ActionResult for each package.

        Raises:
            RuntimeError: If the package manager is not available.
            ValueError: If a package belongs to another manager.
        """
        for package in packages:
            if package.manager != self.manager:
                msg = (
                    f"Package {package.id} uses {package.manager.value}, "
                    f"not {self.manager.value}"
                )
                raise ValueError(msg)

        if not packages:
            return []

        if not self._dry_run and not self.is_available():
            msg = f"{self.manager.value} is not available on this system"
            raise RuntimeError(msg)

        return [self._install_single(package) for package in packages]

    def _install_single(self, package: PackageSpec) -> ActionResult:
        """Install a single package.

        Args:
            package: Package to install.

        Returns:
            ActionResult for this package.
        """
        if self._dry_run:
            logger.info("Dry-run: would install %s via %s", package.id, self.manager.value)
            return ActionResult(
                package=package,
                success=True,
                message="Dry-run: would install",
                dry_run=True,
            )

        args = [resolve_command(self.executable), *self.build_install_args(package)]

        logger.info("Installing %s via %s", package.id, self.manager.value)
        try:
            result = run_command(args, timeout=self._INSTALL_TIMEOUT)
        except (OSError, subprocess.SubprocessError) as e:
            return ActionResult(package=package, success=False, error=str(e))

        return self._create_result(package, result)

    def _create_result(self, package: PackageSpec, result: CommandResult) -> ActionResult:
        """Create an ActionResult from a CommandResult.

        Args:
            package: The package that was installed.
            result: The command execution result.

        Returns:
            ActionResult with appropriate success/error info.
        """
        if self.is_success(result):
            return ActionResult(package=package, success=True, message="Installed")

        error_msg = result.error_text or f"{self.executable} exited with {result.returncode}"
        logger.warning("Install of %s failed: %s", package.id, error_msg)
        return ActionResult(package=package, success=False, error=error_msg)

    def is_success(self, result: CommandResult) -> bool:
        """Decide whether an install command succeeded.

        Subclasses override this for managers with non-zero success codes.
        """
        return result.success
