"""Action models for package installation.

This module defines data structures for representing package
installation actions and their execution results.
"""

from dataclasses import dataclass

from winprov.models.package import PackageManager, PackageSpec


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of installing a single package.

    Attributes:
        package: The package that was installed.
        success: Whether the install completed successfully.
        message: Optional success message or additional information.
        error: Optional error message if the install failed.
        dry_run: Whether this was a dry-run (nothing executed).
    """

    package: PackageSpec
    success: bool
    message: str | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the install failed."""
        return not self.success

    @property
    def manager(self) -> PackageManager:
        """Package manager that handled this package."""
        return self.package.manager
