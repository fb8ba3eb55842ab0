"""Scoop package operator implementation.

Scoop is installed as a PowerShell shim (``scoop.cmd``/``scoop.ps1``);
the base class resolves it through PATH before running it.
"""

from winprov.models.package import PackageManager, PackageSpec
from winprov.operators.base import Operator


class ScoopOperator(Operator):
    """Operator for Scoop packages."""

    @property
    def manager(self) -> PackageManager:
        """Return SCOOP as the package manager."""
        return PackageManager.SCOOP

    @property
    def executable(self) -> str:
        """Return the scoop command name."""
        return "scoop"

    def build_install_args(self, package: PackageSpec) -> list[str]:
        """Build ``scoop install <id>`` arguments."""
        return ["install", package.id, *package.args]
