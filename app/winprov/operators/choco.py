"""Chocolatey package operator implementation."""

from winprov.models.package import PackageManager, PackageSpec
from winprov.operators.base import Operator
from winprov.utils.shell import CommandResult

# Chocolatey exit codes meaning success with a pending reboot
_REBOOT_CODES = (1641, 3010)


class ChocoOperator(Operator):
    """Operator for Chocolatey packages."""

    @property
    def manager(self) -> PackageManager:
        """Return CHOCO as the package manager."""
        return PackageManager.CHOCO

    @property
    def executable(self) -> str:
        """Return the choco command name."""
        return "choco"

    def build_install_args(self, package: PackageSpec) -> list[str]:
        """Build ``choco install <id> -y`` arguments."""
        return ["install", package.id, "-y", "--no-progress", *package.args]

    def is_success(self, result: CommandResult) -> bool:
        """Treat reboot-required exit codes as success."""
        return result.success or result.returncode in _REBOOT_CODES
