"""winget package operator implementation.

Installs packages with the Windows Package Manager CLI.
"""

from winprov.models.package import PackageManager, PackageSpec
from winprov.operators.base import Operator
from winprov.utils.shell import CommandResult

# winget exit code when the package is already installed
# (APPINSTALLER_CLI_ERROR_PACKAGE_ALREADY_INSTALLED, 0x8A15002B)
_ALREADY_INSTALLED = 0x8A15002B


class WingetOperator(Operator):
    """Operator for winget packages.

    Packages are matched by exact id; agreements are accepted so the
    install never blocks on a prompt.
    """

    @property
    def manager(self) -> PackageManager:
        """Return WINGET as the package manager."""
        return PackageManager.WINGET

    @property
    def executable(self) -> str:
        """Return the winget command name."""
        return "winget"

    def build_install_args(self, package: PackageSpec) -> list[str]:
        """Build ``winget install --id <id> --exact`` arguments."""
        return [
            "install",
            "--id",
            package.id,
            "--exact",
            "--silent",
            "--accept-package-agreements",
            "--accept-source-agreements",
            *package.args,
        ]

    def is_success(self, result: CommandResult) -> bool:
        """Treat "already installed" as success.

        The exit code arrives as signed or unsigned depending on the host.
        """
        return result.success or result.returncode & 0xFFFFFFFF == _ALREADY_INSTALLED
