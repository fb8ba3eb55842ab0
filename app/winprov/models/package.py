"""Package manager models.

This module defines the package managers winprov can install through
and the typed package record read from the manifest.
"""

from dataclasses import dataclass
from enum import Enum


class PackageManager(str, Enum):
    """Windows package manager that installs a package.

    Attributes:
        WINGET: Windows Package Manager (winget).
        CHOCO: Chocolatey.
        SCOOP: Scoop.
    """

    WINGET = "winget"
    CHOCO = "choco"
    SCOOP = "scoop"


@dataclass(frozen=True, slots=True)
class PackageSpec:
    """A package to install.

    Attributes:
        id: Package identifier understood by the manager (e.g., "Git.Git").
        manager: Package manager that installs this package.
        args: Extra command-line arguments passed to the install command.
    """

    id: str
    manager: PackageManager
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.id:
            msg = "Package id cannot be empty"
            raise ValueError(msg)
