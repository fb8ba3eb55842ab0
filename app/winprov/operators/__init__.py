"""Package operators for executing installation actions.

This module provides the abstract operator and concrete implementations
for the supported Windows package managers (winget, Chocolatey, Scoop).
"""

from winprov.models.package import PackageManager
from winprov.operators.base import Operator
from winprov.operators.choco import ChocoOperator
from winprov.operators.scoop import ScoopOperator
from winprov.operators.winget import WingetOperator

_OPERATORS: dict[PackageManager, type[Operator]] = {
    PackageManager.WINGET: WingetOperator,
    PackageManager.CHOCO: ChocoOperator,
    PackageManager.SCOOP: ScoopOperator,
}


def get_operator(manager: PackageManager, dry_run: bool = False) -> Operator:
    """Get the operator instance for a package manager.

    Args:
        manager: Package manager to operate.
        dry_run: If True, the operator only simulates installs.

    Returns:
        Operator for the manager.
    """
    return _OPERATORS[manager](dry_run=dry_run)


__all__ = ["ChocoOperator", "Operator", "ScoopOperator", "WingetOperator", "get_operator"]
