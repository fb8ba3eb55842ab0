"""Console output and process helpers shared across winprov."""

from winprov.utils.formatting import (
    create_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from winprov.utils.shell import CommandResult, command_exists, resolve_command, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "create_table",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "resolve_command",
    "run_command",
]
