"""Utility modules for sysbridge.

This module exports commonly used utility functions.
"""

from sysbridge.utils.formatting import (
    console,
    err_console,
    format_log_line,
    log_print,
    print_error,
    print_info,
    print_plain,
    print_success,
    print_warning,
)
from sysbridge.utils.shell import CommandResult, command_exists, run_command, which

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "format_log_line",
    "log_print",
    "print_error",
    "print_info",
    "print_plain",
    "print_success",
    "print_warning",
    "run_command",
    "which",
]
