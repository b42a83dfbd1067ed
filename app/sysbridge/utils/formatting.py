"""Rich console formatting utilities.

Provides consistent formatting for script output using Rich.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.theme import Theme

# Width that message type labels are padded to in log_print()
LOG_TYPE_WIDTH = 5

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def print_plain(message: str, *, target: Console | None = None) -> None:
    """Print a message verbatim as a single line.

    Markup, highlighting and wrapping are disabled so that paths containing
    brackets or exceeding the terminal width come out unchanged.

    Args:
        message: Text to print.
        target: Console to print to. Defaults to the shared stdout console.
    """
    (target or console).print(message, markup=False, highlight=False, soft_wrap=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def format_log_line(msg_type: str, msg: str) -> str:
    """Build a ``> TYPE  : message`` log line.

    Message types shorter than five characters are padded with spaces so
    that INFO, WARN, ERROR and CMD lines align.
    """
    return f"> {msg_type.ljust(LOG_TYPE_WIDTH)} : {msg}"


def log_print(msg_type: str, msg: str, *, target: Console | None = None) -> None:
    """Print a formatted log line to stdout.

    Args:
        msg_type: Category of the message (INFO, WARN, ERROR, CMD).
        msg: The message to print.
        target: Console to print to. Defaults to the shared stdout console.
    """
    print_plain(format_log_line(msg_type, msg), target=target)
