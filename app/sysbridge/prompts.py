"""Interactive console prompts.

Prompts print through a Rich console and read one line at a time. Both
ends are parameters: pass a ``Console`` writing to a buffer and a text
``stream`` to drive a prompt from a script or a test instead of the
terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from rich.console import Console

from sysbridge.errors import PromptAbortedError
from sysbridge.utils.formatting import console as default_console
from sysbridge.utils.formatting import print_plain

CONFIRM_ANSWERS = frozenset({"y", "yes"})

INVALID_SELECTION_MESSAGE = "ERROR: Invalid selection. Please try again."


def _read_line(prompt: str, console: Console | None, stream: TextIO | None) -> str:
    """Print a prompt without newline and read one line of input.

    Raises:
        PromptAbortedError: If input ends before a line is read.
    """
    target = console or default_console
    try:
        line = target.input(prompt, markup=False, stream=stream)
    except EOFError:
        raise PromptAbortedError("Could not read from stdin") from None
    # Console.input() returns readline() output verbatim when given a stream
    if stream is not None:
        if not line:
            raise PromptAbortedError("Could not read from stdin")
        line = line.rstrip("\r\n")
    return line


def confirm(
    message: str,
    *,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Ask for a yes/no confirmation.

    Args:
        message: Question shown before the ``<Y/y/Yes/yes>?`` hint.
        console: Console used for output. Defaults to stdout.
        stream: Input stream. Defaults to stdin.

    Returns:
        True only if the answer is "y" or "yes" (case-insensitive).

    Raises:
        PromptAbortedError: If input ends before an answer is given.
    """
    answer = _read_line(f"{message} - <Y/y/Yes/yes>? ", console, stream)
    return answer.strip().lower() in CONFIRM_ANSWERS


def wait_for_enter(
    message: str,
    *,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> None:
    """Pause until the user presses <ENTER>.

    Raises:
        PromptAbortedError: If input ends before <ENTER> is pressed.
    """
    _read_line(f"{message} - <ENTER>", console, stream)


def select_element(
    options: Sequence[str | int | float],
    prompt: str = "Choose element:",
    max_attempts: int = 0,
    *,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> str | int | float:
    """Let the user pick one element from a numbered list.

    The list is printed as ``[1] first``, ``[2] second`` and so on. An
    invalid number prints an error and asks again.

    Args:
        options: Flat sequence of strings or numbers to choose from.
        prompt: Heading printed before the list.
        max_attempts: Number of invalid answers allowed before giving up;
            0 means unlimited.
        console: Console used for output. Defaults to stdout.
        stream: Input stream. Defaults to stdin.

    Returns:
        The selected element, or "" when options is empty, the answer is
        empty, input ends, or the attempts are exhausted.
    """
    if not options:
        return ""

    count = len(options)
    attempts = 0

    while True:
        print_plain(prompt, target=console)
        for index, value in enumerate(options, start=1):
            print_plain(f"[{index}] {value}", target=console)

        try:
            answer = _read_line(f"Enter a number [1-{count}] and press <ENTER>: ", console, stream)
        except PromptAbortedError:
            return ""

        answer = answer.strip()
        if not answer:
            return ""

        if answer.isdigit() and 1 <= int(answer) <= count:
            return options[int(answer) - 1]

        attempts += 1
        print_plain(INVALID_SELECTION_MESSAGE, target=console)

        if max_attempts > 0 and attempts >= max_attempts:
            return ""
