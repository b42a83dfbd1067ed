"""Host and process helpers."""

import logging
import socket
import subprocess
from collections.abc import Callable
from pathlib import Path

from sysbridge.errors import SysBridgeError
from sysbridge.utils.shell import run_command

logger = logging.getLogger(__name__)

# Files consulted when the socket API does not return a host name
HOSTNAME_FILES: tuple[Path, ...] = (
    Path("/proc/sys/kernel/hostname"),
    Path("/etc/hostname"),
)

# Conventional exit status of a process stopped by SIGINT
INTERRUPTED_EXIT_CODE = 130


def _first_word(value: str) -> str | None:
    parts = value.split()
    return parts[0] if parts else None


def get_hostname() -> str:
    """Return the host name, reduced to its first whitespace-separated word.

    Tries the socket API first, then the kernel and /etc host name files.

    Raises:
        SysBridgeError: If no source yields a host name.
    """
    name = _first_word(socket.gethostname())
    if name:
        return name

    for path in HOSTNAME_FILES:
        try:
            name = _first_word(path.read_text(encoding="utf-8"))
        except OSError:
            continue
        if name:
            return name

    msg = "Failed to obtain host name from socket.gethostname() or fallback files"
    raise SysBridgeError(msg)


def run_interruptible(main: Callable[[], object]) -> int:
    """Run a script's main function, treating Ctrl+C as a quiet exit.

    Args:
        main: Zero-argument callable to run.

    Returns:
        0 when main returns, 130 when it is interrupted with Ctrl+C.
        Any other exception propagates.
    """
    try:
        main()
    except KeyboardInterrupt:
        logger.debug("Interrupted by user")
        return INTERRUPTED_EXIT_CODE
    return 0


def is_host_reachable(host: str, *, count: int = 2, interval: float = 0.3) -> bool:
    """Check whether a host answers ICMP echo requests.

    Args:
        host: IP address or host name.
        count: Number of echo requests to send.
        interval: Seconds between requests.

    Returns:
        True if ping exits successfully, False otherwise (including when
        ping is not installed).
    """
    try:
        result = run_command(
            ["ping", "-i", str(interval), "-c", str(count), host],
            timeout=count * (interval + 5.0),
        )
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        logger.warning("ping %s failed: %s", host, e)
        return False

    if not result.success:
        logger.info("Host %s not reachable (ping exit code %d)", host, result.returncode)
    return result.success
