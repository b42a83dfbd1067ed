"""File hashing through an external tool.

Digests are computed by the configured hash command (``md5sum`` by
default) rather than in-process, matching what the surrounding scripts
compare against.
"""

import logging
import re
import subprocess
from pathlib import Path

from sysbridge.core.config import get_config
from sysbridge.utils.shell import run_command

logger = logging.getLogger(__name__)

_MD5_PATTERN = re.compile(r"^([0-9a-fA-F]{32})(?:\s|$)")


def parse_md5_output(output: str) -> str | None:
    """Extract the digest from ``md5sum``-style output (``<hash>  <path>``).

    Returns:
        Lowercase 32-character hex digest, or None if the output does not
        start with one.
    """
    match = _MD5_PATTERN.match(output.strip())
    if match is None:
        return None
    return match.group(1).lower()


def calculate_md5(file_path: str | Path) -> str | None:
    """Calculate the MD5 digest of a file with the external hash tool.

    Args:
        file_path: File to hash.

    Returns:
        Lowercase 32-character hex digest, or None if the path is empty,
        the tool is missing or fails, or its output cannot be parsed.
    """
    if not str(file_path):
        return None

    config = get_config()
    try:
        result = run_command(
            [config.hash_command, "--", str(file_path)],
            timeout=config.command_timeout,
        )
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        logger.warning("%s failed for %s: %s", config.hash_command, file_path, e)
        return None

    if not result.success:
        logger.debug("%s exited with %d: %s", config.hash_command, result.returncode, result.stderr.strip())
        return None

    return parse_md5_output(result.stdout)
