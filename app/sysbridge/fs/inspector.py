"""Path classification.

Answers "what is at this path" without following symbolic links, so a
link is never mistaken for the file or directory it points to. Results
are computed on every call; the filesystem can change between a check
and whatever the caller does next.
"""

import errno
import os
import stat
from enum import Enum
from pathlib import Path

# errno values that mean "nothing is at this path"
_MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


class FileClassification(str, Enum):
    """Type of entry found at a path.

    Attributes:
        REGULAR: Regular file.
        DIRECTORY: Directory.
        SYMLINK: Symbolic link (dangling or not), never followed.
        MISSING: Nothing exists at the path.
        OTHER: Socket, FIFO or device node.
    """

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    MISSING = "missing"
    OTHER = "other"


def classify(path: str | Path) -> FileClassification:
    """Classify the entry at a path using a link-aware stat.

    Args:
        path: Filesystem path to inspect.

    Returns:
        FileClassification of the entry. MISSING when the path (or one of
        its parents) does not exist.

    Raises:
        OSError: For failures other than a missing entry, e.g. when a
            parent directory is not searchable.
    """
    try:
        st = os.lstat(path)
    except OSError as e:
        if e.errno in _MISSING_ERRNOS:
            return FileClassification.MISSING
        raise

    mode = st.st_mode
    if stat.S_ISLNK(mode):
        return FileClassification.SYMLINK
    if stat.S_ISDIR(mode):
        return FileClassification.DIRECTORY
    if stat.S_ISREG(mode):
        return FileClassification.REGULAR
    return FileClassification.OTHER


def _resolved_mode(path: str | Path) -> int | None:
    try:
        return os.stat(path).st_mode
    except (OSError, ValueError):
        return None


def exists_file(path: str | Path) -> bool:
    """Check whether a path points to an existing regular file.

    Symbolic links are followed, so a link to a file counts as a file.
    """
    mode = _resolved_mode(path)
    return mode is not None and stat.S_ISREG(mode)


def exists_directory(path: str | Path) -> bool:
    """Check whether a path points to an existing directory.

    Symbolic links are followed, so a link to a directory counts as a directory.
    """
    mode = _resolved_mode(path)
    return mode is not None and stat.S_ISDIR(mode)


def exists_symlink(path: str | Path) -> bool:
    """Check whether a path is a symbolic link.

    Args:
        path: Non-empty filesystem path to check.

    Returns:
        True if the path is a symbolic link (even a dangling one).

    Raises:
        ValueError: If path is empty.
    """
    if not str(path):
        msg = "Invalid path: expected a non-empty string"
        raise ValueError(msg)
    try:
        return classify(path) is FileClassification.SYMLINK
    except OSError:
        return False
