"""Filesystem operations.

Plain functions around single OS calls: recursive directory creation and
removal, renames, symbolic links, directory listings and in-place line
replacement. Every failure is raised; nothing is retried.
"""

import fnmatch
import logging
import os
import stat
from enum import Enum
from pathlib import Path
from tempfile import NamedTemporaryFile

from sysbridge.errors import DirectoryCreateError, FileOperationError
from sysbridge.fs.inspector import (
    FileClassification,
    classify,
    exists_directory,
    exists_symlink,
)

logger = logging.getLogger(__name__)


class FindMode(str, Enum):
    """Which entry types :func:`find` returns.

    Attributes:
        FILES: Regular files only.
        DIRECTORIES: Directories only.
        ALL: Files and directories.
    """

    FILES = "files"
    DIRECTORIES = "dirs"
    ALL = "all"


def mkdir_p(path: str | Path) -> Path:
    """Create a directory and any missing parents, like ``mkdir -p``.

    Succeeds without changes when the directory already exists. If creation
    fails because another process created the directory concurrently, the
    call still succeeds.

    Args:
        path: Directory to create. A trailing slash is ignored.

    Returns:
        The directory path.

    Raises:
        DirectoryCreateError: If the path (or a parent) exists but is not a
            directory, or the directory cannot be created.
    """
    target = Path(path)
    if exists_directory(target):
        return target

    parent = target.parent
    if parent != target:
        mkdir_p(parent)

    try:
        target.mkdir()
    except OSError as e:
        # Created by someone else in the meantime
        if exists_directory(target):
            return target
        msg = f"Cannot create directory {target}: {e.strerror or e}"
        raise DirectoryCreateError(msg) from e

    logger.debug("Created directory %s", target)
    return target


def remove_dir(path: str | Path) -> None:
    """Remove a directory and everything below it, like ``rm -rf``.

    The tree is walked with an explicit stack using link-aware stats:
    symbolic links inside the tree are unlinked, never followed.

    Args:
        path: Directory to remove.

    Raises:
        FileOperationError: If the directory does not exist or an entry
            cannot be listed or removed.
    """
    if not exists_directory(path) or exists_symlink(path):
        msg = f"directory does not exist: {path}"
        raise FileOperationError(msg)

    # (path, visited): visited directories have had their children pushed
    stack: list[tuple[str, bool]] = [(str(path), False)]

    while stack:
        current, visited = stack.pop()
        try:
            kind = classify(current)
        except OSError as e:
            raise FileOperationError(f"lstat failed: {current}: {e.strerror or e}") from e

        if kind is FileClassification.MISSING:
            continue

        try:
            if kind is not FileClassification.DIRECTORY:
                os.unlink(current)
            elif visited:
                os.rmdir(current)
            else:
                stack.append((current, True))
                with os.scandir(current) as entries:
                    stack.extend((entry.path, False) for entry in entries)
        except OSError as e:
            msg = f"cannot remove {current}: {e.strerror or e}"
            raise FileOperationError(msg) from e

    logger.debug("Removed directory tree %s", path)


def remove(path: str | Path) -> None:
    """Remove a file, symbolic link or empty directory.

    Raises:
        FileOperationError: If the removal fails.
    """
    try:
        if classify(path) is FileClassification.DIRECTORY:
            os.rmdir(path)
        else:
            os.remove(path)
    except OSError as e:
        raise FileOperationError(f"Cannot remove {path}: {e.strerror or e}") from e


def rename(src: str | Path, dst: str | Path) -> None:
    """Rename (move) a path.

    Raises:
        FileOperationError: If the rename fails.
    """
    try:
        os.rename(src, dst)
    except OSError as e:
        raise FileOperationError(f"Cannot rename {src} -> {dst}: {e.strerror or e}") from e


def symlink(src: str | Path, dst: str | Path) -> None:
    """Create a symbolic link at ``dst`` pointing to ``src``.

    Existing entries at the destination are never overwritten.

    Raises:
        FileOperationError: If the source does not exist, the destination
            already exists (including a dangling link), or linking fails.
    """
    if classify(src) is FileClassification.MISSING:
        raise FileOperationError(f"Source path does not exist: {src}")
    if classify(dst) is not FileClassification.MISSING:
        raise FileOperationError(f"Destination already exists: {dst}")

    try:
        os.symlink(src, dst)
    except OSError as e:
        raise FileOperationError(f"Failed to create symlink: {dst} ({e.strerror or e})") from e


def unlink_symlink(path: str | Path) -> None:
    """Remove a symbolic link, leaving its target untouched.

    Raises:
        FileOperationError: If the path is not a symbolic link or cannot be removed.
    """
    if not exists_symlink(path):
        raise FileOperationError(f"symlink does not exist: {path}")
    remove(path)


def list_files(directory: str | Path) -> list[str]:
    """List the names of regular files directly inside a directory.

    Directories, symbolic links and special files are left out.

    Raises:
        FileOperationError: If the directory cannot be listed.
    """
    return find(directory, "*", FindMode.FILES)


def _name_matches(name: str, pattern: str) -> bool:
    # Unanchored: the pattern may match anywhere in the name
    return fnmatch.fnmatchcase(name, f"*{pattern}*")


def find(
    directory: str | Path,
    pattern: str = "*",
    mode: FindMode = FindMode.FILES,
) -> list[str]:
    """Search a directory (non-recursively) for names matching a glob pattern.

    ``*`` and ``?`` keep their glob meaning; the pattern may match any
    part of a name, so ``log`` finds ``syslog.1``.

    Args:
        directory: Directory to search.
        pattern: Glob-like pattern matched against entry names.
        mode: Which entry types to return.

    Returns:
        Sorted list of matching entry names.

    Raises:
        FileOperationError: If the directory cannot be listed.
    """
    include_files = mode in (FindMode.FILES, FindMode.ALL)
    include_dirs = mode in (FindMode.DIRECTORIES, FindMode.ALL)

    results: list[str] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if not _name_matches(entry.name, pattern):
                    continue
                if entry.is_symlink():
                    continue
                if (include_files and entry.is_file()) or (include_dirs and entry.is_dir()):
                    results.append(entry.name)
    except OSError as e:
        raise FileOperationError(f"Cannot list directory {directory}: {e.strerror or e}") from e

    return sorted(results)


def replace_line(path: str | Path, starts_with: str, new_line: str) -> int:
    """Replace every line of a text file that starts with a prefix.

    Lines are split on line feeds only and every other byte is kept as is:
    CRLF endings, form feeds and bytes that are not valid UTF-8 survive the
    rewrite. A replaced CRLF line keeps its carriage return. The file is rewritten
    atomically through a temporary file in the same directory.

    Args:
        path: Text file to edit.
        starts_with: Prefix identifying the lines to replace.
        new_line: Replacement line (without line terminator).

    Returns:
        Number of lines replaced.

    Raises:
        FileOperationError: If the file cannot be read or written.
    """
    target = Path(path)
    try:
        with open(target, encoding="utf-8", errors="surrogateescape", newline="") as f:
            content = f.read()
    except OSError as e:
        raise FileOperationError(f"File cannot be opened: {target}: {e.strerror or e}") from e

    lines = content.split("\n")
    # The piece after a final newline is not a line
    last = len(lines) - 1 if content.endswith("\n") or not content else len(lines)
    replaced = 0
    for index in range(last):
        line = lines[index]
        if line.startswith(starts_with):
            lines[index] = new_line + "\r" if line.endswith("\r") else new_line
            replaced += 1

    output = "\n".join(lines)

    tmp_path: Path | None = None
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            errors="surrogateescape",
            newline="",
            dir=target.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(output)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise FileOperationError(f"Unable to write to the file: {target}: {e.strerror or e}") from e

    logger.debug("Replaced %d line(s) in %s", replaced, target)
    return replaced
