"""File and directory tree copying.

Copies single files (content streamed in bounded chunks, permission bits
applied afterwards) and whole directory trees. Tree copies mirror regular
files and directories, preserve their permission bits, and skip symbolic
links: a link may point outside the destination root or form a cycle, so
links are never followed and never recreated, only reported.

Copies are fail-fast. The first failure aborts the whole call and nothing
already copied is rolled back; callers that need all-or-nothing behavior
can use :func:`copy_tree_atomic`, which stages the copy next to the
destination and renames it into place only on success.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from sysbridge.core.config import get_config
from sysbridge.errors import (
    CopyError,
    DestinationConflictError,
    DestinationInsideSourceError,
    DirectoryCopyFailedError,
    EntryVanishedError,
    FileCopyError,
    FileCopyFailedError,
    FileOperationError,
    SourceNotDirectoryError,
    SysBridgeError,
    UnsupportedEntryError,
)
from sysbridge.fs.inspector import FileClassification, classify, exists_file
from sysbridge.fs.operations import mkdir_p, remove_dir
from sysbridge.fs.permissions import copy_permissions
from sysbridge.utils.formatting import print_plain

logger = logging.getLogger(__name__)

# Printed before the source path of every symbolic link a tree copy skips
SYMLINK_SKIP_PREFIX = "WARNING! copy_tree -> symlink skipped: "


@dataclass(frozen=True, slots=True)
class CopyReport:
    """Summary of a successful tree copy.

    Attributes:
        files_copied: Number of regular files copied.
        directories_copied: Number of directories mirrored, including the root.
        skipped_symlinks: Source paths of the symbolic links that were skipped.
    """

    files_copied: int
    directories_copied: int
    skipped_symlinks: tuple[str, ...] = ()


def copy_file(src: str | Path, dst: str | Path, *, chunk_size: int | None = None) -> None:
    """Copy a regular file's content and permission bits.

    The destination is created or truncated. Content is streamed in chunks
    of ``chunk_size`` bytes so memory use does not grow with file size; the
    source permission bits are applied once the content is written.

    Args:
        src: Source file. A symbolic link to a regular file is followed.
        dst: Destination file path.
        chunk_size: Buffer size in bytes. Defaults to the configured
            ``copy_chunk_size``.

    Raises:
        FileCopyError: If the source is missing or not a regular file, or a
            file cannot be opened, read or written.
        PermissionSetError: If the permission bits cannot be applied.
    """
    if not exists_file(src):
        raise FileCopyError(f"Source does not exist or is not a file: {src}", src)

    size = chunk_size or get_config().copy_chunk_size

    try:
        fsrc = open(src, "rb")
    except OSError as e:
        raise FileCopyError(f"Cannot open source file {src}: {e.strerror or e}", src) from e

    with fsrc:
        try:
            fdst = open(dst, "wb")
        except OSError as e:
            msg = f"Cannot create destination file {dst}: {e.strerror or e}"
            raise FileCopyError(msg, dst) from e
        with fdst:
            try:
                shutil.copyfileobj(fsrc, fdst, size)
            except OSError as e:
                msg = f"Copy interrupted {src} -> {dst}: {e.strerror or e}"
                raise FileCopyError(msg, src) from e

    copy_permissions(src, dst)


def _classify(path: Path) -> FileClassification:
    """Classify a path, reporting lookup failures as CopyError."""
    try:
        return classify(path)
    except OSError as e:
        raise CopyError(f"Cannot inspect {path}: {e.strerror or e}", path) from e


def _check_not_nested(src: Path, dst: Path) -> None:
    """Reject a destination that is the source directory or lies below it.

    Raises:
        DestinationInsideSourceError: If ``dst`` resolves into ``src``.
    """
    source = Path(os.path.realpath(src))
    target = Path(os.path.realpath(dst))
    if target == source or source in target.parents:
        raise DestinationInsideSourceError(dst, src)


class TreeCopier:
    """Recursively copies a directory tree, skipping symbolic links.

    One instance performs one copy and accumulates the counts reported in
    the resulting :class:`CopyReport`.

    Args:
        quiet_on_symlink: If True, skipped symbolic links are not reported
            on the console.
        console: Console receiving skip diagnostics. Defaults to the shared
            stdout console.
        chunk_size: Buffer size for file copies. Defaults to the configured
            ``copy_chunk_size``.
    """

    def __init__(
        self,
        *,
        quiet_on_symlink: bool = False,
        console: Console | None = None,
        chunk_size: int | None = None,
    ) -> None:
        self._quiet = quiet_on_symlink
        self._console = console
        self._chunk_size = chunk_size
        self._files = 0
        self._directories = 0
        self._skipped: list[str] = []

    def copy(self, src: str | Path, dst: str | Path) -> CopyReport:
        """Copy ``src`` into ``dst`` and return the summary.

        Raises:
            CopyError: On the first failure; see :func:`copy_tree`.
        """
        source = Path(src)
        target = Path(dst)
        self._files = 0
        self._directories = 0
        self._skipped = []

        if _classify(source) is not FileClassification.DIRECTORY:
            raise SourceNotDirectoryError(source)
        _check_not_nested(source, target)

        self._copy_dir(source, target)
        return CopyReport(
            files_copied=self._files,
            directories_copied=self._directories,
            skipped_symlinks=tuple(self._skipped),
        )

    def _copy_dir(self, src: Path, dst: Path) -> None:
        if _classify(src) is not FileClassification.DIRECTORY:
            raise SourceNotDirectoryError(src)

        self._prepare_destination(dst)
        copy_permissions(src, dst)
        self._directories += 1

        try:
            with os.scandir(src) as it:
                names = [entry.name for entry in it]
        except OSError as e:
            raise CopyError(f"Cannot read directory {src}: {e.strerror or e}", src) from e

        for name in names:
            self._copy_entry(src / name, dst / name)

    def _prepare_destination(self, dst: Path) -> None:
        kind = _classify(dst)
        if kind is FileClassification.MISSING:
            mkdir_p(dst)
        elif kind is not FileClassification.DIRECTORY:
            raise DestinationConflictError(dst)

    def _copy_entry(self, src: Path, dst: Path) -> None:
        kind = _classify(src)

        if kind is FileClassification.SYMLINK:
            self._skip_symlink(src)
        elif kind is FileClassification.REGULAR:
            try:
                # Links and special files at the destination are never written through
                if _classify(dst) not in (FileClassification.MISSING, FileClassification.REGULAR):
                    raise DestinationConflictError(dst)
                copy_file(src, dst, chunk_size=self._chunk_size)
            except (SysBridgeError, OSError) as e:
                raise FileCopyFailedError(src, dst, e) from e
            self._files += 1
        elif kind is FileClassification.DIRECTORY:
            try:
                self._copy_dir(src, dst)
            except (SysBridgeError, OSError) as e:
                raise DirectoryCopyFailedError(src, dst, e) from e
        elif kind is FileClassification.MISSING:
            raise EntryVanishedError(src)
        else:
            raise UnsupportedEntryError(src)

    def _skip_symlink(self, src: Path) -> None:
        self._skipped.append(str(src))
        logger.debug("Skipping symlink %s", src)
        if not self._quiet:
            print_plain(f"{SYMLINK_SKIP_PREFIX}{src}", target=self._console)


def copy_tree(
    src: str | Path,
    dst: str | Path,
    quiet_on_symlink: bool = False,
    *,
    console: Console | None = None,
) -> CopyReport:
    """Recursively copy a directory, preserving structure and permissions.

    The destination is created (with parents) if missing and may already
    exist as a directory; its permission bits are set to the source's right
    after it is created or validated. Regular files and subdirectories are
    copied; symbolic links are skipped and, unless ``quiet_on_symlink`` is
    set, reported with one line per link on stdout.

    The copy stops at the first failure and leaves whatever was already
    copied in place.

    Args:
        src: Source directory. A symbolic link is not accepted.
        dst: Destination directory.
        quiet_on_symlink: Suppress the skipped-symlink lines.
        console: Console receiving skip diagnostics (defaults to stdout).

    Returns:
        CopyReport summarizing the copy.

    Raises:
        SourceNotDirectoryError: If ``src`` is not a directory. Nothing is
            created in that case.
        DestinationConflictError: If ``dst`` exists and is not a directory.
        DestinationInsideSourceError: If ``dst`` is ``src`` or lies below it.
            Nothing is created in that case.
        PermissionSetError: If the destination permissions cannot be set.
        DirectoryCreateError: If the destination cannot be created.
        FileCopyFailedError: If a file inside the tree fails to copy, including
            when a symbolic link or special file occupies its destination path.
        DirectoryCopyFailedError: If a subdirectory fails to copy.
        EntryVanishedError: If an entry disappears while being copied.
        UnsupportedEntryError: If the tree contains a socket, FIFO or device.
        CopyError: If a path cannot be inspected or a directory cannot be read.
    """
    copier = TreeCopier(quiet_on_symlink=quiet_on_symlink, console=console)
    report = copier.copy(src, dst)
    logger.debug(
        "Copied %s -> %s (%d files, %d directories, %d symlinks skipped)",
        src,
        dst,
        report.files_copied,
        report.directories_copied,
        len(report.skipped_symlinks),
    )
    return report


def copy_tree_atomic(
    src: str | Path,
    dst: str | Path,
    quiet_on_symlink: bool = False,
    *,
    console: Console | None = None,
) -> CopyReport:
    """Copy a directory tree so that ``dst`` appears complete or not at all.

    The tree is copied into a hidden staging directory next to ``dst`` and
    renamed into place once the copy succeeds. On failure the staging
    directory is removed and ``dst`` is never created.

    Args:
        src: Source directory.
        dst: Destination directory. Must not exist.
        quiet_on_symlink: Suppress the skipped-symlink lines.
        console: Console receiving skip diagnostics (defaults to stdout).

    Returns:
        CopyReport summarizing the copy.

    Raises:
        SourceNotDirectoryError: If ``src`` is not a directory.
        DestinationConflictError: If anything already exists at ``dst``.
        DestinationInsideSourceError: If ``dst`` is ``src`` or lies below it.
        CopyError: If the copy or the final rename fails.
    """
    source = Path(src)
    target = Path(dst)

    if _classify(source) is not FileClassification.DIRECTORY:
        raise SourceNotDirectoryError(source)
    if _classify(target) is not FileClassification.MISSING:
        raise DestinationConflictError(target)
    _check_not_nested(source, target)

    parent = mkdir_p(target.parent)
    stage = Path(tempfile.mkdtemp(prefix=f".{target.name}.", suffix=".staging", dir=parent))

    try:
        report = copy_tree(source, stage, quiet_on_symlink, console=console)
        try:
            os.rename(stage, target)
        except OSError as e:
            msg = f"Cannot move staged copy into place at {target}: {e.strerror or e}"
            raise CopyError(msg, target) from e
    except BaseException:
        _discard_stage(stage)
        raise

    return report


def _discard_stage(stage: Path) -> None:
    try:
        remove_dir(stage)
    except FileOperationError as e:
        logger.warning("Could not remove staging directory %s: %s", stage, e)
