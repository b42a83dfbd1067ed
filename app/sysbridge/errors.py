"""Exception hierarchy for sysbridge.

Every error raised by the library derives from :class:`SysBridgeError`.
Errors that wrap an underlying OS failure keep it as ``__cause__`` (via
``raise ... from``) and, for the copy family, also expose it as ``cause``.
"""

from __future__ import annotations

from pathlib import Path


class SysBridgeError(Exception):
    """Base exception for all sysbridge errors."""


# =============================================================================
# Copy errors
# =============================================================================


class CopyError(SysBridgeError):
    """Base exception for file and directory copy failures.

    Attributes:
        path: Path the failure refers to.
    """

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = str(path)


class SourceNotDirectoryError(CopyError):
    """Raised when the source of a tree copy is not a directory."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Source is not a directory: {path}", path)


class DestinationConflictError(CopyError):
    """Raised when the copy destination exists and is not a directory."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Destination exists and is not a directory: {path}", path)


class DestinationInsideSourceError(CopyError):
    """Raised when the copy destination is the source or lies below it."""

    def __init__(self, path: str | Path, source: str | Path) -> None:
        super().__init__(f"Destination is inside the source tree {source}: {path}", path)
        self.source = str(source)


class FileCopyError(CopyError):
    """Raised when a single file cannot be copied."""


class PermissionSetError(CopyError):
    """Raised when permission bits cannot be applied to a path."""


class EntryVanishedError(CopyError):
    """Raised when a directory entry disappears while a tree is being walked."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Entry vanished during copy: {path}", path)


class UnsupportedEntryError(CopyError):
    """Raised for entries that are neither files, directories nor symlinks."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Unsupported file type (socket, fifo or device): {path}", path)


class _WrappedCopyError(CopyError):
    """Copy failure that wraps the error raised for a nested entry."""

    label = "Copy"

    def __init__(self, path: str | Path, dst: str | Path, cause: Exception) -> None:
        super().__init__(f"{self.label} copy failed for: {path} -> {dst} :: {cause}", path)
        self.dst = str(dst)
        self.cause = cause


class FileCopyFailedError(_WrappedCopyError):
    """Raised by a tree copy when one of its files fails to copy."""

    label = "File"


class DirectoryCopyFailedError(_WrappedCopyError):
    """Raised by a tree copy when one of its subdirectories fails to copy."""

    label = "Directory"


# =============================================================================
# Filesystem operation errors
# =============================================================================


class DirectoryCreateError(SysBridgeError):
    """Raised when a directory cannot be created."""


class FileOperationError(SysBridgeError):
    """Raised when a remove, rename, link or rewrite operation fails."""


class OwnershipError(SysBridgeError):
    """Raised when file ownership cannot be resolved or changed."""


# =============================================================================
# Configuration, data and interaction errors
# =============================================================================


class ConfigError(SysBridgeError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class TableError(SysBridgeError):
    """Raised when a data table is invalid or cannot be stored."""


class TableNotFoundError(TableError):
    """Raised when a saved table file does not exist."""


class TableParseError(TableError):
    """Raised when a saved table file cannot be parsed."""


class PromptAbortedError(SysBridgeError):
    """Raised when input ends before an interactive prompt was answered."""
