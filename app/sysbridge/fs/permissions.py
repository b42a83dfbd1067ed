"""Permission bits and ownership.

Converts between the symbolic ("rw-r--r--") and numeric (0o644) forms of
the nine owner/group/other permission bits, and wraps chmod and chown.
Setuid, setgid and sticky bits are not carried: they are dropped when
reading a mode and never written.
"""

from __future__ import annotations

import grp
import logging
import os
import pwd
import stat
from dataclasses import dataclass
from pathlib import Path

from sysbridge.errors import OwnershipError, PermissionSetError

logger = logging.getLogger(__name__)

PERMISSION_MASK = 0o777

# (position, character, bit) for every rwx slot, owner first
_SYMBOLIC_BITS: tuple[tuple[int, str, int], ...] = (
    (0, "r", stat.S_IRUSR),
    (1, "w", stat.S_IWUSR),
    (2, "x", stat.S_IXUSR),
    (3, "r", stat.S_IRGRP),
    (4, "w", stat.S_IWGRP),
    (5, "x", stat.S_IXGRP),
    (6, "r", stat.S_IROTH),
    (7, "w", stat.S_IWOTH),
    (8, "x", stat.S_IXOTH),
)

# Execute-slot characters ls(1) prints when a special bit is also set.
# Lowercase means execute is set as well, uppercase means it is not.
_SPECIAL_EXECUTE = {"s": True, "t": True, "S": False, "T": False}


@dataclass(frozen=True, slots=True)
class PermissionSet:
    """The nine rwx permission bits for owner, group and other.

    Attributes:
        mode: Permission bits in the range 0..0o777.
    """

    mode: int

    def __post_init__(self) -> None:
        """Validate the permission range."""
        if not 0 <= self.mode <= PERMISSION_MASK:
            msg = f"Permission mode out of range: {self.mode:o}"
            raise ValueError(msg)

    @classmethod
    def from_mode(cls, st_mode: int) -> PermissionSet:
        """Build from a raw ``st_mode``, keeping only the rwx bits."""
        return cls(stat.S_IMODE(st_mode) & PERMISSION_MASK)

    @classmethod
    def from_symbolic(cls, text: str) -> PermissionSet:
        """Parse a 9-character symbolic form such as ``rwxr-x---``.

        Raises:
            ValueError: If the string is not a valid symbolic mode.
        """
        if len(text) != 9:
            msg = f"Symbolic mode must be 9 characters, got {text!r}"
            raise ValueError(msg)

        mode = 0
        for position, char, bit in _SYMBOLIC_BITS:
            value = text[position]
            if value == char:
                mode |= bit
            elif char == "x" and value in _SPECIAL_EXECUTE:
                if _SPECIAL_EXECUTE[value]:
                    mode |= bit
            elif value != "-":
                msg = f"Invalid character {value!r} at position {position + 1} in {text!r}"
                raise ValueError(msg)
        return cls(mode)

    @classmethod
    def from_octal(cls, text: str) -> PermissionSet:
        """Parse a numeric form such as ``644``, ``0644`` or ``0o644``.

        A fourth leading digit (special bits) is accepted and ignored.

        Raises:
            ValueError: If the string is not an octal number of 3 or 4 digits.
        """
        digits = text.removeprefix("0o")
        if not 3 <= len(digits) <= 4 or any(c not in "01234567" for c in digits):
            msg = f"Invalid octal mode: {text!r}"
            raise ValueError(msg)
        return cls(int(digits, 8) & PERMISSION_MASK)

    @property
    def symbolic(self) -> str:
        """Symbolic form, e.g. ``rw-r--r--``."""
        return "".join(
            char if self.mode & bit else "-" for _position, char, bit in _SYMBOLIC_BITS
        )

    @property
    def octal(self) -> str:
        """Three-digit octal form, e.g. ``644``."""
        return f"{self.mode:03o}"

    def __str__(self) -> str:
        return self.symbolic


def parse_mode(value: int | str | PermissionSet) -> PermissionSet:
    """Normalize any accepted mode representation to a PermissionSet.

    Args:
        value: An int (0..0o777 after masking special bits), an octal string
            ("755", "0755") or a symbolic string ("rwxr-xr-x").

    Returns:
        The equivalent PermissionSet.

    Raises:
        ValueError: If the value cannot be interpreted as a mode.
    """
    if isinstance(value, PermissionSet):
        return value
    if isinstance(value, bool):
        msg = f"Invalid mode: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        return PermissionSet.from_mode(value)
    text = value.strip()
    if text[:1].isdigit():
        return PermissionSet.from_octal(text)
    return PermissionSet.from_symbolic(text)


def get_permissions(path: str | Path) -> PermissionSet:
    """Read the permission bits of a path (following symbolic links).

    Raises:
        OSError: If the path cannot be stat'ed.
    """
    return PermissionSet.from_mode(os.stat(path).st_mode)


def chmod(path: str | Path, mode: int | str | PermissionSet) -> None:
    """Change the permission bits of a single file or directory.

    Args:
        path: Target path.
        mode: Permission mode in any form accepted by :func:`parse_mode`.

    Raises:
        ValueError: If path is empty or mode is invalid.
        PermissionSetError: If the underlying chmod call fails.
    """
    if not str(path):
        msg = "Invalid path (must be a non-empty string)"
        raise ValueError(msg)

    permissions = parse_mode(mode)
    try:
        os.chmod(path, permissions.mode)
    except OSError as e:
        msg = f"chmod failed on {path}: {e.strerror or e}"
        raise PermissionSetError(msg, path) from e
    logger.debug("chmod %s %s", permissions.octal, path)


def copy_permissions(src: str | Path, dst: str | Path) -> PermissionSet:
    """Apply the permission bits of ``src`` to ``dst``.

    Returns:
        The permissions that were applied.

    Raises:
        PermissionSetError: If the source cannot be read or chmod fails.
    """
    try:
        permissions = get_permissions(src)
    except OSError as e:
        msg = f"Could not read permissions from {src}: {e.strerror or e}"
        raise PermissionSetError(msg, src) from e
    chmod(dst, permissions)
    return permissions


def _resolve_uid(owner: str | int | None) -> int:
    if owner is None:
        return -1
    if isinstance(owner, int):
        return owner
    try:
        return pwd.getpwnam(owner).pw_uid
    except KeyError:
        raise OwnershipError(f"Unknown user: {owner}") from None


def _resolve_gid(group: str | int | None) -> int:
    if group is None:
        return -1
    if isinstance(group, int):
        return group
    try:
        return grp.getgrnam(group).gr_gid
    except KeyError:
        raise OwnershipError(f"Unknown group: {group}") from None


def chown(
    path: str | Path,
    owner: str | int | None = None,
    group: str | int | None = None,
) -> None:
    """Change the owner and/or group of a single file or directory.

    Args:
        path: Target path.
        owner: User name or numeric uid. None leaves the owner unchanged.
        group: Group name or numeric gid. None leaves the group unchanged.

    Raises:
        ValueError: If path is empty.
        OwnershipError: If a name cannot be resolved or chown fails.
    """
    if not str(path):
        msg = "Invalid path (must be a non-empty string)"
        raise ValueError(msg)

    uid = _resolve_uid(owner)
    gid = _resolve_gid(group)
    try:
        os.chown(path, uid, gid)
    except OSError as e:
        raise OwnershipError(f"chown failed on {path}: {e.strerror or e}") from e
