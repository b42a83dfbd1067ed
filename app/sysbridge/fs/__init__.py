"""Filesystem primitives and the directory tree copier.

This module provides path classification, permission handling,
recursive directory creation and removal, and file/tree copying.
"""

from sysbridge.fs.copier import (
    SYMLINK_SKIP_PREFIX,
    CopyReport,
    TreeCopier,
    copy_file,
    copy_tree,
    copy_tree_atomic,
)
from sysbridge.fs.inspector import (
    FileClassification,
    classify,
    exists_directory,
    exists_file,
    exists_symlink,
)
from sysbridge.fs.operations import (
    FindMode,
    find,
    list_files,
    mkdir_p,
    remove,
    remove_dir,
    rename,
    replace_line,
    symlink,
    unlink_symlink,
)
from sysbridge.fs.permissions import (
    PermissionSet,
    chmod,
    chown,
    copy_permissions,
    get_permissions,
    parse_mode,
)

__all__ = [
    "SYMLINK_SKIP_PREFIX",
    "CopyReport",
    "FileClassification",
    "FindMode",
    "PermissionSet",
    "TreeCopier",
    "chmod",
    "chown",
    "classify",
    "copy_file",
    "copy_permissions",
    "copy_tree",
    "copy_tree_atomic",
    "exists_directory",
    "exists_file",
    "exists_symlink",
    "find",
    "get_permissions",
    "list_files",
    "mkdir_p",
    "parse_mode",
    "remove",
    "remove_dir",
    "rename",
    "replace_line",
    "symlink",
    "unlink_symlink",
]
