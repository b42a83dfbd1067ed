"""sysbridge - filesystem, process and prompt helpers for system scripts.

The centerpiece is :func:`sysbridge.fs.copy_tree`, a recursive directory
copy that preserves permission bits and never follows symbolic links.
"""

from sysbridge.errors import SysBridgeError
from sysbridge.fs import FileClassification, classify, copy_file, copy_tree, mkdir_p

__version__ = "0.1.0"

__all__ = [
    "FileClassification",
    "SysBridgeError",
    "__version__",
    "classify",
    "copy_file",
    "copy_tree",
    "mkdir_p",
]
