"""Filesystem adapters.

Adapters implement the FileSystemAdapter interface for a concrete
filesystem, giving the walker and matching engine something to read from.
"""

from .filesystem import LocalFileSystemAdapter

__all__ = [
    "LocalFileSystemAdapter",
]
