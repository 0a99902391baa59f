"""FileSystemAdapter abstraction for TreeFindLib.

The adapter is the Filesystem Access Layer: the only place the matching
engine and the walker touch the filesystem. Swapping the adapter (for example
for the in-memory fake in ``treefindlib.testing``) lets the whole engine run
without real disk state.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .node import EntryInfo


class FileSystemAdapter(ABC):
    """Abstract read-only access to a filesystem.

    All methods raise ``OSError`` (or a subclass) on failure. Callers decide
    whether a failure is fatal; the traversal code treats them as per-entry
    problems and moves on.
    """

    @abstractmethod
    def stat(self, path: str) -> EntryInfo:
        """Describe ``path``, following symbolic links.

        Args:
            path: Path to describe

        Returns:
            EntryInfo whose ``is_dir`` reflects the link target

        Raises:
            OSError: If the path (or its link target) does not exist
        """
        pass

    @abstractmethod
    def lstat(self, path: str) -> EntryInfo:
        """Describe ``path`` itself, without following a final symbolic link."""
        pass

    @abstractmethod
    def list_entries(self, path: str) -> List[EntryInfo]:
        """List the immediate entries of directory ``path``, sorted by name.

        Entries are described without following symbolic links. Each entry's
        ``path`` is ``path`` joined with the entry name.

        Raises:
            OSError: If the directory cannot be read
        """
        pass

    @abstractmethod
    def read_symlink_target(self, path: str) -> str:
        """Resolve ``path`` to its real location with every link followed.

        Works for any existing path, not only links; the result is the
        canonical path and is what the cycle guard compares.

        Raises:
            OSError: If the path or its final target does not exist
        """
        pass

    def symlink_dir_target(self, entry: EntryInfo) -> Optional[str]:
        """Return the real path of a symlink that resolves to a directory.

        Returns None for anything else; dangling links and unreadable
        targets count as "not a directory".
        """
        if not entry.is_symlink:
            return None
        try:
            target = self.read_symlink_target(entry.path)
            is_dir = self.stat(target).is_dir
        except OSError:
            return None
        return target if is_dir else None

    def is_symlink_to_dir(self, entry: EntryInfo) -> bool:
        """Check whether ``entry`` is a symlink whose target is a directory."""
        return self.symlink_dir_target(entry) is not None
