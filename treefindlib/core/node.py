"""EntryInfo record for TreeFindLib.

An EntryInfo describes one directory entry as seen by a walk: its name, the
path the walk reached it by, and its type *without* following symbolic links.
It is a plain data container; resolving what a symlink points at is the
job of the FileSystemAdapter.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class EntryInfo:
    """One filesystem entry visited during a walk.

    Attributes:
        name: Base name of the entry
        path: Path used to reach the entry (root-relative or absolute,
            in the same form as the walk root)
        is_dir: True for real directories; False for symlinks, even when
            they point at a directory
        is_symlink: True if the entry itself is a symbolic link
    """

    name: str
    path: str
    is_dir: bool = False
    is_symlink: bool = False

    def identifier(self) -> str:
        """Return the path as the entry's identifier."""
        return self.path

    def is_leaf(self) -> bool:
        """Entries other than real directories have no children to walk."""
        return not self.is_dir

    def metadata(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'is_dir': self.is_dir,
            'is_link': self.is_symlink,
        }

    def __str__(self) -> str:
        return self.path
