"""Local filesystem adapter for TreeFindLib.

Implements the FileSystemAdapter interface on top of ``os``. Directory
listings use ``os.scandir`` so entry types come from the directory read
itself instead of one extra ``lstat`` per entry.
"""

import os
import stat
from typing import List

from .. import paths
from ..core.adapter import FileSystemAdapter
from ..core.node import EntryInfo


class LocalFileSystemAdapter(FileSystemAdapter):
    """Read-only adapter for the local filesystem.

    Args:
        include_hidden: Whether dot-entries are listed
    """

    def __init__(self, include_hidden: bool = True):
        self.include_hidden = include_hidden

    def stat(self, path: str) -> EntryInfo:
        st = os.stat(path)
        return EntryInfo(
            name=paths.base(path),
            path=path,
            is_dir=stat.S_ISDIR(st.st_mode),
            is_symlink=False,
        )

    def lstat(self, path: str) -> EntryInfo:
        st = os.lstat(path)
        return EntryInfo(
            name=paths.base(path),
            path=path,
            is_dir=stat.S_ISDIR(st.st_mode),
            is_symlink=stat.S_ISLNK(st.st_mode),
        )

    def list_entries(self, path: str) -> List[EntryInfo]:
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                if not self.include_hidden and entry.name.startswith('.'):
                    continue
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_link = entry.is_symlink()
                except OSError:
                    # Entry vanished or is unreadable between readdir and stat
                    is_dir = is_link = False
                entries.append(EntryInfo(
                    name=entry.name,
                    path=os.path.join(path, entry.name),
                    is_dir=is_dir,
                    is_symlink=is_link,
                ))
        entries.sort(key=lambda e: e.name)
        return entries

    def read_symlink_target(self, path: str) -> str:
        return paths.eval_symlinks(path)
