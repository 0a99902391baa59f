"""Test fixtures for TreeFindLib consumers.

FakeFileSystem is an in-memory FileSystemAdapter. It gives tests a
deterministic tree - including symlinks, link cycles and unreadable
directories - without touching real disk state, and records every call
so tests can assert which filesystem operations ran.
"""

import errno
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ..core.adapter import FileSystemAdapter
from ..core.node import EntryInfo

DIR = "dir"
FILE = "file"
LINK = "link"

MAX_LINK_HOPS = 40


@dataclass
class _FakeNode:
    kind: str
    target: Optional[str] = None
    content: str = ""


class FakeFileSystem(FileSystemAdapter):
    """In-memory filesystem rooted at ``os.sep``.

    Paths are native absolute paths. Parent directories are created on
    demand. Symlink targets may be absolute or relative to the link's
    directory.

    Example:
        fs = FakeFileSystem()
        fs.add_file("/data/a.txt")
        fs.add_symlink("/data/link", "/elsewhere")
        fs.deny("/data/private")
    """

    def __init__(self):
        self._nodes: Dict[str, _FakeNode] = {os.sep: _FakeNode(DIR)}
        self._denied: Set[str] = set()
        self.calls: List[Tuple[str, str]] = []

    # Building the tree

    def add_dir(self, path: str) -> 'FakeFileSystem':
        path = self._norm(path)
        self._ensure_parents(path)
        self._nodes.setdefault(path, _FakeNode(DIR))
        return self

    def add_file(self, path: str, content: str = "") -> 'FakeFileSystem':
        path = self._norm(path)
        self._ensure_parents(path)
        self._nodes[path] = _FakeNode(FILE, content=content)
        return self

    def add_symlink(self, path: str, target: str) -> 'FakeFileSystem':
        path = self._norm(path)
        self._ensure_parents(path)
        self._nodes[path] = _FakeNode(LINK, target=target)
        return self

    def deny(self, path: str) -> 'FakeFileSystem':
        """Make listing the directory at ``path`` fail with PermissionError."""
        self._denied.add(self._norm(path))
        return self

    def calls_to(self, method: str) -> List[str]:
        """Return the paths passed to ``method``, in call order."""
        return [p for m, p in self.calls if m == method]

    # FileSystemAdapter interface

    def stat(self, path: str) -> EntryInfo:
        self.calls.append(("stat", path))
        node = self._nodes[self._resolve(path, follow_last=True)]
        return EntryInfo(name=os.path.basename(os.path.normpath(path)), path=path,
                         is_dir=node.kind == DIR)

    def lstat(self, path: str) -> EntryInfo:
        self.calls.append(("lstat", path))
        node = self._nodes[self._resolve(path, follow_last=False)]
        return EntryInfo(name=os.path.basename(os.path.normpath(path)), path=path,
                         is_dir=node.kind == DIR, is_symlink=node.kind == LINK)

    def list_entries(self, path: str) -> List[EntryInfo]:
        self.calls.append(("list_entries", path))
        real = self._resolve(path, follow_last=True)
        if self._nodes[real].kind != DIR:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        if real in self._denied:
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)

        entries = []
        for child_path, node in self._nodes.items():
            if child_path == real or os.path.dirname(child_path) != real:
                continue
            name = os.path.basename(child_path)
            entries.append(EntryInfo(
                name=name,
                path=os.path.join(path, name),
                is_dir=node.kind == DIR,
                is_symlink=node.kind == LINK,
            ))
        entries.sort(key=lambda e: e.name)
        return entries

    def read_symlink_target(self, path: str) -> str:
        self.calls.append(("read_symlink_target", path))
        return self._resolve(path, follow_last=True)

    # Internals

    @staticmethod
    def _norm(path: str) -> str:
        return os.path.normpath(os.path.join(os.sep, path))

    def _ensure_parents(self, path: str) -> None:
        parent = os.path.dirname(path)
        while parent not in self._nodes:
            self._nodes[parent] = _FakeNode(DIR)
            parent = os.path.dirname(parent)

    def _resolve(self, path: str, follow_last: bool) -> str:
        """Return the real path of ``path``, following links like the kernel."""
        parts = self._split(path)
        current = os.sep
        hops = 0
        i = 0
        while i < len(parts):
            candidate = os.path.join(current, parts[i])
            node = self._nodes.get(candidate)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
            last = i == len(parts) - 1
            if node.kind == LINK and (follow_last or not last):
                hops += 1
                if hops > MAX_LINK_HOPS:
                    raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), path)
                target = os.path.join(current, node.target)
                parts = self._split(target) + parts[i + 1:]
                current = os.sep
                i = 0
                continue
            if not last and node.kind != DIR:
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
            current = candidate
            i += 1
        return current

    @staticmethod
    def _split(path: str) -> List[str]:
        return [p for p in os.path.normpath(os.path.join(os.sep, path)).split(os.sep) if p]
