"""Core abstractions for TreeFindLib.

This module contains the entry record, the filesystem adapter interface and
the directory walk primitive the matching engine is built on.
"""

from .node import EntryInfo
from .adapter import FileSystemAdapter
from .walker import LexicalWalker, WalkControl, walk_lexical

__all__ = [
    "EntryInfo",
    "FileSystemAdapter",
    "LexicalWalker",
    "WalkControl",
    "walk_lexical",
]
