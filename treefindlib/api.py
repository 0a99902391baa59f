"""High-level API for TreeFindLib.

This module provides simple, functional interfaces for searching directory
trees. These functions wrap TreeMatcher for the common case of a single
search with one of the built-in predicates.
"""

from typing import Callable, List, Optional

from .config import FindConfig
from .core.adapter import FileSystemAdapter
from .core.walker import WalkFunc
from .finder import MatchPredicate, TreeMatcher
from .matchers import glob_name, regex_name, regex_path


def find_matches(
    root: str,
    pattern: str,
    max_depth: int,
    match_files: bool,
    match_dirs: bool,
    predicate: Optional[MatchPredicate],
    walker: Optional[WalkFunc] = None,
    adapter: Optional[FileSystemAdapter] = None,
    on_error: Optional[Callable[[str, Exception], None]] = None,
) -> List[str]:
    """Find files and directories under ``root`` accepted by ``predicate``.

    Args:
        root: Directory to search, or a single file to test
        pattern: Passed unchanged to the predicate
        max_depth: Levels below root to consider (0 = only direct entries,
            negative = unlimited)
        match_files: Whether files (and links to files) are candidates
        match_dirs: Whether directories (and links to them) are candidates
        predicate: ``(pattern, relpath) -> bool``; None finds nothing
        walker: Override for the directory walk primitive
        adapter: Filesystem access layer (default: local disk)
        on_error: Called with ``(path, exc)`` for each skipped entry

    Returns:
        Matching paths in visitation order (empty list if none)

    Example:
        >>> find_matches("project", "*.txt", -1, True, False, glob_name)
        ['project/a.txt', 'project/sub/b.txt']
    """
    config = FindConfig(
        pattern=pattern,
        max_depth=max_depth,
        match_files=match_files,
        match_dirs=match_dirs,
        on_error=on_error,
    )
    return TreeMatcher(config, predicate, walker=walker, adapter=adapter).find(root)


def find_by_name(root: str, pattern: str, max_depth: int = -1,
                 match_files: bool = True, match_dirs: bool = False,
                 **kwargs) -> List[str]:
    """Find entries whose base name matches the glob ``pattern``.

    Example:
        >>> find_by_name("project", "*.py", max_depth=1)
    """
    return find_matches(root, pattern, max_depth, match_files, match_dirs, glob_name, **kwargs)


def find_by_regex_path(root: str, pattern: str, max_depth: int = -1,
                       match_files: bool = True, match_dirs: bool = False,
                       **kwargs) -> List[str]:
    """Find entries whose path relative to ``root`` contains a match for ``pattern``."""
    return find_matches(root, pattern, max_depth, match_files, match_dirs, regex_path, **kwargs)


def find_by_regex_name(root: str, pattern: str, max_depth: int = -1,
                       match_files: bool = True, match_dirs: bool = False,
                       **kwargs) -> List[str]:
    """Find entries whose base name contains a match for ``pattern``."""
    return find_matches(root, pattern, max_depth, match_files, match_dirs, regex_name, **kwargs)
