"""TreeFindLib - pattern-based search over directory trees.

TreeFindLib walks a directory tree, asks a match predicate about each file
and directory, and returns the matching paths in a stable order. Directory
symlinks are searched as subtrees of their own, with the depth limit carried
over and link cycles cut off.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from treefindlib import find_by_name
    find_by_name("project", "*.txt", max_depth=2)

    from treefindlib import find_matches, regex_path
    find_matches("project", r"^src/.*\\.py$", -1, True, False, regex_path)
━━━━━━━━━━━━━━━━━━━━━━━━━━

The path helpers live in ``treefindlib.paths`` and the small file helpers
in ``treefindlib.fileutils``.
"""

import logging

__version__ = "0.1.0"

# Core components
from .core import EntryInfo, FileSystemAdapter, LexicalWalker, WalkControl, walk_lexical

# Adapters
from .adapters import LocalFileSystemAdapter

# Predicates
from .matchers import (
    Matcher,
    GlobNameMatcher,
    RegexPathMatcher,
    RegexNameMatcher,
    glob_name,
    regex_path,
    regex_name,
    get_matcher,
)

# Configuration and engine
from .config import FindConfig, UNBOUNDED
from .finder import TreeMatcher, InvalidFindConfigError

# High-level API
from .api import (
    find_matches,
    find_by_name,
    find_by_regex_path,
    find_by_regex_name,
)

from . import paths
from . import fileutils

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Core
    'EntryInfo',
    'FileSystemAdapter',
    'LexicalWalker',
    'WalkControl',
    'walk_lexical',
    # Adapters
    'LocalFileSystemAdapter',
    # Predicates
    'Matcher',
    'GlobNameMatcher',
    'RegexPathMatcher',
    'RegexNameMatcher',
    'glob_name',
    'regex_path',
    'regex_name',
    'get_matcher',
    # Config
    'FindConfig',
    'UNBOUNDED',
    'TreeMatcher',
    'InvalidFindConfigError',
    # API
    'find_matches',
    'find_by_name',
    'find_by_regex_path',
    'find_by_regex_name',
    # Helpers
    'paths',
    'fileutils',
]
