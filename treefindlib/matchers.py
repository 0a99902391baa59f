"""Match predicates for TreeFindLib.

A predicate decides whether a candidate path matches a pattern:
``matches(pattern, candidate) -> bool``. The engine hands it the entry's
path relative to the search root (or the root itself when the root is a
file). Three variants are provided:

- GlobNameMatcher: shell-style glob against the base name
- RegexPathMatcher: regular expression searched anywhere in the relative path
- RegexNameMatcher: regular expression searched in the base name

Any plain callable with the same signature works as a predicate too.
A malformed pattern never raises; it simply matches nothing.
"""

import fnmatch
import logging
import os
import re
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional, Pattern, Type

from cachetools import LRUCache, cached

from . import paths

logger = logging.getLogger(__name__)

REGEX_CACHE_SIZE = 256

_BAD_PATTERN = object()


@cached(cache=LRUCache(maxsize=REGEX_CACHE_SIZE), lock=threading.Lock())
def _compile(pattern: str):
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.debug("Invalid regular expression %r: %s", pattern, e)
        return _BAD_PATTERN


def compile_pattern(pattern: str) -> Optional[Pattern]:
    """Compile ``pattern`` through the shared cache.

    Returns:
        The compiled expression, or None if the pattern is malformed
    """
    compiled = _compile(pattern)
    return None if compiled is _BAD_PATTERN else compiled


class Matcher(ABC):
    """Base class for match predicates.

    Instances are stateless and callable, so a matcher can be passed
    anywhere a ``(pattern, candidate) -> bool`` function is expected.
    """

    @abstractmethod
    def matches(self, pattern: str, candidate: str) -> bool:
        """Check whether ``candidate`` matches ``pattern``."""
        pass

    def __call__(self, pattern: str, candidate: str) -> bool:
        return self.matches(pattern, candidate)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def glob_is_valid(pattern: str) -> bool:
    """Check that ``pattern`` is a well-formed glob.

    ``fnmatch`` reads an unclosed ``[`` as a literal; here it makes the
    pattern malformed, as does a dangling escape at the end on POSIX.
    """
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == '\\' and os.sep == '/':
            if i == n:
                return False
            i += 1
        elif c == '[':
            # Same class boundaries as fnmatch.translate
            j = i
            if j < n and pattern[j] == '!':
                j += 1
            if j < n and pattern[j] == ']':
                j += 1
            j = pattern.find(']', j)
            if j < 0:
                return False
            i = j + 1
    return True


class GlobNameMatcher(Matcher):
    """Shell-style glob (``*``, ``?``, ``[...]``) against the base name.

    Matching is case-sensitive on every platform. A malformed pattern
    (see :func:`glob_is_valid`) matches nothing.
    """

    def matches(self, pattern: str, candidate: str) -> bool:
        if not glob_is_valid(pattern):
            logger.debug("Invalid glob pattern %r", pattern)
            return False
        compiled = compile_pattern(fnmatch.translate(pattern))
        if compiled is None:
            return False
        return compiled.match(paths.base(candidate)) is not None


class RegexPathMatcher(Matcher):
    """Regular expression searched anywhere in the whole relative path.

    Only anchors written into the pattern itself (``^``, ``$``) pin the match.
    """

    def matches(self, pattern: str, candidate: str) -> bool:
        compiled = compile_pattern(pattern)
        if compiled is None:
            return False
        return compiled.search(candidate) is not None


class RegexNameMatcher(RegexPathMatcher):
    """Regular expression searched in the base name only."""

    def matches(self, pattern: str, candidate: str) -> bool:
        return super().matches(pattern, paths.base(candidate))


glob_name = GlobNameMatcher()
regex_path = RegexPathMatcher()
regex_name = RegexNameMatcher()


_MATCHERS: Dict[str, Type[Matcher]] = {
    'glob': GlobNameMatcher,
    'glob_name': GlobNameMatcher,
    'name': GlobNameMatcher,
    'regex': RegexPathMatcher,
    'regex_path': RegexPathMatcher,
    'regex_name': RegexNameMatcher,
}


def get_matcher(kind: str) -> Matcher:
    """Create a matcher by name.

    Args:
        kind: One of glob, glob_name, name, regex, regex_path, regex_name

    Returns:
        Matcher instance

    Raises:
        ValueError: If the name is not recognized
    """
    kind_lower = kind.lower()
    if kind_lower not in _MATCHERS:
        raise ValueError(
            f"Unknown matcher: {kind}. "
            f"Choose from: {', '.join(_MATCHERS.keys())}"
        )
    return _MATCHERS[kind_lower]()
