"""Configuration for TreeFindLib searches.

This module defines how users describe a search: the pattern handed to the
predicate, how deep to look, which entry types are eligible, and how to be
told about entries that could not be read.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

UNBOUNDED = -1


@dataclass
class FindConfig:
    """Complete configuration for one tree search.

    The pattern is opaque here; only the predicate interprets it.

    Depth counts separators in an entry's path relative to the search root,
    so entries directly inside the root have depth 0. A negative max_depth
    means no limit.
    """

    pattern: str = ""
    max_depth: int = UNBOUNDED

    # Eligibility
    match_files: bool = True
    match_dirs: bool = False

    # Called with (path, exception) for every entry the search had to skip.
    # Errors never stop a search; this is only a way to observe them.
    on_error: Optional[Callable[[str, Exception], None]] = None

    def is_eligible(self, is_dir: bool) -> bool:
        """Check whether an entry of this type may be matched at all."""
        return (self.match_dirs and is_dir) or (self.match_files and not is_dir)

    # Convenience constructors for common configurations

    @classmethod
    def files(cls, pattern: str, max_depth: int = UNBOUNDED) -> 'FindConfig':
        """Create config that matches files only."""
        return cls(pattern=pattern, max_depth=max_depth, match_files=True, match_dirs=False)

    @classmethod
    def dirs(cls, pattern: str, max_depth: int = UNBOUNDED) -> 'FindConfig':
        """Create config that matches directories only."""
        return cls(pattern=pattern, max_depth=max_depth, match_files=False, match_dirs=True)

    @classmethod
    def shallow(cls, pattern: str, match_dirs: bool = False) -> 'FindConfig':
        """Create config that only looks directly inside the root."""
        return cls(pattern=pattern, max_depth=0, match_files=True, match_dirs=match_dirs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.pattern, str):
            errors.append(f"pattern must be a string, got {_type_name(self.pattern)}")

        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            errors.append(f"max_depth must be an integer, got {_type_name(self.max_depth)}")

        if self.on_error is not None and not callable(self.on_error):
            errors.append("on_error must be callable")

        return errors


def _type_name(value: Any) -> str:
    return type(value).__name__
