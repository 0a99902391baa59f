"""Directory walk primitive for TreeFindLib.

A walker is any callable ``walker(root, visit)``. It calls
``visit(path, entry, err)`` for every entry it reaches and obeys the
:class:`WalkControl` value the visitor returns. The matching engine accepts
a walker as a parameter, so tests can replace the default one.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from .adapter import FileSystemAdapter
from .node import EntryInfo

logger = logging.getLogger(__name__)


class WalkControl(Enum):
    """What a walk should do after visiting an entry."""
    CONTINUE = "continue"           # Keep going
    SKIP_SUBTREE = "skip_subtree"   # Don't descend into this directory
    ABORT = "abort"                 # Stop the whole walk


VisitFunc = Callable[[str, Optional[EntryInfo], Optional[Exception]], WalkControl]
WalkFunc = Callable[[str, VisitFunc], object]


class LexicalWalker:
    """Depth-first, pre-order walk in name order.

    The root is described with ``stat`` so a root that is a symlink to a
    directory is walked. Every other entry comes from ``list_entries`` and
    is never followed: a symlinked directory is reported as an entry but
    its contents are not walked.

    The visitor is called:
    - ``visit(root, None, err)`` when the root cannot be described
    - ``visit(path, entry, None)`` for every entry, parents before children
    - ``visit(path, entry, err)`` a second time for a directory whose
      listing failed; the walk then moves on to its siblings

    ``SKIP_SUBTREE`` returned for a non-directory is the same as ``CONTINUE``.
    """

    def __init__(self, adapter: Optional[FileSystemAdapter] = None):
        """Initialize walker with a filesystem adapter.

        Args:
            adapter: FileSystemAdapter to read from (default: local disk)
        """
        if adapter is None:
            from ..adapters.filesystem import LocalFileSystemAdapter
            adapter = LocalFileSystemAdapter()
        self.adapter = adapter

    def walk(self, root: str, visit: VisitFunc) -> bool:
        """Walk the tree under ``root``.

        Returns:
            False if the visitor aborted the walk, True otherwise
        """
        try:
            entry = self.adapter.stat(root)
        except OSError as e:
            visit(root, None, e)
            return True
        return self._walk(root, entry, visit)

    __call__ = walk

    def _walk(self, path: str, entry: EntryInfo, visit: VisitFunc) -> bool:
        control = visit(path, entry, None)
        if control is WalkControl.ABORT:
            return False
        if control is WalkControl.SKIP_SUBTREE or not entry.is_dir:
            return True

        try:
            children = self.adapter.list_entries(path)
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return visit(path, entry, e) is not WalkControl.ABORT

        for child in children:
            if not self._walk(child.path, child, visit):
                return False
        return True


def walk_lexical(root: str, visit: VisitFunc,
                 adapter: Optional[FileSystemAdapter] = None) -> bool:
    """Walk ``root`` with a :class:`LexicalWalker`. See its docs for details."""
    return LexicalWalker(adapter).walk(root, visit)
