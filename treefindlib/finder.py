"""Tree matching engine for TreeFindLib.

The TreeMatcher walks a directory tree, asks a predicate about every
eligible entry, and collects the paths that match. Directory symlinks are
searched as independent subtrees ("search jobs") rooted at the link, with
the depth budget rebased so entries under the link keep the depth they
would have had below the original root.

Search jobs are processed from an explicit stack rather than by recursion,
and a job is never started for a directory whose real path is already on
its chain of ancestor jobs. A cycle of directory symlinks therefore ends
instead of recursing forever.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from . import paths
from .adapters.filesystem import LocalFileSystemAdapter
from .config import FindConfig
from .core.adapter import FileSystemAdapter
from .core.node import EntryInfo
from .core.walker import LexicalWalker, WalkControl, WalkFunc

logger = logging.getLogger(__name__)

MatchPredicate = Callable[[str, str], bool]


class InvalidFindConfigError(ValueError):
    """Raised when a FindConfig can't describe a search."""
    pass


@dataclass
class _SearchJob:
    """One traversal root: the top-level root or a directory symlink."""
    root: str
    max_depth: int
    ancestors: FrozenSet[str]
    # Sub-job roots were already evaluated as the link entry
    via_link: bool = False
    # Matched paths interleaved with the sub-jobs they precede
    results: List[Union[str, '_SearchJob']] = field(default_factory=list)

    def sub_jobs(self) -> List['_SearchJob']:
        return [item for item in self.results if isinstance(item, _SearchJob)]


class TreeMatcher:
    """Validated, reusable search over directory trees.

    Example:
        >>> matcher = TreeMatcher(FindConfig.files("*.txt"), glob_name)
        >>> matcher.find("project")
        ['project/a.txt', 'project/sub/b.txt']

    A search never raises for filesystem problems. Entries that could not
    be read are skipped and recorded in ``errors_encountered`` (reset at the
    start of each ``find``), and passed to ``config.on_error`` if set.
    """

    def __init__(self,
                 config: FindConfig,
                 predicate: Optional[MatchPredicate],
                 walker: Optional[WalkFunc] = None,
                 adapter: Optional[FileSystemAdapter] = None):
        """Create and validate a matcher.

        Args:
            config: What to search for
            predicate: ``(pattern, candidate) -> bool``; None matches nothing
            walker: Walk primitive ``walker(root, visit)`` (default: LexicalWalker)
            adapter: Filesystem access (default: local disk)

        Raises:
            InvalidFindConfigError: If the configuration is invalid
        """
        config_errors = config.validate()
        if config_errors:
            raise InvalidFindConfigError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.config = config
        self.predicate = predicate
        self.adapter = adapter or LocalFileSystemAdapter()
        self.walker = walker or LexicalWalker(self.adapter)
        self.errors_encountered: List[Tuple[str, Exception]] = []

    def find(self, root: str) -> List[str]:
        """Search the tree under ``root``.

        If ``root`` is a file, the predicate is asked about ``root`` itself
        and no directory is listed. A directory root is a candidate too,
        offered to the predicate as ``"."``.

        Returns:
            Matching paths in visitation order; empty if nothing matched
        """
        self.errors_encountered = []
        if self.predicate is None:
            return []

        native_root = paths.from_slash(root)
        try:
            root_info = self.adapter.stat(native_root)
        except OSError:
            # Let the walk report it like any other unreadable entry
            root_info = None

        if root_info is not None and not root_info.is_dir:
            return [root] if self.predicate(self.config.pattern, root) else []

        top = _SearchJob(
            root=native_root,
            max_depth=self.config.max_depth,
            ancestors=frozenset(self._real_path(native_root)),
        )
        pending = [top]
        while pending:
            job = pending.pop()
            self._run(job)
            pending.extend(reversed(job.sub_jobs()))

        return _flatten(top)

    def _run(self, job: _SearchJob) -> None:
        """Walk one job's root, filling ``job.results``."""
        config = self.config

        def visit(path: str, entry: Optional[EntryInfo], err: Optional[Exception]) -> WalkControl:
            if err is not None:
                # The walk won't descend here; keep going elsewhere
                self._record_error(path, err)
                return WalkControl.SKIP_SUBTREE

            try:
                relpath = os.path.relpath(path, job.root)
            except (ValueError, OSError) as e:
                self._record_error(path, e)
                return WalkControl.CONTINUE

            if relpath == os.curdir and job.via_link:
                return WalkControl.CONTINUE

            depth = relpath.count(os.sep)
            if not _within(job.max_depth, depth):
                return WalkControl.SKIP_SUBTREE if entry.is_dir else WalkControl.CONTINUE

            link_target = self.adapter.symlink_dir_target(entry)
            if config.is_eligible(entry.is_dir or link_target is not None):
                if self.predicate(config.pattern, relpath):
                    job.results.append(path)

            if link_target is not None:
                sub_job = self._symlink_job(job, path, depth, link_target)
                if sub_job is not None:
                    job.results.append(sub_job)

            return WalkControl.CONTINUE

        self.walker(job.root, visit)

    def _symlink_job(self, job: _SearchJob, path: str, depth: int,
                     real: str) -> Optional[_SearchJob]:
        """Build the search job for a directory symlink, or None to skip it.

        The link's contents sit one level below the link, so with a bounded
        budget they may use ``max_depth - depth - 1`` more levels.
        """
        max_depth = job.max_depth
        if max_depth >= 0:
            max_depth = max_depth - depth - 1
            if max_depth < 0:
                return None

        if real in job.ancestors:
            logger.debug("Not following %s: %s is already being searched", path, real)
            return None

        return _SearchJob(
            root=path + os.sep,
            max_depth=max_depth,
            ancestors=job.ancestors | {real},
            via_link=True,
        )

    def _real_path(self, path: str) -> List[str]:
        try:
            return [self.adapter.read_symlink_target(path)]
        except OSError:
            return []

    def _record_error(self, path: str, error: Exception) -> None:
        logger.debug("Skipping %s: %s", path, error)
        self.errors_encountered.append((path, error))
        if self.config.on_error is not None:
            self.config.on_error(path, error)


def _within(max_depth: int, depth: int) -> bool:
    return max_depth < 0 or depth <= max_depth


def _flatten(top: _SearchJob) -> List[str]:
    """Expand the job tree into one list, sub-job matches in place."""
    matches: List[str] = []
    stack = [iter(top.results)]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
        elif isinstance(item, _SearchJob):
            stack.append(iter(item.results))
        else:
            matches.append(item)
    return matches
