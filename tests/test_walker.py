"""Unit tests for the lexical walk primitive.

The walk order, skip/abort control and error reporting are checked on the
in-memory FakeFileSystem; one test runs the default walker on a real
temporary directory.
"""

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from treefindlib import LexicalWalker, WalkControl, walk_lexical
from treefindlib.testing import FakeFileSystem


class VisitRecorder:
    """Visitor that records calls and answers from a lookup table."""

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.visits = []

    def __call__(self, path, entry, err):
        self.visits.append((path, entry, err))
        return self.answers.get(path, WalkControl.CONTINUE)

    @property
    def paths(self):
        return [p for p, _, err in self.visits if err is None]

    @property
    def errors(self):
        return [(p, err) for p, _, err in self.visits if err is not None]


@unittest.skipIf(os.name == 'nt', "FakeFileSystem tests use POSIX paths")
class TestLexicalWalker(unittest.TestCase):
    """Test walk order and visitor control on a fake tree."""

    def setUp(self):
        # /r/
        #   a/
        #     x.txt
        #     y/
        #       z.txt
        #   b.txt
        #   c/
        #   link -> /r/a
        self.fs = FakeFileSystem()
        self.fs.add_file("/r/a/x.txt")
        self.fs.add_file("/r/a/y/z.txt")
        self.fs.add_file("/r/b.txt")
        self.fs.add_dir("/r/c")
        self.fs.add_symlink("/r/link", "/r/a")
        self.walker = LexicalWalker(self.fs)

    def test_preorder_name_order(self):
        """Parents come before children, siblings in name order."""
        visitor = VisitRecorder()
        self.assertTrue(self.walker.walk("/r", visitor))
        self.assertEqual(visitor.paths, [
            "/r",
            "/r/a",
            "/r/a/x.txt",
            "/r/a/y",
            "/r/a/y/z.txt",
            "/r/b.txt",
            "/r/c",
            "/r/link",
        ])

    def test_symlinks_are_reported_not_followed(self):
        visitor = VisitRecorder()
        self.walker.walk("/r", visitor)
        link_entry = [e for p, e, _ in visitor.visits if p == "/r/link"][0]
        self.assertTrue(link_entry.is_symlink)
        self.assertFalse(link_entry.is_dir)
        self.assertNotIn("/r/link/x.txt", visitor.paths)

    def test_symlinked_root_is_followed(self):
        visitor = VisitRecorder()
        self.walker.walk("/r/link", visitor)
        self.assertEqual(visitor.paths, [
            "/r/link",
            "/r/link/x.txt",
            "/r/link/y",
            "/r/link/y/z.txt",
        ])

    def test_skip_subtree(self):
        visitor = VisitRecorder({"/r/a": WalkControl.SKIP_SUBTREE})
        self.walker.walk("/r", visitor)
        self.assertEqual(visitor.paths, ["/r", "/r/a", "/r/b.txt", "/r/c", "/r/link"])
        self.assertNotIn("/r/a", self.fs.calls_to("list_entries"))

    def test_skip_subtree_on_file_continues(self):
        visitor = VisitRecorder({"/r/b.txt": WalkControl.SKIP_SUBTREE})
        self.walker.walk("/r", visitor)
        self.assertIn("/r/c", visitor.paths)

    def test_abort(self):
        visitor = VisitRecorder({"/r/a/x.txt": WalkControl.ABORT})
        self.assertFalse(self.walker.walk("/r", visitor))
        self.assertEqual(visitor.paths, ["/r", "/r/a", "/r/a/x.txt"])

    def test_unreadable_directory_reported_and_walk_continues(self):
        self.fs.deny("/r/a")
        visitor = VisitRecorder()
        self.assertTrue(self.walker.walk("/r", visitor))

        self.assertEqual(len(visitor.errors), 1)
        path, err = visitor.errors[0]
        self.assertEqual(path, "/r/a")
        self.assertIsInstance(err, PermissionError)
        self.assertEqual(visitor.paths, ["/r", "/r/a", "/r/b.txt", "/r/c", "/r/link"])

    def test_missing_root(self):
        visitor = VisitRecorder()
        walk_lexical("/nope", visitor, adapter=self.fs)
        self.assertEqual(len(visitor.visits), 1)
        path, entry, err = visitor.visits[0]
        self.assertEqual(path, "/nope")
        self.assertIsNone(entry)
        self.assertIsInstance(err, FileNotFoundError)

    def test_walker_is_callable(self):
        visitor = VisitRecorder()
        self.walker("/r/c", visitor)
        self.assertEqual(visitor.paths, ["/r/c"])


class TestLexicalWalkerOnDisk(unittest.TestCase):
    """Test the default walker against a real directory."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_path = Path(self.test_dir)
        (self.test_path / "b").mkdir()
        (self.test_path / "b" / "inner.txt").write_text("inner")
        (self.test_path / "a.txt").write_text("a")
        (self.test_path / "c.txt").write_text("c")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_walk_real_directory(self):
        visitor = VisitRecorder()
        LexicalWalker().walk(self.test_dir, visitor)
        self.assertEqual(visitor.paths, [
            self.test_dir,
            os.path.join(self.test_dir, "a.txt"),
            os.path.join(self.test_dir, "b"),
            os.path.join(self.test_dir, "b", "inner.txt"),
            os.path.join(self.test_dir, "c.txt"),
        ])

    def test_entry_types(self):
        visitor = VisitRecorder()
        LexicalWalker().walk(self.test_dir, visitor)
        entries = {p: e for p, e, _ in visitor.visits}
        self.assertTrue(entries[os.path.join(self.test_dir, "b")].is_dir)
        self.assertFalse(entries[os.path.join(self.test_dir, "a.txt")].is_dir)


if __name__ == '__main__':
    unittest.main()
