"""Testing utilities for TreeFindLib.

This module provides fixtures for exercising the walker and the matching
engine against a deterministic in-memory filesystem.
"""

from .fixtures import FakeFileSystem

__all__ = ['FakeFileSystem']
