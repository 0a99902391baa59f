"""Small file helpers that sit next to the search engine.

None of these walk trees; they answer one-off questions about a path or a
PATH-style list, and create or read small files.
"""

import os
import stat
import string
import sys
import tempfile
from typing import List

from . import paths


def dir_is_empty(name: str) -> bool:
    """Check whether directory ``name`` has no entries.

    Raises:
        OSError: If the directory cannot be opened
    """
    with os.scandir(paths.from_slash(name)) as it:
        return next(it, None) is None


def temp_file_create_with_content(data: bytes = b"", filename: str = "") -> str:
    """Write ``data`` to a new temporary file and return its path.

    With ``filename`` the file gets exactly that name inside a fresh
    temporary directory; otherwise the name is chosen by ``tempfile``.
    A partially written named file is removed before the error propagates.

    Raises:
        OSError: If the file cannot be created or written
    """
    if filename:
        workdir = tempfile.mkdtemp(prefix="systempath")
        fpath = os.path.join(workdir, filename)
        try:
            with open(fpath, "wb") as f:
                f.write(data)
        except OSError:
            if os.path.exists(fpath):
                os.remove(fpath)
            raise
        return fpath

    fd, fpath = tempfile.mkstemp()
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    return fpath


def cat(*files: str, encoding: str = "utf-8") -> str:
    """Concatenate text files, separating non-empty output with newlines.

    Raises:
        OSError: On the first file that cannot be read
    """
    contents = ""
    for fname in files:
        with open(paths.from_slash(fname), "r", encoding=encoding) as f:
            text = f.read()
        if contents:
            contents += "\n" + text
        else:
            contents += text
    return contents


def path_is_unix_socket(addr: str) -> bool:
    """Check if ``addr`` names an existing Unix domain socket.

    Anything that can't be stat'ed is assumed to be a TCP address.
    """
    try:
        return stat.S_ISSOCK(os.stat(addr).st_mode)
    except (OSError, ValueError):
        return False


def path_is_child_of(path: str, parent_dir: str) -> bool:
    """Check if ``path`` lies strictly below ``parent_dir`` (lexically).

    A path is not its own child. Both are made absolute and cleaned first.
    """
    abs_path = paths.absolute(path)
    abs_parent = paths.absolute(parent_dir)
    if abs_path == abs_parent:
        return False
    prefix = abs_parent if abs_parent.endswith(os.sep) else abs_parent + os.sep
    return abs_path.startswith(prefix)


def first_exist_path(path_list: str) -> str:
    """Return the first entry of a PATH-style list that exists, or ``""``."""
    for candidate in paths.split_list(path_list):
        if os.path.exists(candidate):
            return candidate
    return ""


def get_path_in_paths(path_to_check: str, path_list: str) -> str:
    """Return the entry of a PATH-style list that contains ``path_to_check``, or ``""``."""
    for candidate in paths.split_list(path_list):
        if candidate and path_is_child_of(path_to_check, candidate):
            return candidate
    return ""


def path_has_subpath(subpath: str, path_list: str) -> bool:
    """Check if ``subpath`` exists below any entry of a PATH-style list."""
    for candidate in paths.split_list(path_list):
        if os.path.exists(paths.join(candidate, subpath)):
            return True
    return False


def bits_to_drives(bitmap: int) -> List[str]:
    """Decode a logical-drive bitmask (bit 0 = ``A``) into drive letters."""
    drives = []
    for letter in string.ascii_uppercase:
        if bitmap & 1:
            drives.append(letter)
        bitmap >>= 1
    return drives


def get_drives() -> List[str]:
    """List the logical drive letters on Windows; empty elsewhere.

    Raises:
        OSError: If Windows refuses to report the drives
    """
    if sys.platform != "win32":
        return []
    import ctypes
    bitmap = ctypes.windll.kernel32.GetLogicalDrives()
    if bitmap == 0:
        raise ctypes.WinError()
    return bits_to_drives(bitmap)
