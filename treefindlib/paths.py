"""Path normalization helpers for TreeFindLib.

Every function here accepts paths written with either forward slashes or the
platform separator and converts them to the native form before delegating to
``os.path``. They are pure: no filesystem access except ``absolute`` (which
reads the working directory) and ``eval_symlinks``.

The ``*_smart`` variants also understand drive letters written in slash form
(``/C/Users`` or ``C/Users``) and rewrite them to ``C:/Users`` on Windows.
"""

import ntpath
import os
import posixpath
import re
from typing import List, Optional, Tuple

PATH_SEPARATORS = ("/", "\\")

_DRIVE_GLOB = re.compile(r"^/(.)\*")
_DRIVE_LEADING_SLASH = re.compile(r"^/(.)/")
_DRIVE_BARE = re.compile(r"^(.)/")


def _flavor(windows: Optional[bool] = None):
    """Return the ``os.path`` flavor module for the requested platform."""
    if windows is None:
        return os.path
    return ntpath if windows else posixpath


def _is_windows(windows: Optional[bool]) -> bool:
    if windows is None:
        return os.name == 'nt'
    return windows


def to_slash(path: str, windows: Optional[bool] = None) -> str:
    """Replace each platform separator in ``path`` with ``/``."""
    sep = _flavor(windows).sep
    if sep == "/":
        return path
    return path.replace(sep, "/")


def from_slash(path: str, windows: Optional[bool] = None) -> str:
    """Replace each ``/`` in ``path`` with the platform separator."""
    sep = _flavor(windows).sep
    if sep == "/":
        return path
    return path.replace("/", sep)


def _rewrite_drive(path: str) -> str:
    path = _DRIVE_GLOB.sub(r"\1/*", path)       # /C* -> C/*
    path = _DRIVE_LEADING_SLASH.sub(r"\1/", path)  # /C/Users -> C/Users
    path = _DRIVE_BARE.sub(r"\1:/", path)       # C/ -> C:/
    return path


def to_slash_smart(path: str, is_full_path: bool = False, windows: Optional[bool] = None) -> str:
    """Like :func:`to_slash`, but rewrite slash-form drive letters on Windows.

    ``/C*`` becomes ``C:/*`` and ``/C/Users`` becomes ``C:/Users``. The rewrite
    only happens on Windows, only for paths that contain ``/``, and only when
    the path starts with ``/`` or ``is_full_path`` is set.
    """
    if _is_windows(windows) and "/" in path:
        if is_full_path or path.startswith("/"):
            path = _rewrite_drive(path)
    return to_slash(path, windows)


def from_slash_smart(path: str, is_full_path: bool = False, windows: Optional[bool] = None) -> str:
    """Smart counterpart of :func:`from_slash`."""
    return from_slash(to_slash_smart(path, is_full_path, windows), windows)


def clean(path: str) -> str:
    """Return the shortest lexically equivalent native path.

    An empty path cleans to ``"."``. ``clean(clean(p)) == clean(p)``.
    """
    if not path:
        return os.curdir
    cleaned = os.path.normpath(from_slash(path))
    if cleaned.startswith("//"):
        # posixpath keeps exactly two leading slashes
        cleaned = cleaned[1:]
    return cleaned


def join(*elem: str) -> str:
    """Join path elements with the native separator, ignoring empty ones.

    Returns ``""`` when every element is empty; otherwise the result is cleaned.
    Only the first element may be absolute: ``join("a", "/b")`` is ``a/b``.
    """
    parts = [from_slash(p) for p in elem if p]
    if not parts:
        return ""
    rest = [p.lstrip(os.sep + "/") for p in parts[1:]]
    return clean(os.path.join(parts[0], *[p for p in rest if p]))


def split(path: str) -> Tuple[str, str]:
    """Split after the final separator so that ``dir + file == path``."""
    path = from_slash(path)
    _, tail = os.path.split(path)
    return path[:len(path) - len(tail)], tail


def split_list(path: str) -> List[str]:
    """Split a PATH-style list; an empty string yields an empty list."""
    if not path:
        return []
    return from_slash(path).split(os.pathsep)


def extension(path: str) -> str:
    """Return the suffix starting at the final dot of the last element."""
    path = from_slash(path)
    for i in range(len(path) - 1, -1, -1):
        if path[i] == os.sep or path[i] == "/":
            break
        if path[i] == ".":
            return path[i:]
    return ""


def eval_symlinks(path: str) -> str:
    """Resolve every symbolic link in ``path``.

    The result is always the absolute real path, even for relative input.

    Raises:
        OSError: If the path or its final target is missing
    """
    resolved = os.path.realpath(from_slash(path))
    os.stat(resolved)
    return resolved


def absolute(path: str) -> str:
    """Return a cleaned absolute form of ``path``."""
    return os.path.abspath(from_slash(path))


def is_absolute(path: str) -> bool:
    return os.path.isabs(from_slash(path))


def relative(basepath: str, targpath: str) -> str:
    """Return ``targpath`` relative to ``basepath``.

    The result depends only on the two paths, never on the working directory.

    Raises:
        ValueError: If only one of the paths is absolute, if ``basepath``
            climbs out of ``targpath`` with ``..``, or if they are on
            different drives
    """
    base_clean = clean(basepath)
    targ_clean = clean(targpath)
    if is_absolute(base_clean) != is_absolute(targ_clean):
        raise ValueError(f"Can't make {targpath} relative to {basepath}")

    if not is_absolute(base_clean):
        base_parts = _components(base_clean)
        targ_parts = _components(targ_clean)
        common = 0
        while (common < len(base_parts) and common < len(targ_parts)
               and base_parts[common] == targ_parts[common]):
            common += 1
        if os.pardir in base_parts[common:]:
            raise ValueError(f"Can't make {targpath} relative to {basepath}")

    return os.path.relpath(targ_clean, base_clean)


def _components(cleaned: str) -> List[str]:
    return [] if cleaned == os.curdir else cleaned.split(os.sep)


def base(path: str) -> str:
    """Return the last element of ``path``, ignoring trailing separators.

    An empty path gives ``"."`` and a path made only of separators gives a
    single separator.
    """
    path = from_slash(path)
    if not path:
        return os.curdir
    stripped = path.rstrip(os.sep + "/")
    if not stripped:
        return os.sep
    _, rest = os.path.splitdrive(stripped)
    if not rest:
        return os.sep
    name = os.path.basename(rest)
    return name or os.sep


def dirname(path: str) -> str:
    """Return all but the last element of ``path``, cleaned."""
    path = from_slash(path)
    head, _ = split(path)
    return clean(head) if head else os.curdir


def volume_name(path: str) -> str:
    """Return the leading volume (``C:`` or ``\\\\host\\share``); empty off Windows."""
    return os.path.splitdrive(from_slash(path))[0]


def base_no_ext(path: str) -> str:
    """Return the base name with its extension removed."""
    name = base(path)
    ext = extension(path)
    return name[:len(name) - len(ext)] if ext and name.endswith(ext) else name


# Separator-preserving helpers. These keep whatever separator style the
# caller already uses instead of forcing the native one.

def get_path_separator(path: str) -> str:
    """Return the first separator style found in ``path`` (``/`` wins), or ``""``."""
    for sep in PATH_SEPARATORS:
        if sep in path:
            return sep
    return ""


def has_end_path_separator(path: str) -> bool:
    return path.endswith(PATH_SEPARATORS)


def convert_path_separators(frompath: str, reference: str) -> str:
    """Rewrite ``frompath`` to use the separator style found in ``reference``.

    ``frompath`` is returned unchanged when ``reference`` has no separator.
    """
    target = get_path_separator(reference)
    if not target:
        return frompath
    current = get_path_separator(frompath)
    if current and current != target:
        frompath = frompath.replace(current, target)
    return frompath


def count_path_separator(path: str) -> int:
    """Count occurrences of the separator style used by ``path``."""
    sep = get_path_separator(path)
    if not sep:
        return 0
    return path.count(sep)


def join_smart(*elem: str, fallback_separator: str = "") -> str:
    """Join elements, then render the result with the first separator seen in them."""
    sep = ""
    for part in elem:
        sep = get_path_separator(part)
        if sep:
            break
    if not sep:
        sep = fallback_separator or os.sep
    joined = join(*elem)
    if sep != os.sep:
        joined = joined.replace(os.sep, sep)
    return joined


def rel_smart(basepath: str, targpath: str, fallback_separator: str = "") -> str:
    """Like :func:`relative`, rendered with ``basepath``'s separator style."""
    sep = get_path_separator(basepath) or fallback_separator or os.sep
    result = relative(basepath, targpath)
    if sep != os.sep:
        result = result.replace(os.sep, sep)
    return result
