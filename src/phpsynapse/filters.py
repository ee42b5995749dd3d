"""Include/exclude filtering of file ids handed to the pipeline.

Pattern syntax:
  re:<regex>   searched in the absolute POSIX path of the file id
  <glob>       matched against the path relative to the project root, one
               path segment at a time: `*`, `?` and `[...]` never cross a
               `/`, and a `**` segment matches zero or more directories

Exclude patterns beat include patterns. Ids carrying a NUL byte are virtual
modules produced by other build plugins and are never transformed.
"""

from __future__ import annotations

import fnmatch
import os
import re
from collections.abc import Callable, Iterable
from pathlib import Path

_REGEX_PREFIX = "re:"

FileFilter = Callable[[str | Path], bool]


def _glob_match(parts: list[str], pattern: list[str]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_glob_match(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatchcase(parts[0], head) and _glob_match(parts[1:], rest)


def _compile(pattern: str) -> Callable[[str, str], bool]:
    if pattern.startswith(_REGEX_PREFIX):
        regex = re.compile(pattern[len(_REGEX_PREFIX):])
        return lambda absolute, _relative: regex.search(absolute) is not None
    segments = pattern.strip("/").split("/")
    return lambda _absolute, relative: _glob_match(relative.split("/"), segments)


def create_filter(
    include: Iterable[str] | None,
    exclude: Iterable[str] | None,
    root: Path,
) -> FileFilter:
    """Return a predicate telling whether a file id should be transformed.

    An empty or missing *include* list accepts every id not excluded.
    """
    includes = [_compile(p) for p in include or []]
    excludes = [_compile(p) for p in exclude or []]
    root_str = os.path.normpath(str(root))

    def _accepts(file_id: str | Path) -> bool:
        raw = str(file_id)
        if "\0" in raw:
            return False

        absolute = Path(os.path.normpath(os.path.join(root_str, raw))).as_posix()
        relative = Path(os.path.relpath(absolute, root_str)).as_posix()

        if any(match(absolute, relative) for match in excludes):
            return False
        if not includes:
            return True
        return any(match(absolute, relative) for match in includes)

    return _accepts
