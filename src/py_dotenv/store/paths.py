"""Candidate paths — where to look for env files.

Callers name one or more directories and one or more file names.  The
resolver tries every combination, directory first:

    dirs  = ["/app", "/etc/app"]
    names = [".env", ".env.local"]

    → /app/.env, /app/.env.local, /etc/app/.env, /etc/app/.env.local

and keeps only those that exist as regular files.  Missing combinations
are not errors; they are simply skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import os
    from collections.abc import Iterable


def file_paths(directories: Iterable[str | os.PathLike[str]], names: Iterable[str]) -> list[str]:
    """Return the existing ``directory/name`` files, directory-major.

    Args:
        directories: Directories in priority order.
        names: Candidate file names in priority order.

    Returns:
        Paths of regular files that exist right now.

    """
    candidates = list(names)
    found: list[str] = []
    for directory in directories:
        for name in candidates:
            path = Path(directory) / name
            if path.is_file():
                found.append(str(path))
    return found
