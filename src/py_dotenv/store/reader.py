"""File reader — load raw text from candidate paths.

The reader is the only part of the loader that touches file contents.
It supports two policies:

- **Short-circuit** (default) — read paths in order and stop after the
  first one that was read.  Later paths are never opened.  This is the
  "best available file" policy: ``.env.local`` if present, else ``.env``.
- **Merge** — read every path and return them all, in input order, so
  the store can layer later files over earlier ones.

Failures are never skipped: an unreadable or undecodable file raises
``ReadFailureError``, and an unknown encoding raises
``InvalidEncodingError`` before any path is opened.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from py_dotenv.errors import ReadFailureError
from py_dotenv.logging import LogLevel, log_to
from py_dotenv.store.encoding import DEFAULT_ENCODING, check_encoding, decode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_dotenv.logging import Logger

_SOURCE = "reader"


def read_file(path: str, encoding: str = DEFAULT_ENCODING) -> str:
    """Read and decode a single file.

    Raises:
        InvalidEncodingError: If *encoding* is not recognised.
        ReadFailureError: If the file cannot be read or decoded.

    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        msg = f"unable to read file: {e.strerror or e}"
        raise ReadFailureError(msg, path=path, encoding=encoding) from e
    try:
        return decode(data, encoding)
    except UnicodeDecodeError as e:
        msg = f"file is not valid {encoding}: {e.reason} at byte {e.start}"
        raise ReadFailureError(msg, path=path, encoding=encoding) from e


def read(
    paths: Iterable[str],
    *,
    short_circuit: bool = True,
    encoding: str = DEFAULT_ENCODING,
    logger: Logger | None = None,
) -> dict[str, str]:
    """Read *paths* into a path → text mapping.

    Args:
        paths: Files to read, in priority order.
        short_circuit: Stop after the first file read.
        encoding: Encoding every file is declared to use.
        logger: Optional load log.

    Returns:
        An insertion-ordered mapping; empty when *paths* is empty.

    Raises:
        InvalidEncodingError: If *encoding* is not recognised.
        ReadFailureError: If a file cannot be read or decoded.

    """
    check_encoding(encoding)
    contents: dict[str, str] = {}
    for path in paths:
        try:
            contents[path] = read_file(path, encoding)
        except ReadFailureError as e:
            log_to(logger, LogLevel.ERROR, e.reason, source=_SOURCE, path=path)
            raise
        log_to(logger, LogLevel.INFO, f"read {path}", source=_SOURCE, path=path)
        if short_circuit:
            log_to(logger, LogLevel.DEBUG, "short-circuit", source=_SOURCE, path=path)
            break
    return contents
