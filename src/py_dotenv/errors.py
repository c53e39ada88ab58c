"""Error taxonomy for loading env files.

Every failure raised by the loader is a ``DotenvError``.  Instead of a
message-only exception per failure, the error carries a **kind** tag and
the structured context a caller needs to act on it:

- ``kind`` — which stage failed (see ``ErrorKind``).
- ``path`` — the file being read or parsed, when there is one.
- ``line`` — 1-based line number for syntax errors.
- ``encoding`` — the encoding name for encoding errors.
- ``name`` — the variable involved in interpolation or validation.

Callers can either catch a specific subclass (``ParseError``) or catch
``DotenvError`` and branch on ``err.kind``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Tag identifying which stage of a load failed."""

    INVALID_ENCODING = "invalid_encoding"
    READ_FAILURE = "read_failure"
    PARSE_ERROR = "parse_error"
    INTERPOLATION_ERROR = "interpolation_error"
    INVALID_PATH = "invalid_path"
    VALIDATION_ERROR = "validation_error"
    INVALID_CONFIG = "invalid_config"


class DotenvError(Exception):
    """Raise when loading, parsing, or applying env files fails.

    Attributes:
        kind: The failure category.
        reason: Human-readable description without location prefix.
        path: File involved, if any.
        line: 1-based line number, if any.
        encoding: Character encoding name, if relevant.
        name: Variable name, if relevant.

    """

    kind: ErrorKind = ErrorKind.READ_FAILURE

    def __init__(
        self,
        reason: str,
        *,
        path: str | None = None,
        line: int | None = None,
        encoding: str | None = None,
        name: str | None = None,
    ) -> None:
        """Create an error with a reason and optional context fields."""
        self.reason = reason
        self.path = path
        self.line = line
        self.encoding = encoding
        self.name = name
        super().__init__(self._format())

    def _format(self) -> str:
        """Prefix the reason with ``path:line`` when known."""
        if self.path is not None and self.line is not None:
            return f"{self.path}:{self.line}: {self.reason}"
        if self.path is not None:
            return f"{self.path}: {self.reason}"
        if self.line is not None:
            return f"line {self.line}: {self.reason}"
        return self.reason


class InvalidEncodingError(DotenvError):
    """Raise when a character encoding name is not recognised."""

    kind = ErrorKind.INVALID_ENCODING

    def __init__(self, encoding: str) -> None:
        """Create the error for the unrecognised *encoding*."""
        super().__init__(f"Illegal character encoding [{encoding}] specified.", encoding=encoding)


class ReadFailureError(DotenvError):
    """Raise when an existing file cannot be opened, read, or decoded."""

    kind = ErrorKind.READ_FAILURE


class ParseError(DotenvError):
    """Raise when a file contains malformed syntax."""

    kind = ErrorKind.PARSE_ERROR


class InterpolationError(DotenvError):
    """Raise when variable references form a cycle."""

    kind = ErrorKind.INTERPOLATION_ERROR


class InvalidPathError(DotenvError):
    """Raise when a caller requires a file but none of the candidates exist."""

    kind = ErrorKind.INVALID_PATH


class ValidationError(DotenvError):
    """Raise when loaded variables fail a required or typed check."""

    kind = ErrorKind.VALIDATION_ERROR


class InvalidConfigError(DotenvError):
    """Raise when a store configuration mapping is malformed."""

    kind = ErrorKind.INVALID_CONFIG
