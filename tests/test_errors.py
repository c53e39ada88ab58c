"""Tests for the error taxonomy.

Every loader failure is a ``DotenvError`` carrying a kind tag plus
whatever context applies: path, line, encoding, variable name.
"""

import pytest

from py_dotenv.errors import (
    DotenvError,
    ErrorKind,
    InterpolationError,
    InvalidConfigError,
    InvalidEncodingError,
    InvalidPathError,
    ParseError,
    ReadFailureError,
    ValidationError,
)

_LINE = 7


class TestErrorKinds:
    """Verify each subclass carries its kind."""

    @pytest.mark.parametrize(
        ("error_type", "kind"),
        [
            (ReadFailureError, ErrorKind.READ_FAILURE),
            (ParseError, ErrorKind.PARSE_ERROR),
            (InterpolationError, ErrorKind.INTERPOLATION_ERROR),
            (InvalidPathError, ErrorKind.INVALID_PATH),
            (ValidationError, ErrorKind.VALIDATION_ERROR),
            (InvalidConfigError, ErrorKind.INVALID_CONFIG),
        ],
    )
    def test_kind(self, error_type: type[DotenvError], kind: ErrorKind) -> None:
        """Each subclass reports its own kind and is a DotenvError."""
        error = error_type("boom")
        assert error.kind is kind
        assert isinstance(error, DotenvError)

    def test_invalid_encoding(self) -> None:
        """The encoding error names the encoding."""
        error = InvalidEncodingError("Windowss-1252")
        assert error.kind is ErrorKind.INVALID_ENCODING
        assert error.encoding == "Windowss-1252"
        assert str(error) == "Illegal character encoding [Windowss-1252] specified."

    def test_catch_by_base(self) -> None:
        """Callers can catch every failure as DotenvError."""
        with pytest.raises(DotenvError):
            raise ParseError("bad")


class TestErrorFormatting:
    """Verify the location prefix on messages."""

    def test_reason_only(self) -> None:
        """Without context the message is just the reason."""
        assert str(ParseError("bad")) == "bad"

    def test_path_and_line(self) -> None:
        """Path and line render as ``path:line: reason``."""
        error = ParseError("bad", path="/srv/.env", line=_LINE)
        assert str(error) == "/srv/.env:7: bad"
        assert error.reason == "bad"
        assert error.line == _LINE

    def test_path_only(self) -> None:
        """A path without a line renders as ``path: reason``."""
        assert str(ReadFailureError("gone", path="/srv/.env")) == "/srv/.env: gone"

    def test_line_only(self) -> None:
        """A line without a path renders as ``line N: reason``."""
        assert str(ParseError("bad", line=_LINE)) == "line 7: bad"

    def test_name_is_kept(self) -> None:
        """The variable name is available but not part of the message."""
        error = ValidationError("X is missing", name="X")
        assert error.name == "X"
        assert str(error) == "X is missing"
