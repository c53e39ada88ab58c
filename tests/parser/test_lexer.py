r"""Tests for the env-file lexer.

The lexer is a state machine that chops text into tokens: keys, ``=``
signs, raw value spans, comments, and end-of-entry markers.  It does
not decode escapes (that's the parser's job), but it does decide where
each value starts and stops — which is the hard part once quotes,
comments, and multi-line values get involved.
"""

import pytest

from py_dotenv.errors import ErrorKind, ParseError
from py_dotenv.parser.entry import QuoteKind
from py_dotenv.parser.lexer import Lexer, LexState, Token, TokenType, tokenize

_THIRD_LINE = 3


def _kinds(tokens: list[Token]) -> list[TokenType]:
    """Return just the token types."""
    return [t.type for t in tokens]


def _values(text: str) -> list[str]:
    """Return the raw text of every VALUE token in *text*."""
    return [t.text for t in tokenize(text) if t.type is TokenType.VALUE]


class TestStates:
    """Verify the state enum covers the whole grammar."""

    def test_state_members(self) -> None:
        """The machine has a state for every piece of syntax plus DONE."""
        assert {s.name for s in LexState} == {
            "LINE_START",
            "SKIP_WHITESPACE",
            "READ_KEY",
            "EXPECT_EQUALS",
            "READ_UNQUOTED_VALUE",
            "READ_SINGLE_QUOTED",
            "READ_DOUBLE_QUOTED",
            "READ_COMMENT",
            "DONE",
        }


class TestBasicAssignments:
    """Verify simple KEY=VALUE lines."""

    def test_single_assignment(self) -> None:
        """A plain assignment yields KEY, ASSIGN, VALUE, END."""
        tokens = tokenize("FOO=bar\n")
        assert _kinds(tokens) == [TokenType.KEY, TokenType.ASSIGN, TokenType.VALUE, TokenType.END]
        assert tokens[0].text == "FOO"
        assert tokens[2].text == "bar"
        assert tokens[2].quote is QuoteKind.NONE

    def test_empty_input(self) -> None:
        """Empty text produces no tokens."""
        assert tokenize("") == []

    def test_blank_lines_are_skipped(self) -> None:
        """Blank and whitespace-only lines produce nothing."""
        assert tokenize("\n   \n\t\n") == []

    def test_missing_trailing_newline(self) -> None:
        """The last line does not need a newline."""
        assert _values("A=1\nB=2") == ["1", "2"]

    def test_whitespace_around_equals(self) -> None:
        """Spaces around ``=`` are ignored."""
        tokens = tokenize("FOO = bar")
        assert tokens[0].text == "FOO"
        assert tokens[2].text == "bar"

    def test_empty_value(self) -> None:
        """``NULL=`` yields an empty VALUE token."""
        assert _values("NULL=\n") == [""]

    def test_bare_key(self) -> None:
        """A key without ``=`` yields KEY then END."""
        assert _kinds(tokenize("FOO\n")) == [TokenType.KEY, TokenType.END]

    def test_key_with_dots_and_digits(self) -> None:
        """Keys may contain digits and dots after the first character."""
        assert tokenize("app.db_2=x")[0].text == "app.db_2"

    def test_crlf_line_endings(self) -> None:
        """Windows line endings are accepted."""
        assert _values("A=1\r\nB=2\r\n") == ["1", "2"]

    def test_line_numbers(self) -> None:
        """Each token records the line it starts on."""
        tokens = tokenize("\n\nFOO=bar")
        assert tokens[0].line == _THIRD_LINE


class TestExport:
    """Verify the optional ``export`` prefix."""

    def test_export_prefix_is_stripped(self) -> None:
        """``export FOO=bar`` lexes like ``FOO=bar``."""
        assert tokenize("export FOO=bar") == tokenize("FOO=bar")

    def test_export_with_tabs(self) -> None:
        """Tabs may separate ``export`` from the key."""
        assert tokenize("export\tFOO=bar")[0].text == "FOO"

    def test_key_named_export(self) -> None:
        """``export=1`` assigns a variable called export."""
        assert tokenize("export=1")[0].text == "export"

    def test_key_starting_with_export(self) -> None:
        """A key that merely starts with "export" is kept whole."""
        assert tokenize("exported=1")[0].text == "exported"


class TestComments:
    """Verify full-line and inline comments."""

    def test_comment_line(self) -> None:
        """A ``#`` line produces only a COMMENT token."""
        tokens = tokenize("# hello\n")
        assert _kinds(tokens) == [TokenType.COMMENT]
        assert tokens[0].text == "hello"

    def test_indented_comment(self) -> None:
        """Leading whitespace before ``#`` still makes a comment."""
        assert _kinds(tokenize("   # hi")) == [TokenType.COMMENT]

    def test_inline_comment_after_unquoted(self) -> None:
        """An unquoted value stops at ``#`` and trailing spaces are trimmed."""
        tokens = tokenize("FOO=bar   # note")
        assert tokens[2].text == "bar"
        assert tokens[-1].type is TokenType.COMMENT
        assert tokens[-1].text == "note"

    def test_escaped_hash_is_not_a_comment(self) -> None:
        r"""``\#`` stays part of an unquoted value."""
        assert _values(r"FOO=a\#b") == [r"a\#b"]

    def test_hash_inside_quotes(self) -> None:
        """A ``#`` inside quotes is part of the value."""
        assert _values('FOO="a # b"') == ["a # b"]

    def test_comment_after_quoted_value(self) -> None:
        """A comment may follow a closing quote."""
        tokens = tokenize('FOO="bar" # note')
        assert tokens[2].text == "bar"
        assert tokens[-1].text == "note"

    def test_comment_after_bare_key(self) -> None:
        """A comment may follow a key with no ``=``."""
        assert _kinds(tokenize("FOO # note")) == [TokenType.KEY, TokenType.END, TokenType.COMMENT]


class TestQuotedValues:
    """Verify single- and double-quoted values."""

    def test_double_quoted(self) -> None:
        """Double quotes are removed and the kind recorded."""
        tokens = tokenize('SPACED="with spaces"')
        assert tokens[2].text == "with spaces"
        assert tokens[2].quote is QuoteKind.DOUBLE

    def test_single_quoted(self) -> None:
        """Single quotes are removed and the kind recorded."""
        tokens = tokenize("A='x y'")
        assert tokens[2].text == "x y"
        assert tokens[2].quote is QuoteKind.SINGLE

    def test_escaped_double_quote_does_not_close(self) -> None:
        r"""``\"`` inside double quotes is kept raw for the parser."""
        assert _values(r'A="say \"hi\""') == [r"say \"hi\""]

    def test_escaped_single_quote_does_not_close(self) -> None:
        r"""``\'`` inside single quotes is kept raw for the parser."""
        assert _values(r"A='it\'s'") == [r"it\'s"]

    def test_multiline_double_quoted(self) -> None:
        """A double-quoted value may span physical lines."""
        tokens = tokenize('A="line one\nline two"\nB=2')
        assert tokens[2].text == "line one\nline two"
        assert tokens[2].line == 1
        key_b = next(t for t in tokens if t.type is TokenType.KEY and t.text == "B")
        assert key_b.line == _THIRD_LINE

    def test_empty_quoted_value(self) -> None:
        """``A=""`` yields an empty double-quoted value."""
        tokens = tokenize('A=""')
        assert tokens[2].text == ""
        assert tokens[2].quote is QuoteKind.DOUBLE


class TestSyntaxErrors:
    """Verify malformed input raises ParseError with a line number."""

    def test_unterminated_double_quote(self) -> None:
        """A missing closing quote is reported at the opening line."""
        with pytest.raises(ParseError, match="missing closing quote") as info:
            tokenize('OK=1\nA="never closed\nmore')
        assert info.value.line == 2  # noqa: PLR2004
        assert info.value.kind is ErrorKind.PARSE_ERROR

    def test_unterminated_single_quote(self) -> None:
        """Single quotes must be closed too."""
        with pytest.raises(ParseError, match="missing closing quote"):
            tokenize("A='open")

    def test_key_starting_with_digit(self) -> None:
        """Keys cannot start with a digit."""
        with pytest.raises(ParseError, match="invalid character in key name"):
            tokenize("1FOO=bar")

    def test_invalid_character_in_key(self) -> None:
        """A dash is not allowed in a key."""
        with pytest.raises(ParseError, match="invalid character in key name"):
            tokenize("FOO-BAR=x")

    def test_space_inside_key(self) -> None:
        """Two words before ``=`` are not a valid key."""
        with pytest.raises(ParseError, match="invalid character in key name"):
            tokenize("FOO BAR=x")

    def test_missing_key(self) -> None:
        """A line starting with ``=`` has no key."""
        with pytest.raises(ParseError, match="missing key name"):
            tokenize("=value")

    def test_text_after_closing_quote(self) -> None:
        """Only whitespace or a comment may follow a closing quote."""
        with pytest.raises(ParseError, match="unexpected character after closing quote"):
            tokenize('A="x"y')

    def test_error_includes_path(self) -> None:
        """The path given to the lexer appears in the error."""
        with pytest.raises(ParseError) as info:
            Lexer("=x", path="/srv/.env").tokenize()
        assert info.value.path == "/srv/.env"
        assert str(info.value).startswith("/srv/.env:1:")


class TestRestartable:
    """Verify lexers share no state."""

    def test_independent_instances(self) -> None:
        """Two lexers over different text do not interfere."""
        first = Lexer("A=1")
        second = Lexer("B=2")
        assert first.tokenize()[0].text == "A"
        assert second.tokenize()[0].text == "B"
