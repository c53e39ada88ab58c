r"""Lexer — turn env-file text into a flat list of tokens.

The lexer is a small state machine that walks the text one character at
a time.  Each state handles one piece of the grammar and returns the
next state:

    LINE_START ──► READ_KEY ──► SKIP_WHITESPACE ──► EXPECT_EQUALS
        ▲  │                                            │
        │  └──► READ_COMMENT                            ├──► READ_UNQUOTED_VALUE
        │                                               ├──► READ_SINGLE_QUOTED
        └───────────────────────────────────────────────└──► READ_DOUBLE_QUOTED

Tokens carry *raw* text: quotes are removed, but escape sequences are
left untouched for the parser to decode.  For example::

    export GREETING="hi\nthere"  # comment

lexes to ``KEY(GREETING) ASSIGN VALUE(double, 'hi\\nthere') END COMMENT``.

Double-quoted values may span several physical lines.  Both ``\n`` and
``\r\n`` line endings are accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from py_dotenv.errors import ParseError
from py_dotenv.parser.entry import QuoteKind

if TYPE_CHECKING:
    from collections.abc import Callable

_EXPORT = "export"
_INLINE_WHITESPACE = frozenset(" \t")
_KEY_START = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_")
_KEY_CHARS = _KEY_START | frozenset("0123456789.")


class TokenType(StrEnum):
    """Kinds of token the lexer emits."""

    KEY = "key"
    ASSIGN = "assign"
    VALUE = "value"
    COMMENT = "comment"
    END = "end"


class LexState(StrEnum):
    """States of the lexer's state machine."""

    LINE_START = "line_start"
    SKIP_WHITESPACE = "skip_whitespace"
    READ_KEY = "read_key"
    EXPECT_EQUALS = "expect_equals"
    READ_UNQUOTED_VALUE = "read_unquoted_value"
    READ_SINGLE_QUOTED = "read_single_quoted"
    READ_DOUBLE_QUOTED = "read_double_quoted"
    READ_COMMENT = "read_comment"
    DONE = "done"


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type: What kind of token this is.
        text: Key name, raw value span, or comment text.
        line: 1-based line on which the token starts.
        quote: Quoting style, meaningful for VALUE tokens only.

    """

    type: TokenType
    text: str = ""
    line: int = 0
    quote: QuoteKind = QuoteKind.NONE


class Lexer:
    """Tokenize one file's text.

    A lexer instance holds the scan position for a single text, so
    create a new one per file::

        tokens = Lexer(text, path=".env").tokenize()

    """

    def __init__(self, text: str, *, path: str | None = None) -> None:
        """Prepare to scan *text*; *path* is used in error messages."""
        self._text = text.replace("\r\n", "\n")
        self._path = path
        self._pos = 0
        self._line = 1
        self._resume = LexState.LINE_START
        self._tokens: list[Token] = []
        self._handlers: dict[LexState, Callable[[], LexState]] = {
            LexState.LINE_START: self._line_start,
            LexState.SKIP_WHITESPACE: self._skip_whitespace,
            LexState.READ_KEY: self._read_key,
            LexState.EXPECT_EQUALS: self._expect_equals,
            LexState.READ_UNQUOTED_VALUE: self._read_unquoted,
            LexState.READ_SINGLE_QUOTED: self._read_single_quoted,
            LexState.READ_DOUBLE_QUOTED: self._read_double_quoted,
            LexState.READ_COMMENT: self._read_comment,
        }

    def tokenize(self) -> list[Token]:
        """Run the state machine to completion and return every token.

        Raises:
            ParseError: On a malformed key or an unterminated quote.

        """
        state = LexState.LINE_START
        while state is not LexState.DONE:
            state = self._handlers[state]()
        return list(self._tokens)

    # -- helpers -------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        """Return the character *offset* ahead, or "" at end of input."""
        index = self._pos + offset
        return self._text[index] if index < len(self._text) else ""

    def _at_line_end(self) -> bool:
        return self._peek() in ("", "\n")

    def _skip_inline_whitespace(self) -> None:
        while self._peek() in _INLINE_WHITESPACE:
            self._pos += 1

    def _emit(
        self,
        kind: TokenType,
        text: str = "",
        *,
        line: int | None = None,
        quote: QuoteKind = QuoteKind.NONE,
    ) -> None:
        self._tokens.append(Token(kind, text, self._line if line is None else line, quote))

    def _error(self, reason: str, *, line: int | None = None) -> ParseError:
        return ParseError(reason, path=self._path, line=self._line if line is None else line)

    def _has_export_prefix(self) -> bool:
        """Return True if ``export`` here is a prefix rather than a key."""
        if not self._text.startswith(_EXPORT, self._pos):
            return False
        offset = len(_EXPORT)
        if self._peek(offset) not in _INLINE_WHITESPACE:
            return False
        while self._peek(offset) in _INLINE_WHITESPACE:
            offset += 1
        return self._peek(offset) in _KEY_START

    # -- states --------------------------------------------------------------

    def _line_start(self) -> LexState:
        self._skip_inline_whitespace()
        ch = self._peek()
        if not ch:
            return LexState.DONE
        if ch == "\n":
            self._pos += 1
            self._line += 1
            return LexState.LINE_START
        if ch == "#":
            return LexState.READ_COMMENT
        if self._has_export_prefix():
            self._pos += len(_EXPORT)
            self._skip_inline_whitespace()
        return LexState.READ_KEY

    def _skip_whitespace(self) -> LexState:
        self._skip_inline_whitespace()
        return self._resume

    def _read_key(self) -> LexState:
        ch = self._peek()
        if ch == "=":
            raise self._error("missing key name")
        if ch not in _KEY_START:
            raise self._error("invalid character in key name")
        start = self._pos
        while self._peek() in _KEY_CHARS:
            self._pos += 1
        self._emit(TokenType.KEY, self._text[start : self._pos])
        self._resume = LexState.EXPECT_EQUALS
        return LexState.SKIP_WHITESPACE

    def _expect_equals(self) -> LexState:
        ch = self._peek()
        if ch in ("", "\n"):
            self._emit(TokenType.END)
            return LexState.LINE_START
        if ch == "#":
            self._emit(TokenType.END)
            return LexState.READ_COMMENT
        if ch != "=":
            raise self._error("invalid character in key name")
        self._pos += 1
        self._emit(TokenType.ASSIGN)
        self._skip_inline_whitespace()
        if self._peek() == '"':
            return LexState.READ_DOUBLE_QUOTED
        if self._peek() == "'":
            return LexState.READ_SINGLE_QUOTED
        return LexState.READ_UNQUOTED_VALUE

    def _read_unquoted(self) -> LexState:
        start = self._pos
        while not self._at_line_end():
            ch = self._peek()
            if ch == "\\" and self._peek(1) == "#":
                self._pos += 2
                continue
            if ch == "#":
                break
            self._pos += 1
        self._emit(TokenType.VALUE, self._text[start : self._pos].rstrip(" \t"))
        self._emit(TokenType.END)
        return LexState.READ_COMMENT if self._peek() == "#" else LexState.LINE_START

    def _read_quoted(self, quote_char: str, kind: QuoteKind) -> LexState:
        start_line = self._line
        self._pos += 1
        start = self._pos
        while True:
            ch = self._peek()
            if not ch:
                raise self._error("missing closing quote", line=start_line)
            escaped = kind is QuoteKind.DOUBLE or self._peek(1) == quote_char
            if ch == "\\" and escaped and self._peek(1):
                if self._peek(1) == "\n":
                    self._line += 1
                self._pos += 2
                continue
            if ch == quote_char:
                break
            if ch == "\n":
                self._line += 1
            self._pos += 1
        self._emit(TokenType.VALUE, self._text[start : self._pos], line=start_line, quote=kind)
        self._pos += 1
        return self._after_closing_quote()

    def _after_closing_quote(self) -> LexState:
        self._skip_inline_whitespace()
        if self._at_line_end():
            self._emit(TokenType.END)
            return LexState.LINE_START
        if self._peek() == "#":
            self._emit(TokenType.END)
            return LexState.READ_COMMENT
        raise self._error("unexpected character after closing quote")

    def _read_single_quoted(self) -> LexState:
        return self._read_quoted("'", QuoteKind.SINGLE)

    def _read_double_quoted(self) -> LexState:
        return self._read_quoted('"', QuoteKind.DOUBLE)

    def _read_comment(self) -> LexState:
        self._pos += 1
        start = self._pos
        while not self._at_line_end():
            self._pos += 1
        self._emit(TokenType.COMMENT, self._text[start : self._pos].strip())
        return LexState.LINE_START


def tokenize(text: str, *, path: str | None = None) -> list[Token]:
    """Tokenize *text* with a fresh ``Lexer``."""
    return Lexer(text, path=path).tokenize()
