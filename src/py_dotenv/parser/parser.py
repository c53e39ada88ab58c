r"""Parser — reduce lexer tokens to entries.

The lexer has already split the text into keys, raw value spans and
comments.  The parser:

1. Checks the token sequence has the shape ``KEY [ASSIGN VALUE] END``.
2. Decodes escape sequences in double-quoted values
   (``\n \r \t \\ \" \$``).  Unknown escapes are kept as written.
3. Leaves single-quoted values verbatim apart from ``\'``, and unquoted
   values verbatim apart from ``\#``.
4. Splits unquoted and double-quoted values into literal text and
   ``${NAME}`` / ``${NAME:-default}`` references for the interpolator.
   A ``\$`` becomes plain text, so it never starts a reference.

``format_entries`` is the inverse: it writes entries back out using
their raw values, so ``parse(format_entries(parse(text)))`` reproduces
the same entries.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from py_dotenv.errors import ParseError
from py_dotenv.parser.entry import Entry, ParsedFile, QuoteKind, Reference, Text
from py_dotenv.parser.lexer import Token, TokenType, tokenize

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from py_dotenv.parser.entry import ValuePart

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")

_DOUBLE_QUOTE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "$": "$",
}

_DEFAULT_SEPARATOR = ":-"


class Parser:
    """Turn a token list into entries for one file."""

    def __init__(self, tokens: Sequence[Token], *, path: str | None = None) -> None:
        """Prepare to parse *tokens*; *path* is used in error messages."""
        self._tokens = [t for t in tokens if t.type is not TokenType.COMMENT]
        self._path = path
        self._index = 0

    def parse(self) -> list[Entry]:
        """Return every entry in token order.

        Raises:
            ParseError: If the token sequence is malformed.

        """
        entries: list[Entry] = []
        while self._index < len(self._tokens):
            entries.append(self._parse_entry())
        return entries

    def _next(self, expected: TokenType, *, line: int) -> Token:
        if self._index >= len(self._tokens):
            msg = f"unexpected end of input, expected {expected}"
            raise ParseError(msg, path=self._path, line=line)
        token = self._tokens[self._index]
        if token.type is not expected:
            msg = f"unexpected {token.type}, expected {expected}"
            raise ParseError(msg, path=self._path, line=token.line)
        self._index += 1
        return token

    def _parse_entry(self) -> Entry:
        key = self._next(TokenType.KEY, line=self._tokens[self._index].line)
        if not key.text:
            raise ParseError("missing key name", path=self._path, line=key.line)

        following = self._tokens[self._index] if self._index < len(self._tokens) else None
        if following is None or following.type is not TokenType.ASSIGN:
            self._next(TokenType.END, line=key.line)
            return Entry(name=key.text, value=None, line=key.line)

        self._index += 1
        value = self._next(TokenType.VALUE, line=key.line)
        self._next(TokenType.END, line=value.line)
        parts = decode_value(value.text, value.quote)
        return Entry(
            name=key.text,
            value=render_parts(parts),
            raw_value=value.text,
            quote=value.quote,
            line=key.line,
            parts=parts,
        )


def decode_value(raw: str, quote: QuoteKind) -> tuple[ValuePart, ...]:
    """Decode a raw value span into literal and reference parts."""
    if quote is QuoteKind.SINGLE:
        return (Text(raw.replace("\\'", "'")),)
    return tuple(_scan(raw, quote))


def render_parts(parts: Iterable[ValuePart]) -> str:
    """Join parts back to text, writing references as they were written."""
    return "".join(p.text if isinstance(p, Text) else p.source for p in parts)


def _scan(raw: str, quote: QuoteKind) -> list[ValuePart]:
    parts: list[ValuePart] = []
    buffer: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        nxt = raw[i + 1] if i + 1 < len(raw) else ""
        if ch == "\\" and nxt:
            if quote is QuoteKind.DOUBLE:
                buffer.append(_DOUBLE_QUOTE_ESCAPES.get(nxt, ch + nxt))
                i += 2
                continue
            if nxt == "#":
                buffer.append("#")
                i += 2
                continue
        if ch == "$" and nxt == "{":
            end = _closing_brace(raw, i + 2, quote)
            reference = _reference(raw, i, end, quote) if end != -1 else None
            if reference is not None:
                if buffer:
                    parts.append(Text("".join(buffer)))
                    buffer = []
                parts.append(reference)
                i = end + 1
                continue
        buffer.append(ch)
        i += 1
    if buffer or not parts:
        parts.append(Text("".join(buffer)))
    return parts


def _closing_brace(raw: str, start: int, quote: QuoteKind) -> int:
    """Return the index of the ``}`` closing a reference, or -1."""
    depth = 0
    i = start
    while i < len(raw):
        if raw[i] == "\\" and quote is QuoteKind.DOUBLE:
            i += 2
            continue
        if raw.startswith("${", i):
            depth += 1
            i += 2
            continue
        if raw[i] == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return -1


def _reference(raw: str, start: int, end: int, quote: QuoteKind) -> Reference | None:
    """Build a reference from ``raw[start:end + 1]``, or None if invalid."""
    body = raw[start + 2 : end]
    name, separator, default = body.partition(_DEFAULT_SEPARATOR)
    if not _NAME_RE.fullmatch(name):
        return None
    default_parts = tuple(_scan(default, quote)) if separator else None
    return Reference(name=name, default=default_parts, source=raw[start : end + 1])


def parse(text: str, *, path: str = "") -> ParsedFile:
    """Lex and parse *text* into a ``ParsedFile``.

    Raises:
        ParseError: On malformed syntax, with the path and line number.

    """
    error_path = path or None
    entries = Parser(tokenize(text, path=error_path), path=error_path).parse()
    return ParsedFile(path=path, entries=tuple(entries))


def format_entry(entry: Entry) -> str:
    """Write *entry* back as a single env-file assignment."""
    if entry.value is None:
        return entry.name
    if entry.quote is QuoteKind.SINGLE:
        return f"{entry.name}='{entry.raw_value}'"
    if entry.quote is QuoteKind.DOUBLE:
        return f'{entry.name}="{entry.raw_value}"'
    return f"{entry.name}={entry.raw_value}"


def format_entries(entries: Iterable[Entry]) -> str:
    """Write *entries* back out, one per line, with a trailing newline."""
    lines = [format_entry(e) for e in entries]
    return "\n".join(lines) + "\n" if lines else ""
