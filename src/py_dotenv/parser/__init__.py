"""Parser subsystem — lexer, parser, and entry types.

Re-exports public symbols so callers can write::

    from py_dotenv.parser import parse, Entry
"""

from py_dotenv.parser.entry import Entry, ParsedFile, QuoteKind, Reference, Text, ValuePart
from py_dotenv.parser.lexer import Lexer, LexState, Token, TokenType, tokenize
from py_dotenv.parser.parser import (
    Parser,
    decode_value,
    format_entries,
    format_entry,
    parse,
    render_parts,
)

__all__ = [
    "Entry",
    "LexState",
    "Lexer",
    "ParsedFile",
    "Parser",
    "QuoteKind",
    "Reference",
    "Text",
    "Token",
    "TokenType",
    "ValuePart",
    "decode_value",
    "format_entries",
    "format_entry",
    "parse",
    "render_parts",
    "tokenize",
]
