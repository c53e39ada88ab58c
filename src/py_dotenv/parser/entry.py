"""Parsed entries — the structured form of one env file.

A line such as ``GREETING="hello ${NAME}"`` becomes an ``Entry``:

- ``name`` — ``GREETING``
- ``raw_value`` — the span between the quotes, exactly as written
- ``value`` — the escape-decoded text (references still unexpanded)
- ``quote`` — which quoting style the value used
- ``parts`` — the value split into literal text and ``${...}`` references,
  ready for the interpolator

A line with just a name (no ``=``) yields ``value=None``: the variable
is declared but unset.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class QuoteKind(StrEnum):
    """How an entry's value was quoted in the source file."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class Text:
    """A run of plain text inside a value."""

    text: str


@dataclass(frozen=True)
class Reference:
    """A ``${NAME}`` or ``${NAME:-default}`` reference inside a value.

    Attributes:
        name: The referenced variable name.
        default: Parts to use when the variable is empty or absent,
            or None when no ``:-`` fallback was written.
        source: The reference exactly as written, braces included.

    """

    name: str
    default: tuple[ValuePart, ...] | None
    source: str

    def names(self) -> list[str]:
        """Return this reference's name plus every name in its default."""
        found = [self.name]
        for part in self.default or ():
            if isinstance(part, Reference):
                found.extend(part.names())
        return found


ValuePart = Text | Reference


@dataclass(frozen=True)
class Entry:
    """One name/value pair (or declared-but-unset name) from a file.

    Attributes:
        name: Variable name, ``export`` prefix already stripped.
        value: Decoded value, or None for a bare name.
        raw_value: Value text as written, without surrounding quotes.
        quote: Quoting style of the value.
        line: 1-based line on which the entry starts.
        parts: Value split into literals and references.

    """

    name: str
    value: str | None
    raw_value: str = ""
    quote: QuoteKind = QuoteKind.NONE
    line: int = 0
    parts: tuple[ValuePart, ...] = ()

    @property
    def references(self) -> list[str]:
        """Return every variable name this entry's value refers to."""
        found: list[str] = []
        for part in self.parts:
            if isinstance(part, Reference):
                found.extend(part.names())
        return found

    @property
    def interpolates(self) -> bool:
        """Return True if the value must go through the interpolator."""
        if self.value is None or self.quote is QuoteKind.SINGLE:
            return False
        return bool(self.references)


@dataclass(frozen=True)
class ParsedFile:
    """All entries from one file, in file order."""

    path: str
    entries: tuple[Entry, ...] = ()

    def names(self) -> list[str]:
        """Return entry names in file order (duplicates included)."""
        return [e.name for e in self.entries]
