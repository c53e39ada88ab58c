"""Variable interpolation — expand ``${NAME}`` references in values.

After parsing, a value such as ``URL="http://${HOST}:${PORT:-80}/"`` is a
list of literal text and references.  The interpolator replaces each
reference with a value, looked up in this order:

1. The latest entry for ``NAME`` defined *earlier in the same file*.
2. The external lookup: values from previously loaded files, then the
   ambient process environment.

``${NAME:-default}`` uses *default* (itself interpolated) when ``NAME``
is empty or absent.  A plain ``${NAME}`` that resolves nowhere expands
to the empty string, like an unset shell variable.

Single-quoted values are never interpolated.

Cycles are errors.  A reference to a name with no earlier definition
but a definition at the same or a later line is a *forward* reference:
it takes its value from the external lookup, but it is followed when
checking for cycles.  So ``A=${B}`` / ``B=${A}`` and ``A=${A}`` both
raise ``InterpolationError`` instead of silently expanding to "".

A default does not break the cycle: a first definition such as
``PORT=${PORT:-8080}`` refers to itself and raises, whatever the
environment holds.  Write ``PORT=8080`` and let an existing process
variable win at apply time, or reference a differently named variable
(``PORT=${APP_PORT:-8080}``).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import TYPE_CHECKING

from py_dotenv.errors import InterpolationError
from py_dotenv.parser.entry import Reference, Text

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from py_dotenv.parser.entry import Entry, ValuePart

Lookup = Callable[[str], str | None]


def no_lookup(_name: str) -> str | None:
    """Resolve nothing; use when interpolation must ignore the environment."""
    return None


class Interpolator:
    """Resolve the references in one file's entries."""

    def __init__(
        self,
        entries: Sequence[Entry],
        external_lookup: Lookup = no_lookup,
        *,
        path: str | None = None,
    ) -> None:
        """Prepare to interpolate *entries*.

        Args:
            entries: Parsed entries of a single file, in file order.
            external_lookup: Fallback for names not defined earlier in
                the file.
            path: File path for error messages.

        """
        self._entries = list(entries)
        self._external = external_lookup
        self._path = path
        self._resolved: dict[str, str | None] = {}

    def resolve(self) -> list[Entry]:
        """Return new entries with every reference expanded.

        Raises:
            InterpolationError: If references form a cycle.

        """
        self._check_cycles()
        self._resolved = {}
        result: list[Entry] = []
        for entry in self._entries:
            value = self._render(entry.parts) if entry.interpolates else entry.value
            self._resolved[entry.name] = value
            result.append(dataclasses.replace(entry, value=value))
        return result

    # -- lookup ----------------------------------------------------------------

    def _lookup(self, name: str) -> str | None:
        earlier = self._resolved.get(name)
        if earlier is not None:
            return earlier
        return self._external(name)

    def _render(self, parts: Iterable[ValuePart]) -> str:
        pieces: list[str] = []
        for part in parts:
            if isinstance(part, Text):
                pieces.append(part.text)
                continue
            pieces.append(self._expand(part))
        return "".join(pieces)

    def _expand(self, reference: Reference) -> str:
        value = self._lookup(reference.name)
        if reference.default is not None and not value:
            return self._render(reference.default)
        return value or ""

    # -- cycle detection -------------------------------------------------------

    def _links(self) -> dict[int, list[int]]:
        """Map each entry index to the entry indexes its references reach."""
        links: dict[int, list[int]] = {}
        for index, entry in enumerate(self._entries):
            if not entry.interpolates:
                continue
            targets: list[int] = []
            for name in entry.references:
                target = self._definition_for(name, index)
                if target is not None:
                    targets.append(target)
            links[index] = targets
        return links

    def _definition_for(self, name: str, index: int) -> int | None:
        """Return the entry a reference at *index* to *name* depends on."""
        for earlier in range(index - 1, -1, -1):
            if self._entries[earlier].name == name:
                return earlier
        for later in range(index, len(self._entries)):
            if self._entries[later].name == name:
                return later
        return None

    def _check_cycles(self) -> None:
        links = self._links()
        done: set[int] = set()
        for start in links:
            if start not in done:
                self._walk(start, links, [], done)

    def _walk(
        self,
        index: int,
        links: dict[int, list[int]],
        chain: list[int],
        done: set[int],
    ) -> None:
        """Depth-first search that raises on the first cycle it meets."""
        if index in chain:
            cycle = [*chain[chain.index(index) :], index]
            names = " -> ".join(self._entries[i].name for i in cycle)
            first = self._entries[cycle[0]]
            msg = f"cyclic variable reference: {names}"
            raise InterpolationError(msg, path=self._path, line=first.line, name=first.name)
        if index in done:
            return
        chain.append(index)
        for target in links.get(index, []):
            self._walk(target, links, chain, done)
        chain.pop()
        done.add(index)


def interpolate(
    entries: Sequence[Entry],
    external_lookup: Lookup = no_lookup,
    *,
    path: str | None = None,
) -> list[Entry]:
    """Expand references in *entries*; see ``Interpolator``."""
    return Interpolator(entries, external_lookup, path=path).resolve()
