"""Resolved environment — the result of loading env files.

A load produces a mapping from variable name to its final value.  Each
value is a string, or ``None`` when a file declared the name without an
``=`` (declared but unset).

Key design properties:
    - **Last writer wins** — later files and later lines overwrite.
    - **Insertion order** — names keep the position of their first write.
    - **Read-only to callers** — the loader builds it; applying it to
      the live process environment is the job of ``Repository``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class ResolvedEnvironment(Mapping[str, str | None]):
    """An ordered name → value mapping produced by a load.

    Each instance is an independent copy — merging into one does not
    affect any other.
    """

    def __init__(self, initial: Mapping[str, str | None] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str | None] = dict(initial) if initial else {}

    def __getitem__(self, key: str) -> str | None:
        """Return the value for *key*; raise KeyError if never set."""
        return self._vars[key]

    def __iter__(self) -> Iterator[str]:
        """Iterate names in insertion order."""
        return iter(self._vars)

    def __len__(self) -> int:
        """Return the number of variables."""
        return len(self._vars)

    def __repr__(self) -> str:
        """Show the names only; values may be secrets."""
        return f"ResolvedEnvironment({list(self._vars)!r})"

    def lookup(self, key: str) -> str | None:
        """Return the value for *key*, or None if absent or unset."""
        return self._vars.get(key)

    def merge(self, values: Mapping[str, str | None]) -> None:
        """Write every pair from *values*, overwriting existing names."""
        self._vars.update(values)

    def copy(self) -> ResolvedEnvironment:
        """Return an independent copy of this environment."""
        return ResolvedEnvironment(initial=self._vars)

    def to_dict(self) -> dict[str, str | None]:
        """Return a plain dict copy."""
        return dict(self._vars)
