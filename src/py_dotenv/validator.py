"""Validator — required and typed checks on loaded variables.

After loading, an application usually needs certain variables to exist
and to look a certain way.  The validator runs those checks over a set
of names and reports *every* failing name at once::

    Validator(os.environ.get, ["DB_HOST", "DB_PORT"]).required().is_integer()

Each check returns the validator so checks can be chained.  With
``only_present=True`` a check skips names that are not set at all,
which suits optional variables that must be well-formed when given.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from py_dotenv.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from py_dotenv.interpolation import Lookup

_INTEGER_RE = re.compile(r"[+-]?\d+")
_BOOLEAN_VALUES = frozenset({"true", "false", "on", "off", "yes", "no", "1", "0"})


class Validator:
    """Run assertions over a fixed list of variable names."""

    def __init__(self, lookup: Lookup, names: Iterable[str], *, only_present: bool = False) -> None:
        """Create a validator.

        Args:
            lookup: Returns the current value of a name, or None.
            names: Variables to check.
            only_present: Skip names that are not set.

        """
        self._lookup = lookup
        self._names = list(names)
        self._only_present = only_present

    @property
    def names(self) -> list[str]:
        """Return the names this validator checks."""
        return list(self._names)

    def required(self) -> Validator:
        """Assert every name is set."""
        missing = [name for name in self._names if self._lookup(name) is None]
        if missing:
            self._fail(missing, "is missing")
        return self

    def not_empty(self) -> Validator:
        """Assert every value contains something besides whitespace."""
        return self.assert_that(lambda v: bool(v.strip()), "is empty")

    def is_integer(self) -> Validator:
        """Assert every value is an integer."""
        return self.assert_that(
            lambda v: _INTEGER_RE.fullmatch(v.strip()) is not None,
            "is not an integer",
        )

    def is_boolean(self) -> Validator:
        """Assert every value is a recognised boolean word."""
        return self.assert_that(lambda v: v.strip().lower() in _BOOLEAN_VALUES, "is not a boolean")

    def allowed_values(self, *choices: str) -> Validator:
        """Assert every value is one of *choices*."""
        allowed = ", ".join(choices)
        return self.assert_that(lambda v: v in choices, f"is not one of [{allowed}]")

    def allowed_regex(self, pattern: str) -> Validator:
        """Assert every value fully matches *pattern*."""
        compiled = re.compile(pattern)
        return self.assert_that(
            lambda v: compiled.fullmatch(v) is not None,
            f"does not match the pattern [{pattern}]",
        )

    def assert_that(self, predicate: Callable[[str], bool], description: str) -> Validator:
        """Assert *predicate* holds for every value.

        An unset name fails unless the validator only checks present
        names.

        Raises:
            ValidationError: Listing every name that failed.

        """
        failing: list[str] = []
        for name in self._names:
            value = self._lookup(name)
            if value is None:
                if not self._only_present:
                    failing.append(name)
                continue
            if not predicate(value):
                failing.append(name)
        if failing:
            self._fail(failing, description)
        return self

    @staticmethod
    def _fail(names: list[str], description: str) -> None:
        problems = ", ".join(f"{name} {description}" for name in names)
        msg = f"One or more environment variables failed assertions: {problems}."
        raise ValidationError(msg, name=names[0])
