"""Dotenv — the one-stop entry point for applications.

Most applications want three things at start-up: find the ``.env``
file, load it into ``os.environ`` without clobbering real environment
variables, and fail early if something essential is missing::

    dotenv = Dotenv.create("/srv/app")
    dotenv.load()
    dotenv.required("DATABASE_URL").not_empty()

``Dotenv`` wires a ``Store`` (what to read) to a ``Repository`` (where
to write).  ``load()`` insists that at least one candidate file exists;
``safe_load()`` treats a missing file as "nothing to load".

``parse()`` handles the file-less case: it resolves a string of env
syntax straight to values, which is handy for tests and for env text
that arrives from somewhere other than disk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_dotenv.env import ResolvedEnvironment
from py_dotenv.errors import InvalidPathError
from py_dotenv.interpolation import interpolate, no_lookup
from py_dotenv.logging import LogLevel, log_to
from py_dotenv.parser.parser import parse as parse_entries
from py_dotenv.repository import Repository
from py_dotenv.store.encoding import DEFAULT_ENCODING
from py_dotenv.store.store import DEFAULT_NAME, Store, StoreConfig
from py_dotenv.validator import Validator

if TYPE_CHECKING:
    import os
    from collections.abc import Iterable, MutableMapping

    from py_dotenv.interpolation import Lookup
    from py_dotenv.logging import Logger

_SOURCE = "dotenv"


class Dotenv:
    """Load env files into an environment and validate the result."""

    def __init__(
        self,
        store: Store,
        repository: Repository,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create a loader from an explicit store and repository."""
        self._store = store
        self._repository = repository
        self._logger = logger

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        *paths: str | os.PathLike[str],
        names: Iterable[str] | None = None,
        short_circuit: bool = True,
        encoding: str = DEFAULT_ENCODING,
        mutable: bool = False,
        target: MutableMapping[str, str] | None = None,
        logger: Logger | None = None,
    ) -> Dotenv:
        """Build a loader for *paths* that writes into *target*.

        Args:
            *paths: Directories to search, in priority order.
            names: Candidate file names (default ``[".env"]``).
            short_circuit: Stop after the first file that exists.
            encoding: Encoding all files are declared to use.
            mutable: Overwrite variables that already exist.
            target: Mapping to write into; defaults to ``os.environ``.
            logger: Optional load log.

        """
        config = StoreConfig(
            paths=tuple(str(p) for p in paths),
            names=tuple(names) if names is not None else (DEFAULT_NAME,),
            short_circuit=short_circuit,
            encoding=encoding,
        )
        repository = Repository(target, mutable=mutable, logger=logger)
        store = Store(config, lookup=repository.get, logger=logger)
        return cls(store, repository, logger=logger)

    @property
    def store(self) -> Store:
        """Return the store this loader reads from."""
        return self._store

    @property
    def repository(self) -> Repository:
        """Return the repository this loader writes to."""
        return self._repository

    def load(self) -> ResolvedEnvironment:
        """Load every configured file and apply the values.

        Raises:
            InvalidPathError: If no candidate file exists.
            DotenvError: If reading, parsing, or interpolation fails.

        """
        paths = self._store.file_paths()
        if not paths:
            config = self._store.config
            locations = ", ".join(str(p) for p in config.paths) or "<none>"
            msg = f"Unable to read any of the environment file(s) at [{locations}]"
            log_to(self._logger, LogLevel.ERROR, msg, source=_SOURCE)
            raise InvalidPathError(msg)
        resolved = self._store.load(paths)
        written = self._repository.apply(resolved)
        log_to(self._logger, LogLevel.INFO, f"applied {len(written)} variable(s)", source=_SOURCE)
        return resolved

    def safe_load(self) -> ResolvedEnvironment:
        """Like ``load()``, but return an empty result when no file exists."""
        try:
            return self.load()
        except InvalidPathError:
            return ResolvedEnvironment()

    def required(self, *names: str) -> Validator:
        """Assert *names* are set and return a validator for further checks."""
        return Validator(self._repository.get, names).required()

    def if_present(self, *names: str) -> Validator:
        """Return a validator that only checks those *names* that are set."""
        return Validator(self._repository.get, names, only_present=True)


def parse(text: str, lookup: Lookup | None = None) -> ResolvedEnvironment:
    """Resolve env-file *text* to values without touching any file.

    Args:
        text: Env-file syntax.
        lookup: Fallback for names the text does not define; by
            default nothing outside the text is consulted.

    Raises:
        ParseError: On malformed syntax.
        InterpolationError: On cyclic references.

    """
    external = lookup if lookup is not None else no_lookup
    entries = interpolate(parse_entries(text).entries, external)
    return ResolvedEnvironment({e.name: e.value for e in entries})
