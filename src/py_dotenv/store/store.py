"""Store — orchestrate one load from candidate files to resolved values.

A load runs the whole pipeline, strictly in order:

    file_paths()  →  read()  →  parse()  →  interpolate()  →  merge

1. **Resolve** the existing ``directory/name`` candidates.
2. **Read** them, honouring the short-circuit policy and encoding.
3. For each file, in the order read: **parse** it, then **interpolate**
   it against values from the files already processed (and then the
   ambient environment).
4. **Merge** its entries into the result; later files and later lines win.

Ordering matters: a later file may refer to a value defined in an
earlier one, so files are never processed out of order.  The result is
built privately and only returned once every file succeeded.

``StoreConfig`` is the single, immutable description of what to load.
It can be built directly, from a plain mapping, or from a JSON file::

    {"paths": ["/srv/app"], "names": [".env.local", ".env"],
     "short_circuit": true, "encoding": "UTF-8"}
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from py_dotenv.env import ResolvedEnvironment
from py_dotenv.errors import DotenvError, InvalidConfigError
from py_dotenv.interpolation import interpolate
from py_dotenv.logging import LogLevel, log_to
from py_dotenv.parser.parser import parse
from py_dotenv.store.encoding import DEFAULT_ENCODING
from py_dotenv.store.paths import file_paths
from py_dotenv.store.reader import read

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from py_dotenv.interpolation import Lookup
    from py_dotenv.logging import Logger
    from py_dotenv.parser.entry import ParsedFile

DEFAULT_NAME = ".env"

_SOURCE = "store"
_CONFIG_KEYS = frozenset({"paths", "names", "short_circuit", "encoding"})


@dataclass(frozen=True)
class StoreConfig:
    """Describe which files to load and how.

    Attributes:
        paths: Directories to search, in priority order.
        names: Candidate file names, in priority order.
        short_circuit: Stop after the first file that exists.
        encoding: Encoding all files are declared to use.

    """

    paths: tuple[str, ...]
    names: tuple[str, ...] = (DEFAULT_NAME,)
    short_circuit: bool = True
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StoreConfig:
        """Build a config from a plain mapping.

        Raises:
            InvalidConfigError: On unknown keys or wrongly typed values.

        """
        unknown = sorted(set(data) - _CONFIG_KEYS)
        if unknown:
            msg = f"unknown config keys: {', '.join(unknown)}"
            raise InvalidConfigError(msg)
        paths = _string_list(data.get("paths", []), "paths")
        names = _string_list(data.get("names", [DEFAULT_NAME]), "names")
        short_circuit = data.get("short_circuit", True)
        if not isinstance(short_circuit, bool):
            msg = "'short_circuit' must be a boolean"
            raise InvalidConfigError(msg)
        encoding = data.get("encoding", DEFAULT_ENCODING)
        if not isinstance(encoding, str) or not encoding:
            msg = "'encoding' must be a non-empty string"
            raise InvalidConfigError(msg)
        return cls(paths=paths, names=names, short_circuit=short_circuit, encoding=encoding)

    def to_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-compatible dict."""
        return {
            "paths": list(self.paths),
            "names": list(self.names),
            "short_circuit": self.short_circuit,
            "encoding": self.encoding,
        }


def _string_list(value: object, key: str) -> tuple[str, ...]:
    if not isinstance(value, list | tuple) or not all(isinstance(v, str) for v in value):
        msg = f"{key!r} must be a list of strings"
        raise InvalidConfigError(msg)
    return tuple(value)


def load_config(path: Path) -> StoreConfig:
    """Read a ``StoreConfig`` from a JSON file.

    Raises:
        InvalidConfigError: If the file cannot be read or is malformed.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"cannot load config: {e}"
        raise InvalidConfigError(msg, path=str(path)) from e
    if not isinstance(data, dict):
        msg = "config must be a JSON object"
        raise InvalidConfigError(msg, path=str(path))
    return StoreConfig.from_dict(data)


class Store:
    """Load env files described by a ``StoreConfig``.

    Usage::

        store = Store(StoreConfig(paths=("/srv/app",)))
        env = store.load()        # ResolvedEnvironment
        text = store.read()       # raw text, for display

    """

    def __init__(
        self,
        config: StoreConfig,
        *,
        lookup: Lookup | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a store.

        Args:
            config: What to load.
            lookup: Read-only ambient environment used as the last
                interpolation fallback.  Defaults to ``os.environ``.
            logger: Optional load log.

        """
        self._config = config
        self._lookup: Lookup = lookup if lookup is not None else os.environ.get
        self._logger = logger

    @property
    def config(self) -> StoreConfig:
        """Return the configuration this store loads."""
        return self._config

    def file_paths(self) -> list[str]:
        """Return the candidate files that currently exist."""
        found = file_paths(self._config.paths, self._config.names)
        message = f"resolved {len(found)} candidate file(s)"
        log_to(self._logger, LogLevel.DEBUG, message, source=_SOURCE)
        return found

    def read_files(self, paths: Sequence[str] | None = None) -> dict[str, str]:
        """Return the raw text of each file read, keyed by path.

        Args:
            paths: Files already resolved by ``file_paths()``; resolved
                afresh when omitted.

        """
        return read(
            self.file_paths() if paths is None else paths,
            short_circuit=self._config.short_circuit,
            encoding=self._config.encoding,
            logger=self._logger,
        )

    def read(self) -> str:
        """Return the raw text of all files read, joined by newlines."""
        return "\n".join(self.read_files().values())

    def parse(self) -> list[ParsedFile]:
        """Return each file's entries without interpolation."""
        return [self._parse(path, text) for path, text in self.read_files().items()]

    def load(self, paths: Sequence[str] | None = None) -> ResolvedEnvironment:
        """Run the full pipeline and return the resolved values.

        Args:
            paths: Files already resolved by ``file_paths()``; resolved
                afresh when omitted.

        Raises:
            DotenvError: Whatever stage failed first; nothing partial
                is returned.

        """
        resolved = ResolvedEnvironment()
        for path, text in self.read_files(paths).items():
            parsed = self._parse(path, text)
            try:
                entries = interpolate(parsed.entries, self._external_lookup(resolved), path=path)
            except DotenvError as e:
                log_to(self._logger, LogLevel.ERROR, e.reason, source=_SOURCE, path=path)
                raise
            resolved.merge({e.name: e.value for e in entries})
        log_to(self._logger, LogLevel.INFO, f"loaded {len(resolved)} variable(s)", source=_SOURCE)
        return resolved

    def _parse(self, path: str, text: str) -> ParsedFile:
        try:
            parsed = parse(text, path=path)
        except DotenvError as e:
            log_to(self._logger, LogLevel.ERROR, e.reason, source=_SOURCE, path=path)
            raise
        message = f"parsed {len(parsed.entries)} entries"
        log_to(self._logger, LogLevel.DEBUG, message, source=_SOURCE, path=path)
        return parsed

    def _external_lookup(self, loaded: ResolvedEnvironment) -> Lookup:
        """Return a lookup over earlier files first, then the ambient environment."""

        def _lookup(name: str) -> str | None:
            value = loaded.lookup(name)
            return value if value is not None else self._lookup(name)

        return _lookup
