"""Repository — apply resolved values to a live environment.

Loading never touches ``os.environ``; it only produces a
``ResolvedEnvironment``.  The repository is the step that writes those
values somewhere, usually the process environment.

Two policies:
    - **Immutable** (default) — a name already present in the target is
      left alone, so real environment variables beat ``.env`` defaults.
    - **Mutable** — loaded values overwrite what is there.

A declared-but-unset name (value ``None``) removes the variable in
mutable mode and is ignored in immutable mode.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from py_dotenv.logging import LogLevel, log_to

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from py_dotenv.logging import Logger

_SOURCE = "repository"


class Repository:
    """Write variables into a mutable mapping such as ``os.environ``."""

    def __init__(
        self,
        target: MutableMapping[str, str] | None = None,
        *,
        mutable: bool = False,
        logger: Logger | None = None,
    ) -> None:
        """Create a repository.

        Args:
            target: Mapping to write into; defaults to ``os.environ``.
            mutable: Overwrite names that already exist.
            logger: Optional load log.

        """
        self._target: MutableMapping[str, str] = os.environ if target is None else target
        self._mutable = mutable
        self._logger = logger

    @property
    def mutable(self) -> bool:
        """Return True if existing names are overwritten."""
        return self._mutable

    def get(self, name: str) -> str | None:
        """Return the current value of *name*, or None if absent."""
        return self._target.get(name)

    def has(self, name: str) -> bool:
        """Return True if *name* is present in the target."""
        return name in self._target

    def apply(self, values: Mapping[str, str | None]) -> list[str]:
        """Write *values* according to the repository's policy.

        Returns:
            Names that were set or removed, in order.

        """
        written: list[str] = []
        for name, value in values.items():
            if not self._mutable and name in self._target:
                log_to(self._logger, LogLevel.DEBUG, f"kept existing {name}", source=_SOURCE)
                continue
            if value is None:
                if self._mutable and name in self._target:
                    del self._target[name]
                    written.append(name)
                    log_to(self._logger, LogLevel.INFO, f"cleared {name}", source=_SOURCE)
                continue
            self._target[name] = value
            written.append(name)
            log_to(self._logger, LogLevel.INFO, f"set {name}", source=_SOURCE)
        return written
