# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Format registry mapping format names to checkers.

A format that is not registered always passes validation, so schemas using
format names unknown to this library never invalidate otherwise valid data.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from .checkers import FormatChecker, FunctionChecker, builtin_checkers
from .exceptions import RegistryError
from .utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

CheckerLike = Union[FormatChecker, Callable[[Any], Any]]


class FormatResult(Enum):
    """Outcome of checking a value against a named format."""

    UNKNOWN = "unknown"
    SATISFIED = "satisfied"
    VIOLATED = "violated"

    def __bool__(self) -> bool:
        # Unknown formats do not block validation.
        return self is not FormatResult.VIOLATED


def _as_checker(checker: CheckerLike) -> FormatChecker:
    if isinstance(checker, FormatChecker):
        return checker
    if callable(checker):
        return FunctionChecker(checker)
    raise RegistryError(
        f"Format checker must be a FormatChecker or a callable, got {type(checker).__name__}"
    )


class FormatRegistry:
    """Thread-safe collection of named format checkers.

    Lookups may run concurrently; ``add`` and ``remove`` are exclusive with
    every other operation on the same registry. Each registry owns its lock.
    """

    def __init__(self, checkers: Optional[Dict[str, CheckerLike]] = None):
        self._lock = ReadWriteLock()
        self._checkers: Dict[str, FormatChecker] = {}
        for name, checker in (checkers or {}).items():
            self.add(name, checker)

    def add(self, name: str, checker: CheckerLike) -> "FormatRegistry":
        """Bind *checker* to *name*, replacing any existing binding.

        Args:
            name: Format name used in the ``format`` keyword of a schema
            checker: A FormatChecker, or a callable wrapped in FunctionChecker

        Returns:
            The registry itself, so calls can be chained

        Raises:
            RegistryError: If the name is empty or the checker is unusable
        """
        if not isinstance(name, str) or not name:
            raise RegistryError(f"Format name must be a non-empty string, got {name!r}")
        format_checker = _as_checker(checker)

        with self._lock.write():
            replaced = name in self._checkers
            self._checkers[name] = format_checker

        if replaced:
            logger.debug(f"Replaced format checker '{name}' with {format_checker!r}")
        else:
            logger.debug(f"Registered format checker '{name}': {format_checker!r}")
        return self

    def remove(self, name: str) -> "FormatRegistry":
        """Remove the checker bound to *name*. Absent names are ignored."""
        with self._lock.write():
            removed = self._checkers.pop(name, None)
        if removed is not None:
            logger.debug(f"Removed format checker '{name}'")
        return self

    def has(self, name: str) -> bool:
        with self._lock.read():
            return name in self._checkers

    def get(self, name: str) -> Optional[FormatChecker]:
        with self._lock.read():
            return self._checkers.get(name)

    def is_format(self, name: str, value: Any) -> bool:
        """Check *value* against the format *name*.

        Unrecognized formats always pass. Otherwise the checker's verdict is
        returned unmodified.
        """
        checker = self.get(name)
        if checker is None:
            return True
        return checker.is_format(value)

    def check(self, name: str, value: Any) -> FormatResult:
        """Like :meth:`is_format`, but tells unknown formats apart."""
        checker = self.get(name)
        if checker is None:
            return FormatResult.UNKNOWN
        if checker.is_format(value):
            return FormatResult.SATISFIED
        return FormatResult.VIOLATED

    def names(self) -> List[str]:
        with self._lock.read():
            return sorted(self._checkers)

    def copy(self) -> "FormatRegistry":
        """Return an independent registry with the same bindings."""
        with self._lock.read():
            snapshot = dict(self._checkers)
        return FormatRegistry(snapshot)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._checkers)

    def __repr__(self) -> str:
        return f"FormatRegistry({self.names()!r})"


def new_default_registry() -> FormatRegistry:
    """Create an isolated registry holding the built-in formats."""
    return FormatRegistry(builtin_checkers())


# Process-wide registry used when callers do not supply their own.
default_registry = new_default_registry()


def is_format(name: str, value: Any) -> bool:
    """Check *value* against *name* using the default registry."""
    return default_registry.is_format(name, value)
