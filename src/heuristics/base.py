"""Pattern names and the per-language checker contract.

A heuristic returning True means "there is structural evidence consistent
with this pattern", not "this code correctly implements the pattern".
Heuristics are permissive: verifying a module that loosely matches is
preferred over missing one that clearly does.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class Pattern(str, Enum):
    """Design patterns with a registered structural heuristic."""

    OBSERVER = "Observer"
    STRATEGY = "Strategy"
    FACADE = "Facade"
    BUILDER = "Builder"
    FACTORY = "Factory"
    ADAPTER = "Adapter"
    DECORATOR = "Decorator"
    SINGLETON = "Singleton"
    COMMAND = "Command"

    @classmethod
    def lookup(cls, name: str) -> Pattern | None:
        """Return the pattern named exactly ``name``, or None."""
        try:
            return cls(name)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


OBSERVER_METHODS = frozenset(
    {
        "subscribe",
        "unsubscribe",
        "notify",
        "on_event",
        "on_update",
        "on_change",
        "emit",
        "publish",
        "add_listener",
        "remove_listener",
    }
)

COMMAND_METHODS = frozenset(
    {"execute", "exec", "run", "invoke", "perform", "undo", "redo"}
)

SINGLETON_ACCESSORS = frozenset({"instance", "get_instance"})

_FACTORY_NAME = re.compile(r"^(create|make)(_\w+)?$")


def is_factory_name(name: str) -> bool:
    return _FACTORY_NAME.match(name) is not None


class PatternChecker(Protocol):
    """Structural evidence for design patterns in one source language."""

    language: str
    extensions: frozenset[str]

    def check(self, pattern: Pattern, source: str, *, filename: str = ...) -> bool:
        """Return True iff source shows structural evidence for pattern.

        Must never raise: unparsable source is "no evidence".
        """
        ...


class DispatchChecker(ABC):
    """Checker dispatching each Pattern to a method via a closed table."""

    language: str = ""
    extensions: frozenset[str] = frozenset()

    @abstractmethod
    def _checks(self) -> dict[Pattern, Callable[[str, str], bool]]:
        """Map every supported Pattern to its check function."""

    def check(self, pattern: Pattern, source: str, *, filename: str = "<source>") -> bool:
        check_fn = self._checks().get(pattern)
        if check_fn is None:
            return False
        return check_fn(source, filename)


__all__ = [
    "COMMAND_METHODS",
    "OBSERVER_METHODS",
    "SINGLETON_ACCESSORS",
    "DispatchChecker",
    "Pattern",
    "PatternChecker",
    "is_factory_name",
]
