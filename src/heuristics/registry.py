"""Pattern heuristic engine.

Language checkers inspect one file at a time; the engine only decides which
checker applies and scans a module's files existentially: one file with
evidence is enough, however many files lack it.
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import TYPE_CHECKING

from heuristics.base import Pattern
from heuristics.python import PythonPatternChecker
from heuristics.rust import RustPatternChecker
from scan.files import read_sources

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from heuristics.base import PatternChecker

logger = logging.getLogger(__name__)

CHECKERS: tuple[PatternChecker, ...] = (RustPatternChecker(), PythonPatternChecker())

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset().union(
    *(checker.extensions for checker in CHECKERS)
)


def has_heuristic(pattern_name: str) -> bool:
    """Return True if pattern_name has a registered structural heuristic."""
    return Pattern.lookup(pattern_name) is not None


def checker_for_file(filename: str) -> PatternChecker | None:
    suffix = PurePath(filename).suffix
    for checker in CHECKERS:
        if suffix in checker.extensions:
            return checker
    return None


def check_pattern(pattern_name: str, filename: str, source: str) -> bool:
    """Return True iff one source file shows structural evidence for a pattern.

    Unknown pattern names and unsupported languages are "no evidence".
    """
    pattern = Pattern.lookup(pattern_name)
    if pattern is None:
        return False

    checker = checker_for_file(filename)
    if checker is None:
        return False

    return checker.check(pattern, source, filename=filename)


def check_sources(pattern_name: str, sources: Iterable[tuple[str, str]]) -> bool:
    """Existential scan over (filename, source) pairs."""
    for filename, source in sources:
        if check_pattern(pattern_name, filename, source):
            logger.debug("%s evidence found in %s", pattern_name, filename)
            return True
    return False


def check_module_pattern(pattern_name: str, source_dir: Path) -> bool:
    """Scan every supported source file in source_dir for structural evidence."""
    if not has_heuristic(pattern_name):
        return False
    sources = read_sources(source_dir, extensions=SUPPORTED_EXTENSIONS)
    return check_sources(pattern_name, sources)


__all__ = [
    "CHECKERS",
    "SUPPORTED_EXTENSIONS",
    "check_module_pattern",
    "check_pattern",
    "check_sources",
    "checker_for_file",
    "has_heuristic",
]
