"""Structural design-pattern heuristics."""

from heuristics.base import Pattern, PatternChecker
from heuristics.python import PythonPatternChecker
from heuristics.registry import (
    CHECKERS,
    check_module_pattern,
    check_pattern,
    check_sources,
    checker_for_file,
    has_heuristic,
)
from heuristics.rust import RustPatternChecker

__all__ = [
    "CHECKERS",
    "Pattern",
    "PatternChecker",
    "PythonPatternChecker",
    "RustPatternChecker",
    "check_module_pattern",
    "check_pattern",
    "check_sources",
    "checker_for_file",
    "has_heuristic",
]
