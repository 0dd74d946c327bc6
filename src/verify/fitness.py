"""Named architectural fitness functions.

Each function checks every module declaring a given pattern against that
pattern's structural heuristic and reports the modules that fail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from heuristics.base import Pattern
from heuristics.registry import check_module_pattern

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from ir.models import ModuleDoc


@dataclass(frozen=True)
class FitnessFailure:
    module_path: str
    source_file: str
    reason: str


@dataclass(frozen=True)
class FitnessResult:
    name: str
    passed: bool
    checked: int
    failures: list[FitnessFailure] = field(default_factory=list)


@dataclass(frozen=True)
class _FitnessFunction:
    pattern: Pattern
    failure_reason: str


_REGISTRY: dict[str, _FitnessFunction] = {
    "all_strategy_modules_define_a_trait": _FitnessFunction(
        Pattern.STRATEGY, "no trait definition found"
    ),
    "all_facade_modules_reexport_submodules": _FitnessFunction(
        Pattern.FACADE, "no pub use re-exports or pub mod declarations found"
    ),
    "all_observer_modules_have_channels_or_callbacks": _FitnessFunction(
        Pattern.OBSERVER, "no channel types or callback parameters found"
    ),
}


def available_fitness_functions() -> list[str]:
    return sorted(_REGISTRY)


def _check_modules_for_pattern(
    name: str,
    docs: Sequence[ModuleDoc],
    function: _FitnessFunction,
    checker: Callable[[str, Path], bool],
) -> FitnessResult:
    checked = 0
    failures: list[FitnessFailure] = []

    for doc in docs:
        if doc.pattern != function.pattern.value:
            continue
        checked += 1

        source_dir = doc.source_dir
        if source_dir is None:
            reason = "could not determine source directory"
        elif checker(doc.pattern, source_dir):
            continue
        else:
            reason = function.failure_reason

        failures.append(
            FitnessFailure(
                module_path=doc.module_path,
                source_file=doc.source_file,
                reason=reason,
            )
        )

    return FitnessResult(
        name=name, passed=not failures, checked=checked, failures=failures
    )


def run_fitness(
    name: str,
    docs: Sequence[ModuleDoc],
    *,
    checker: Callable[[str, Path], bool] = check_module_pattern,
) -> FitnessResult | None:
    """Run a fitness function by name.

    Returns None when no function is registered under name. A module set
    with no module declaring the pattern passes vacuously.
    """
    function = _REGISTRY.get(name)
    if function is None:
        return None
    return _check_modules_for_pattern(name, docs, function, checker)


def run_all_fitness(
    docs: Sequence[ModuleDoc],
    *,
    checker: Callable[[str, Path], bool] = check_module_pattern,
) -> list[FitnessResult]:
    return [
        _check_modules_for_pattern(name, docs, _REGISTRY[name], checker)
        for name in available_fitness_functions()
    ]


def format_fitness_result(result: FitnessResult) -> str:
    """Format a fitness result as human-readable text."""
    if result.passed:
        return f"PASS: {result.name} - checked {result.checked} module(s)\n"

    lines = [
        f"FAIL: {result.name} - {len(result.failures)}/{result.checked} module(s) failed"
    ]
    lines.extend(
        f"  {failure.module_path} ({failure.source_file}): {failure.reason}"
        for failure in result.failures
    )
    return "\n".join(lines) + "\n"


__all__ = [
    "FitnessFailure",
    "FitnessResult",
    "available_fitness_functions",
    "format_fitness_result",
    "run_all_fitness",
    "run_fitness",
]
