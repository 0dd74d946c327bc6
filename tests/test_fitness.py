from __future__ import annotations

from typing import TYPE_CHECKING

from ir.models import C4Level, ModuleDoc, PatternStatus
from verify.fitness import (
    FitnessFailure,
    available_fitness_functions,
    format_fitness_result,
    run_all_fitness,
    run_fitness,
)

if TYPE_CHECKING:
    from pathlib import Path


def _module(root: Path, name: str, pattern: str, source: str) -> ModuleDoc:
    module_dir = root / name
    module_dir.mkdir(parents=True, exist_ok=True)
    (module_dir / "mod.rs").write_text(source, encoding="utf-8")
    return ModuleDoc.create(
        name,
        source_file=str(module_dir / "mod.rs"),
        c4_level=C4Level.CONTAINER,
        pattern=pattern,
        pattern_status=PatternStatus.VERIFIED,
    )


def test_registry_lists_functions() -> None:
    assert available_fitness_functions() == [
        "all_facade_modules_reexport_submodules",
        "all_observer_modules_have_channels_or_callbacks",
        "all_strategy_modules_define_a_trait",
    ]


def test_unknown_function_is_not_found() -> None:
    assert run_fitness("all_modules_are_pretty", []) is None


def test_no_matching_modules_passes_vacuously() -> None:
    result = run_fitness("all_strategy_modules_define_a_trait", [])

    assert result is not None
    assert result.passed
    assert result.checked == 0
    assert format_fitness_result(result) == (
        "PASS: all_strategy_modules_define_a_trait - checked 0 module(s)\n"
    )


def test_failing_module_is_named(tmp_path: Path) -> None:
    good = _module(tmp_path, "ranking", "Strategy", "pub trait Rank {\n    fn rank(&self);\n}\n")
    bad = _module(tmp_path, "scoring", "Strategy", "pub struct Score;\n")
    other = _module(tmp_path, "api", "Facade", "pub use a::B;\n")

    result = run_fitness("all_strategy_modules_define_a_trait", [good, bad, other])

    assert result is not None
    assert not result.passed
    assert result.checked == 2
    assert result.failures == [
        FitnessFailure(
            module_path="scoring",
            source_file=bad.source_file,
            reason="no trait definition found",
        )
    ]

    text = format_fitness_result(result)
    assert text.startswith("FAIL: all_strategy_modules_define_a_trait - 1/2 module(s) failed")
    assert "  scoring (" in text


def test_missing_source_directory_is_a_failure() -> None:
    doc = ModuleDoc.create("events", source_file="", pattern="Observer")

    result = run_fitness("all_observer_modules_have_channels_or_callbacks", [doc])

    assert result is not None
    assert result.failures[0].reason == "could not determine source directory"


def test_run_all_uses_injected_checker() -> None:
    docs = [
        ModuleDoc.create("a", source_file="src/a/mod.rs", pattern="Facade"),
        ModuleDoc.create("b", source_file="src/b/mod.rs", pattern="Observer"),
    ]

    results = run_all_fitness(docs, checker=lambda pattern, source_dir: pattern == "Facade")

    by_name = {result.name: result for result in results}
    assert by_name["all_facade_modules_reexport_submodules"].passed
    assert not by_name["all_observer_modules_have_channels_or_callbacks"].passed
    assert by_name["all_strategy_modules_define_a_trait"].checked == 0
