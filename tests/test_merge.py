from __future__ import annotations

import logging

import pytest

from ir.models import C4Level, ModuleDoc
from merge.merge import MergeConflictError, merge_ir, merge_ir_detailed


def _doc(path: str, level: C4Level, description: str = "") -> ModuleDoc:
    return ModuleDoc.create(
        path,
        source_file=f"src/{path.replace('.', '/')}/mod.rs",
        c4_level=level,
        description=description,
    )


def test_disjoint_sources_are_unioned_and_sorted() -> None:
    rust = [_doc("storage", C4Level.CONTAINER), _doc("api", C4Level.CONTAINER)]
    python = [_doc("api.handlers", C4Level.COMPONENT)]

    merged = merge_ir([rust, python])

    assert [doc.module_path for doc in merged] == ["api", "api.handlers", "storage"]


def test_empty_sources_merge_to_empty() -> None:
    assert merge_ir([]) == []
    assert merge_ir([[], []]) == []


def test_same_level_duplicate_last_wins() -> None:
    first = [_doc("api", C4Level.CONTAINER, "from rust")]
    second = [_doc("api", C4Level.CONTAINER, "from python")]

    merged = merge_ir([first, second])

    assert len(merged) == 1
    assert merged[0].description == "from python"


def test_duplicate_within_one_source_last_wins() -> None:
    source = [
        _doc("api", C4Level.CONTAINER, "first"),
        _doc("api", C4Level.CONTAINER, "second"),
    ]
    assert merge_ir([source])[0].description == "second"


def test_duplicate_is_reported_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    first = [_doc("api", C4Level.CONTAINER)]
    second = [_doc("api", C4Level.CONTAINER)]

    with caplog.at_level(logging.WARNING, logger="merge.merge"):
        result = merge_ir_detailed([first, second])

    assert result.warnings == (
        "duplicate module 'api' at C4 level 'container', overwriting with later source",
    )
    assert "duplicate module 'api'" in caplog.text


def test_level_conflict_raises() -> None:
    first = [_doc("api", C4Level.CONTAINER)]
    second = [_doc("api", C4Level.COMPONENT)]

    with pytest.raises(MergeConflictError) as excinfo:
        merge_ir([first, second])

    error = excinfo.value
    assert error.module_path == "api"
    assert error.existing_level is C4Level.CONTAINER
    assert error.incoming_level is C4Level.COMPONENT
    assert error.message == "conflicting C4 levels: existing 'container' vs new 'component'"
    assert str(error).startswith("merge conflict at 'api'")


def test_conflict_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="conflicting C4 levels"):
        merge_ir([[_doc("api", C4Level.UNKNOWN)], [_doc("api", C4Level.CONTAINER)]])


def test_merge_is_deterministic_regardless_of_input_order() -> None:
    a = [_doc("b", C4Level.CONTAINER), _doc("a", C4Level.CONTAINER)]
    b = [_doc("c.x", C4Level.COMPONENT)]

    assert merge_ir([a, b]) == merge_ir([b, a])


def test_merge_does_not_mutate_inputs() -> None:
    source = [_doc("b", C4Level.CONTAINER), _doc("a", C4Level.CONTAINER)]
    merge_ir([source])
    assert [doc.module_path for doc in source] == ["b", "a"]
