"""Merge IR sets emitted by independent adapters into one architecture graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ir.models import sort_modules

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ir.models import C4Level, ModuleDoc

logger = logging.getLogger(__name__)


class MergeConflictError(ValueError):
    """Raised when two sources disagree on a module's C4 level."""

    def __init__(
        self, module_path: str, existing_level: C4Level, incoming_level: C4Level
    ) -> None:
        self.module_path = module_path
        self.existing_level = existing_level
        self.incoming_level = incoming_level
        self.message = (
            f"conflicting C4 levels: existing '{existing_level}' "
            f"vs new '{incoming_level}'"
        )
        super().__init__(f"merge conflict at '{module_path}': {self.message}")


@dataclass(frozen=True)
class MergeResult:
    modules: list[ModuleDoc] = field(default_factory=list)
    warnings: tuple[str, ...] = field(default_factory=tuple)


def merge_ir_detailed(sources: Iterable[Iterable[ModuleDoc]]) -> MergeResult:
    """Merge IR sets and report same-level duplicates as warnings.

    Rules:
    - Modules with unique paths are included as-is.
    - Duplicate module_paths with the same c4_level: the later source wins.
    - Duplicate module_paths with different c4_levels: MergeConflictError.
    - Output is sorted by module_path.

    Sources are consumed strictly in the given order; conflict detection
    depends on which value is "existing" and which is "incoming".
    """
    merged: dict[str, ModuleDoc] = {}
    warnings: list[str] = []

    for source_set in sources:
        for doc in source_set:
            existing = merged.get(doc.module_path)
            if existing is not None:
                if existing.c4_level != doc.c4_level:
                    raise MergeConflictError(
                        doc.module_path, existing.c4_level, doc.c4_level
                    )

                message = (
                    f"duplicate module '{doc.module_path}' at C4 level "
                    f"'{doc.c4_level}', overwriting with later source"
                )
                logger.warning(message)
                warnings.append(message)

            merged[doc.module_path] = doc

    return MergeResult(modules=sort_modules(merged.values()), warnings=tuple(warnings))


def merge_ir(sources: Iterable[Iterable[ModuleDoc]]) -> list[ModuleDoc]:
    """Merge multiple IR sets into a single ModuleDoc list sorted by path.

    Raises:
        MergeConflictError: If a module_path appears with different C4 levels.
    """
    return merge_ir_detailed(sources).modules


__all__ = ["MergeConflictError", "MergeResult", "merge_ir", "merge_ir_detailed"]
