"""Pattern promotion: Planned -> Verified on structural evidence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from heuristics.registry import check_module_pattern, has_heuristic
from ir.models import PatternStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from ir.models import ModuleDoc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromotionResult:
    modules: list[ModuleDoc]
    promoted: int
    promoted_paths: tuple[str, ...] = ()


def promote_patterns(
    docs: Sequence[ModuleDoc],
    *,
    checker: Callable[[str, Path], bool] = check_module_pattern,
) -> PromotionResult:
    """Promote Planned patterns whose source directory shows structural evidence.

    Returns a new module list; the input is left untouched. Verified modules
    are never re-checked or demoted, and patterns without a registered
    heuristic stay Planned.
    """
    modules: list[ModuleDoc] = []
    promoted_paths: list[str] = []

    for doc in docs:
        if doc.pattern_status is not PatternStatus.PLANNED:
            modules.append(doc)
            continue
        if not has_heuristic(doc.pattern):
            modules.append(doc)
            continue

        source_dir = doc.source_dir
        if source_dir is None:
            modules.append(doc)
            continue

        if checker(doc.pattern, source_dir):
            logger.info("Promoted %s (%s) to verified", doc.module_path, doc.pattern)
            modules.append(doc.with_status(PatternStatus.VERIFIED))
            promoted_paths.append(doc.module_path)
        else:
            modules.append(doc)

    return PromotionResult(
        modules=modules,
        promoted=len(promoted_paths),
        promoted_paths=tuple(promoted_paths),
    )


def auto_promote(docs: Sequence[ModuleDoc]) -> tuple[list[ModuleDoc], int]:
    result = promote_patterns(docs)
    return result.modules, result.promoted


__all__ = ["PromotionResult", "auto_promote", "promote_patterns"]
