"""Health aggregation over the architecture IR."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ir.models import C4Level, HealthStatus, PatternStatus
from ir.reports import ElementHealth, HealthReport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ir.models import ModuleDoc


def aggregate_health(docs: Sequence[ModuleDoc]) -> HealthReport:
    """Count files by maturity and patterns by confidence.

    Counts are kept both project-wide and per element. Modules carrying the
    "no pattern" sentinel do not count towards pattern totals.
    """
    report = HealthReport(
        total_elements=len(docs),
        container_count=sum(1 for d in docs if d.c4_level == C4Level.CONTAINER),
        component_count=sum(1 for d in docs if d.c4_level == C4Level.COMPONENT),
    )

    for doc in docs:
        element = ElementHealth(
            name=doc.module_path,
            c4_level=str(doc.c4_level),
            file_count=len(doc.files),
            pattern=doc.pattern,
            pattern_confidence=str(doc.pattern_status),
        )

        for entry in doc.files:
            if entry.health == HealthStatus.ACTIVE:
                element.files_active += 1
            elif entry.health == HealthStatus.STABLE:
                element.files_stable += 1
            else:
                element.files_planned += 1

        report.files_planned += element.files_planned
        report.files_active += element.files_active
        report.files_stable += element.files_stable
        report.total_files += len(doc.files)

        if doc.has_pattern:
            report.patterns_total += 1
            if doc.pattern_status == PatternStatus.VERIFIED:
                report.patterns_verified += 1
            else:
                report.patterns_planned += 1

        report.per_element.append(element)

    return report


def _percent(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return part / total * 100.0


def format_health_report(report: HealthReport) -> str:
    lines = [
        "Architecture Health Report",
        "==========================",
        (
            f"Elements:    {report.total_elements} total "
            f"({report.container_count} containers, "
            f"{report.component_count} components)"
        ),
        f"Files:       {report.total_files} total",
    ]

    if report.total_files:
        for label, count in (
            ("planned", report.files_planned),
            ("active", report.files_active),
            ("stable", report.files_stable),
        ):
            pct = _percent(count, report.total_files)
            lines.append(f"  {label + ':':<10} {count} ({pct:.1f}%)")

    lines.append(f"Patterns:    {report.patterns_total} assigned")
    if report.patterns_total:
        for label, count in (
            ("planned", report.patterns_planned),
            ("verified", report.patterns_verified),
        ):
            pct = _percent(count, report.patterns_total)
            lines.append(f"  {label + ':':<10} {count} ({pct:.1f}%)")

    return "\n".join(lines) + "\n"


__all__ = ["aggregate_health", "format_health_report"]
