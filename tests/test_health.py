from __future__ import annotations

from ir.health import aggregate_health, format_health_report
from ir.models import C4Level, FileEntry, HealthStatus, ModuleDoc, PatternStatus


def _entry(name: str, health: HealthStatus) -> FileEntry:
    return FileEntry(
        name=name,
        pattern="--",
        pattern_status=PatternStatus.PLANNED,
        purpose="",
        health=health,
    )


def _docs() -> list[ModuleDoc]:
    return [
        ModuleDoc.create(
            "api",
            source_file="src/api/mod.rs",
            c4_level=C4Level.CONTAINER,
            pattern="Facade",
            pattern_status=PatternStatus.VERIFIED,
            files=[
                _entry("routes.rs", HealthStatus.STABLE),
                _entry("auth.rs", HealthStatus.ACTIVE),
            ],
        ),
        ModuleDoc.create(
            "api.handlers",
            source_file="src/api/handlers/mod.rs",
            c4_level=C4Level.COMPONENT,
            pattern="Strategy",
            files=[_entry("user.rs", HealthStatus.PLANNED)],
        ),
        ModuleDoc.create("storage", source_file="src/storage/mod.rs"),
    ]


def test_aggregate_counts() -> None:
    report = aggregate_health(_docs())

    assert report.total_elements == 3
    assert report.container_count == 1
    assert report.component_count == 1
    assert report.total_files == 3
    assert (report.files_planned, report.files_active, report.files_stable) == (1, 1, 1)
    assert report.patterns_total == 2
    assert report.patterns_verified == 1
    assert report.patterns_planned == 1


def test_per_element_breakdown() -> None:
    report = aggregate_health(_docs())

    api = report.per_element[0]
    assert api.name == "api"
    assert api.file_count == 2
    assert api.files_stable == 1
    assert api.pattern_confidence == "verified"
    assert report.per_element[2].pattern == "--"


def test_empty_ir() -> None:
    report = aggregate_health([])

    assert report.total_elements == 0
    assert "Patterns:    0 assigned" in format_health_report(report)


def test_format_includes_percentages() -> None:
    text = format_health_report(aggregate_health(_docs()))

    assert "Elements:    3 total (1 containers, 1 components)" in text
    assert "verified:  1 (50.0%)" in text
