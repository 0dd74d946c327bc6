"""File catalog validation: reconcile declared file tables with the disk."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ir.reports import GhostEntry, OrphanEntry, ValidationReport
from scan.files import build_gitignore_matcher, list_directory_files
from scan.languages import profile_for_source_file

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ir.models import ModuleDoc


def validate_file_tables(
    docs: Sequence[ModuleDoc],
    *,
    gitignore_root: Path | None = None,
    nested_gitignore: bool = False,
) -> ValidationReport:
    """Validate file tables against the actual filesystem.

    For each module with a file catalog:
    - Ghost detection: catalog entries naming files that don't exist on disk.
    - Orphan detection: source files on disk (of the annotated file's
      language, excluding structural entry files) not listed in the catalog.

    Modules without file catalogs are skipped. When gitignore_root is given,
    files ignored by its .gitignore are never reported as orphans; with
    nested_gitignore, .gitignore files below the root apply as well.
    """
    report = ValidationReport()
    gitignore_matches = None
    if gitignore_root is not None:
        gitignore_matches = build_gitignore_matcher(
            gitignore_root, nested_gitignore=nested_gitignore
        )

    for doc in docs:
        if not doc.files:
            continue

        source_dir = doc.source_dir
        if source_dir is None:
            continue
        source_dir_str = str(source_dir)

        catalog_names = {entry.name for entry in doc.files}

        for name in sorted(catalog_names):
            if not (source_dir / name).exists():
                report.ghosts.append(
                    GhostEntry(
                        element=doc.module_path,
                        filename=name,
                        source_dir=source_dir_str,
                    )
                )

        profile = profile_for_source_file(doc.source_file)
        for path in list_directory_files(
            source_dir,
            extensions=profile.extensions,
            gitignore_matches=gitignore_matches,
        ):
            if profile.is_structural(path.name) or path.name in catalog_names:
                continue
            report.orphans.append(
                OrphanEntry(
                    element=doc.module_path,
                    filename=path.name,
                    source_dir=source_dir_str,
                )
            )

    return report


def format_validation_report(report: ValidationReport) -> str:
    """Format a validation report as human-readable text."""
    if report.is_clean:
        return "File validation: all clear\n"

    lines: list[str] = []
    if report.ghosts:
        lines.append(f"Ghost entries ({len(report.ghosts)} found):")
        lines.extend(
            f"  {ghost.element}: '{ghost.filename}' listed in catalog "
            "but not found on disk"
            for ghost in report.ghosts
        )

    if report.orphans:
        lines.append(f"Orphan files ({len(report.orphans)} found):")
        lines.extend(
            f"  {orphan.element}: '{orphan.filename}' exists on disk "
            "but not in catalog"
            for orphan in report.orphans
        )

    return "\n".join(lines) + "\n"


__all__ = ["format_validation_report", "validate_file_tables"]
