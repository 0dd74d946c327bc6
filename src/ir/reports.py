"""Report models produced by the validation, drift and health passes.

These are structured findings, not errors: callers decide whether a
non-clean report is a failure condition.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GhostEntry(BaseModel):
    """A file listed in a catalog but not present on disk."""

    element: str
    filename: str
    source_dir: str


class OrphanEntry(BaseModel):
    """A source file present on disk but not listed in its module's catalog."""

    element: str
    filename: str
    source_dir: str


class ValidationReport(BaseModel):
    """File catalog integrity report."""

    ghosts: list[GhostEntry] = Field(default_factory=list)
    orphans: list[OrphanEntry] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.ghosts and not self.orphans


class DriftedFile(BaseModel):
    """A single artifact whose persisted content differs from the expected one."""

    path: str
    expected_lines: int
    actual_lines: int


class DriftReport(BaseModel):
    """Comparison of freshly rendered artifacts against persisted ones."""

    drifted_files: list[DriftedFile] = Field(default_factory=list)
    missing_files: list[str] = Field(default_factory=list)
    extra_files: list[str] = Field(default_factory=list)

    @property
    def has_drift(self) -> bool:
        return bool(self.drifted_files or self.missing_files or self.extra_files)


class ElementHealth(BaseModel):
    """Health summary for a single architectural element."""

    name: str
    c4_level: str
    file_count: int = 0
    files_planned: int = 0
    files_active: int = 0
    files_stable: int = 0
    pattern: str
    pattern_confidence: str


class HealthReport(BaseModel):
    """Aggregated health across all architectural elements."""

    total_elements: int = 0
    container_count: int = 0
    component_count: int = 0
    total_files: int = 0
    files_planned: int = 0
    files_active: int = 0
    files_stable: int = 0
    patterns_total: int = 0
    patterns_planned: int = 0
    patterns_verified: int = 0
    per_element: list[ElementHealth] = Field(default_factory=list)


__all__ = [
    "DriftReport",
    "DriftedFile",
    "ElementHealth",
    "GhostEntry",
    "HealthReport",
    "OrphanEntry",
    "ValidationReport",
]
