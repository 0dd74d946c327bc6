"""Architecture IR models.

This module contains the canonical data model exchanged between language
adapters (which produce ``ModuleDoc`` lists from annotated source) and every
back end that consumes them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from utils import module_path_problem, parent_container_of, source_dir_of

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

# Pattern sentinel meaning "no design pattern claimed".
NO_PATTERN = "--"


class C4Level(str, Enum):
    """C4 architecture level of a module."""

    CONTAINER = "container"
    COMPONENT = "component"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, text: str) -> C4Level:
        """Map free annotation text to a level; unrecognized text is UNKNOWN."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


class PatternStatus(str, Enum):
    """Two-tier confidence of a design pattern claim."""

    PLANNED = "planned"
    VERIFIED = "verified"

    @classmethod
    def parse(cls, text: str) -> PatternStatus:
        if text.strip().lower() == cls.VERIFIED.value:
            return cls.VERIFIED
        return cls.PLANNED

    def __str__(self) -> str:
        return self.value


class HealthStatus(str, Enum):
    """Implementation maturity of a cataloged file (planned -> active -> stable)."""

    PLANNED = "planned"
    ACTIVE = "active"
    STABLE = "stable"

    @classmethod
    def parse(cls, text: str) -> HealthStatus:
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.PLANNED

    def __str__(self) -> str:
        return self.value


class _IRModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Relationship(_IRModel):
    """A directed runtime dependency from one module to another."""

    target: str = Field(description="Target module_path (need not resolve)")
    label: str
    protocol: str


class FileEntry(_IRModel):
    """One row of a module's declared file catalog."""

    name: str
    pattern: str
    pattern_status: PatternStatus
    purpose: str
    health: HealthStatus


class ModuleDoc(_IRModel):
    """One architectural element (container or component).

    This is the IR contract between language adapters and the core.
    Values are immutable; promotion produces updated copies via
    ``with_status``.
    """

    module_path: str = Field(description="Dot-separated hierarchical identifier")
    content: str = Field(description="Raw annotation text (provenance only)")
    source_file: str = Field(description="File the annotation was extracted from")
    c4_level: C4Level
    pattern: str
    pattern_status: PatternStatus
    description: str
    parent_container: str | None = Field(
        description="First path segment for nested modules, None for top-level"
    )
    relationships: list[Relationship]
    files: list[FileEntry]

    @field_validator("module_path")
    @classmethod
    def validate_module_path(cls, v: str) -> str:
        problem = module_path_problem(v)
        if problem is not None:
            raise ValueError(problem)
        return v

    @field_validator("parent_container")
    @classmethod
    def validate_parent_container(
        cls, v: str | None, info: ValidationInfo
    ) -> str | None:
        """The parent container is derived from module_path, never set freely."""
        module_path = info.data.get("module_path")
        if module_path is None:
            return v
        expected = parent_container_of(module_path)
        if v != expected:
            msg = (
                f"parent_container must be {expected!r} for module_path "
                f"{module_path!r}, got {v!r}"
            )
            raise ValueError(msg)
        return v

    @classmethod
    def create(
        cls,
        module_path: str,
        *,
        source_file: str,
        c4_level: C4Level = C4Level.UNKNOWN,
        content: str = "",
        pattern: str = NO_PATTERN,
        pattern_status: PatternStatus = PatternStatus.PLANNED,
        description: str = "",
        relationships: Iterable[Relationship] = (),
        files: Iterable[FileEntry] = (),
    ) -> ModuleDoc:
        """Build a ModuleDoc with ``parent_container`` derived from the path."""
        return cls(
            module_path=module_path,
            content=content,
            source_file=source_file,
            c4_level=c4_level,
            pattern=pattern,
            pattern_status=pattern_status,
            description=description,
            parent_container=parent_container_of(module_path),
            relationships=list(relationships),
            files=list(files),
        )

    @property
    def has_pattern(self) -> bool:
        return bool(self.pattern) and self.pattern != NO_PATTERN

    @property
    def source_dir(self) -> Path | None:
        return source_dir_of(self.source_file)

    def with_status(self, status: PatternStatus) -> ModuleDoc:
        return self.model_copy(update={"pattern_status": status})


def sort_modules(docs: Iterable[ModuleDoc]) -> list[ModuleDoc]:
    """Return docs ordered by module_path (the canonical IR order)."""
    return sorted(docs, key=lambda doc: doc.module_path)


__all__ = [
    "NO_PATTERN",
    "C4Level",
    "FileEntry",
    "HealthStatus",
    "ModuleDoc",
    "PatternStatus",
    "Relationship",
    "sort_modules",
]
