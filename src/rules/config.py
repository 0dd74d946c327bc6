from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils import is_bare_filename
from verify.drift import DEFAULT_DOCUMENT_NAME, DriftStrategy
from verify.fitness import available_fitness_functions

CONFIG_FILENAME = "archidoc.toml"


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class DriftConfig(_StrictModel):
    """How published documentation is compared against the IR."""

    strategy: DriftStrategy = Field(
        default="tree",
        description="'tree' diffs every rendered artifact, 'document' one file",
    )
    document: str = Field(
        default=DEFAULT_DOCUMENT_NAME,
        description="Canonical document compared by the 'document' strategy",
    )

    @field_validator("document")
    @classmethod
    def validate_document(cls, v: str) -> str:
        if not is_bare_filename(v):
            msg = f"document must be a bare filename, got {v!r}"
            raise ValueError(msg)
        return v


class CatalogConfig(_StrictModel):
    """File catalog validation options."""

    respect_gitignore: bool = Field(
        default=True,
        description="Skip gitignored files when looking for orphans",
    )
    nested_gitignore: bool = Field(
        default=False,
        description="Also honor .gitignore files in subdirectories of the root",
    )


class FitnessConfig(_StrictModel):
    """Fitness functions run when none are named on the command line."""

    functions: list[str] = Field(
        default_factory=available_fitness_functions,
        description="Names of registered fitness functions",
    )

    @field_validator("functions")
    @classmethod
    def validate_functions(cls, v: list[str]) -> list[str]:
        known = set(available_fitness_functions())
        unknown = [name for name in v if name not in known]
        if unknown:
            msg = (
                f"Unknown fitness function(s): {', '.join(unknown)}. "
                f"Available: {', '.join(sorted(known))}"
            )
            raise ValueError(msg)
        return v


class ArchidocConfig(_StrictModel):
    """Configuration for archidoc artifact publishing and checks."""

    output_dir: str = Field(
        default="docs/generated",
        description="Directory holding published documentation artifacts",
    )
    drift: DriftConfig = Field(default_factory=DriftConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    fitness: FitnessConfig = Field(default_factory=FitnessConfig)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the root after resolution. Absolute paths and paths that escape
    the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> ArchidocConfig:
    """Load configuration from archidoc.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ArchidocConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ArchidocConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
