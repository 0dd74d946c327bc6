"""Project configuration (archidoc.toml)."""

from rules.config import (
    CONFIG_FILENAME,
    ArchidocConfig,
    CatalogConfig,
    ConfigError,
    DriftConfig,
    FitnessConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "ArchidocConfig",
    "CatalogConfig",
    "ConfigError",
    "DriftConfig",
    "FitnessConfig",
    "load_config",
    "resolve_output_dir",
]
