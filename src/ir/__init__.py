"""Architecture IR: the contract between language adapters and the core.

Every other subsystem (merge, catalog validation, drift detection, pattern
promotion) is a function over the values exported here.
"""

from ir.codec import (
    IRSchemaError,
    deserialize,
    load_ir_file,
    serialize,
    write_ir_file,
)
from ir.models import (
    NO_PATTERN,
    C4Level,
    FileEntry,
    HealthStatus,
    ModuleDoc,
    PatternStatus,
    Relationship,
    sort_modules,
)
from ir.reports import (
    DriftedFile,
    DriftReport,
    ElementHealth,
    GhostEntry,
    HealthReport,
    OrphanEntry,
    ValidationReport,
)
from ir.validation import IRValidationMessage, IRValidationResult, validate_ir

__all__ = [
    "NO_PATTERN",
    "C4Level",
    "DriftReport",
    "DriftedFile",
    "ElementHealth",
    "FileEntry",
    "GhostEntry",
    "HealthReport",
    "HealthStatus",
    "IRSchemaError",
    "IRValidationMessage",
    "IRValidationResult",
    "ModuleDoc",
    "OrphanEntry",
    "PatternStatus",
    "Relationship",
    "ValidationReport",
    "deserialize",
    "load_ir_file",
    "serialize",
    "sort_modules",
    "validate_ir",
    "write_ir_file",
]
