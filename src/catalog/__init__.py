"""Declared file catalog checks (ghost and orphan detection)."""

from catalog.validate import format_validation_report, validate_file_tables

__all__ = ["format_validation_report", "validate_file_tables"]
