"""Shared utilities for archidoc-core."""

from __future__ import annotations

from pathlib import Path


def parent_container_of(module_path: str) -> str | None:
    """Return the container a module path nests under.

    Args:
        module_path: Dot-separated module path (e.g., "bus.calc.indicators")

    Returns:
        The first path segment for nested paths, None for top-level paths.

    Examples:
        >>> parent_container_of("bus.calc.indicators")
        'bus'
        >>> parent_container_of("bus") is None
        True
    """
    if "." not in module_path:
        return None
    return module_path.split(".", 1)[0]


def source_dir_of(source_file: str) -> Path | None:
    """Return the directory holding a module's annotated source file.

    An empty source_file has no directory. A bare filename resolves to the
    current directory, matching how relative paths are read elsewhere.

    Examples:
        >>> source_dir_of("src/bus/mod.rs").as_posix()
        'src/bus'
        >>> source_dir_of("") is None
        True
    """
    if not source_file.strip():
        return None
    return Path(source_file).parent


def is_bare_filename(name: str) -> bool:
    """Return True if name is a single path component usable as a filename.

    Examples:
        >>> is_bare_filename("ARCHITECTURE.json")
        True
        >>> is_bare_filename("../x.json")
        False
    """
    if name in ("", ".", ".."):
        return False
    return not any(char in name for char in ("/", "\\", "\0"))


def module_path_problem(module_path: str) -> str | None:
    """Describe why module_path is not a valid dot-separated path, or None.

    Segments must be non-empty and free of path separators, so
    ``<module_path>.json`` is always a plain filename.

    Examples:
        >>> module_path_problem("api.handlers") is None
        True
        >>> module_path_problem("api/v1")
        "module_path must not contain path separators: 'api/v1'"
    """
    if not module_path.strip():
        return "module_path must not be empty"
    if any(not segment for segment in module_path.split(".")):
        return f"module_path has an empty segment: {module_path!r}"
    if not is_bare_filename(module_path):
        return f"module_path must not contain path separators: {module_path!r}"
    return None


__all__ = [
    "is_bare_filename",
    "module_path_problem",
    "parent_container_of",
    "source_dir_of",
]
