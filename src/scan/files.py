"""Filesystem access for module source directories."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Collection
    from pathlib import Path

logger = logging.getLogger(__name__)


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool = False,
) -> Callable[[str], bool] | None:
    """Build a matcher answering "is this absolute path ignored?".

    Returns None when the root carries no applicable .gitignore.
    """
    root = root.resolve()
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def _is_ignored(path: Path, gitignore_matches: Callable[[str], bool]) -> bool:
    try:
        return bool(gitignore_matches(str(path.resolve())))
    except ValueError:
        # Paths outside the gitignore base directory are never ignored.
        return False


def list_directory_files(
    directory: Path,
    *,
    extensions: Collection[str] | None = None,
    gitignore_matches: Callable[[str], bool] | None = None,
) -> list[Path]:
    """List regular files directly inside directory (non-recursive).

    Args:
        directory: Directory to list
        extensions: Optional suffixes (e.g. ".rs") a file must carry
        gitignore_matches: Optional matcher; ignored files are skipped

    Returns:
        Paths sorted by filename. A missing or unreadable directory yields
        an empty list.
    """
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []

    files: list[Path] = []
    for path in entries:
        if not path.is_file():
            continue
        if path.is_symlink() and not _is_within_root(path, directory):
            continue
        if extensions is not None and path.suffix not in extensions:
            continue
        if gitignore_matches is not None and _is_ignored(path, gitignore_matches):
            continue
        files.append(path)

    files.sort(key=lambda p: p.name)
    return files


def read_sources(
    directory: Path, *, extensions: Collection[str]
) -> list[tuple[str, str]]:
    """Read every source file in directory carrying one of the extensions.

    Returns ``(filename, source_text)`` pairs sorted by filename. Files that
    cannot be read or decoded as UTF-8 are skipped.
    """
    sources: list[tuple[str, str]] = []
    for path in list_directory_files(directory, extensions=extensions):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("skipping unreadable source %s: %s", path, exc)
            continue
        sources.append((path.name, text))
    return sources


__all__ = ["build_gitignore_matcher", "list_directory_files", "read_sources"]
