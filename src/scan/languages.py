"""Source language profiles used by catalog validation and pattern scanning."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class LanguageProfile:
    """Source extensions and structural entry files for one language.

    Structural files (module entry points such as ``mod.rs`` or
    ``__init__.py``) carry the annotation itself and are never expected in
    a module's file catalog.
    """

    name: str
    extensions: frozenset[str]
    structural_files: frozenset[str]

    def is_source(self, filename: str) -> bool:
        return PurePath(filename).suffix in self.extensions

    def is_structural(self, filename: str) -> bool:
        return filename in self.structural_files


RUST = LanguageProfile(
    name="rust",
    extensions=frozenset({".rs"}),
    structural_files=frozenset({"mod.rs", "lib.rs", "main.rs"}),
)

PYTHON = LanguageProfile(
    name="python",
    extensions=frozenset({".py"}),
    structural_files=frozenset({"__init__.py", "__main__.py", "conftest.py"}),
)

TYPESCRIPT = LanguageProfile(
    name="typescript",
    extensions=frozenset({".ts", ".tsx"}),
    structural_files=frozenset({"index.ts", "index.tsx"}),
)

LANGUAGE_PROFILES: tuple[LanguageProfile, ...] = (RUST, PYTHON, TYPESCRIPT)

# Fallback for annotations extracted from files of no known language.
ANY_LANGUAGE = LanguageProfile(
    name="any",
    extensions=frozenset().union(*(p.extensions for p in LANGUAGE_PROFILES)),
    structural_files=frozenset().union(
        *(p.structural_files for p in LANGUAGE_PROFILES)
    ),
)


def profile_for_file(filename: str) -> LanguageProfile | None:
    """Return the profile whose extensions cover filename, if any."""
    suffix = PurePath(filename).suffix
    for profile in LANGUAGE_PROFILES:
        if suffix in profile.extensions:
            return profile
    return None


def profile_for_source_file(source_file: str) -> LanguageProfile:
    return profile_for_file(source_file) or ANY_LANGUAGE


__all__ = [
    "ANY_LANGUAGE",
    "LANGUAGE_PROFILES",
    "PYTHON",
    "RUST",
    "TYPESCRIPT",
    "LanguageProfile",
    "profile_for_file",
    "profile_for_source_file",
]
