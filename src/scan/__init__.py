"""Filesystem collaborators: language profiles, listings and source reads."""

from scan.files import build_gitignore_matcher, list_directory_files, read_sources
from scan.languages import (
    ANY_LANGUAGE,
    LANGUAGE_PROFILES,
    LanguageProfile,
    profile_for_file,
    profile_for_source_file,
)

__all__ = [
    "ANY_LANGUAGE",
    "LANGUAGE_PROFILES",
    "LanguageProfile",
    "build_gitignore_matcher",
    "list_directory_files",
    "profile_for_file",
    "profile_for_source_file",
    "read_sources",
]
