from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import build_gitignore_matcher, list_directory_files, read_sources
from scan.languages import ANY_LANGUAGE, PYTHON, RUST, profile_for_source_file

if TYPE_CHECKING:
    from pathlib import Path


def test_list_directory_files_is_sorted_and_filtered(tmp_path: Path) -> None:
    for name in ("b.rs", "a.rs", "notes.md"):
        (tmp_path / name).write_text("", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.rs").write_text("", encoding="utf-8")

    names = [p.name for p in list_directory_files(tmp_path, extensions={".rs"})]

    assert names == ["a.rs", "b.rs"]
    assert [p.name for p in list_directory_files(tmp_path)] == [
        "a.rs",
        "b.rs",
        "notes.md",
    ]


def test_list_directory_files_missing_dir(tmp_path: Path) -> None:
    assert list_directory_files(tmp_path / "absent") == []


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlink_escaping_directory_is_skipped(tmp_path: Path) -> None:
    module_dir = tmp_path / "module"
    module_dir.mkdir()
    (module_dir / "local.rs").write_text("", encoding="utf-8")

    external = tmp_path / "external"
    external.mkdir()
    (external / "leak.rs").write_text("", encoding="utf-8")
    (module_dir / "leak.rs").symlink_to(external / "leak.rs")

    assert [p.name for p in list_directory_files(module_dir)] == ["local.rs"]


def test_root_gitignore_matcher(tmp_path: Path) -> None:
    assert build_gitignore_matcher(tmp_path) is None

    (tmp_path / ".gitignore").write_text("*.gen.rs\n", encoding="utf-8")
    module_dir = tmp_path / "src"
    module_dir.mkdir()
    (module_dir / "api.rs").write_text("", encoding="utf-8")
    (module_dir / "api.gen.rs").write_text("", encoding="utf-8")

    matcher = build_gitignore_matcher(tmp_path)
    assert matcher is not None

    names = [p.name for p in list_directory_files(module_dir, gitignore_matches=matcher)]
    assert names == ["api.rs"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "pkg").mkdir()
    (repo_root / "pkg" / "module.py").write_text("print('ok')\n", encoding="utf-8")
    (repo_root / ".gitignore").write_text("*.bin\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text(
        "pkg/module.py\n", encoding="utf-8"
    )

    symlink_gitignore = repo_root / "pkg" / ".gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "pkg" / "module.py")) is False


def test_read_sources_skips_undecodable(tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("x = 1\n", encoding="utf-8")
    (tmp_path / "b.py").write_bytes(b"\xff\xfe")

    assert read_sources(tmp_path, extensions={".py"}) == [("a.py", "x = 1\n")]


def test_profile_for_source_file() -> None:
    assert profile_for_source_file("src/agent/mod.rs") is RUST
    assert profile_for_source_file("pkg/__init__.py") is PYTHON
    assert profile_for_source_file("docs/agent.md") is ANY_LANGUAGE
    assert RUST.is_structural("mod.rs")
    assert not RUST.is_structural("lanes.rs")
    assert ANY_LANGUAGE.is_source("index.tsx")
