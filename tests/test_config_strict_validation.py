from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, load_config, resolve_output_dir
from verify.fitness import available_fitness_functions


def _write_config(root: Path, toml_content: str) -> None:
    (root / "archidoc.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == "docs/generated"
    assert config.drift.strategy == "tree"
    assert config.drift.document == "ARCHITECTURE.json"
    assert config.catalog.respect_gitignore is True
    assert config.fitness.functions == available_fitness_functions()


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path).output_dir == "docs/generated"


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_nested_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[drift]
strategy = "tree"
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_drift_strategy_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[drift]\nstrategy = "html"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_fitness_function_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[fitness]\nfunctions = ["all_modules_are_pretty"]\n')

    with pytest.raises(ConfigError, match="all_modules_are_pretty"):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "output_dir = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
output_dir = "build/architecture"

[drift]
strategy = "document"
document = "ARCHITECTURE.md"

[catalog]
respect_gitignore = false

[fitness]
functions = ["all_strategy_modules_define_a_trait"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.output_dir == "build/architecture"
    assert config.drift.strategy == "document"
    assert config.drift.document == "ARCHITECTURE.md"
    assert config.catalog.respect_gitignore is False
    assert config.fitness.functions == ["all_strategy_modules_define_a_trait"]


def test_resolve_output_dir_stays_within_root(tmp_path: Path) -> None:
    resolved = resolve_output_dir(tmp_path, "docs/generated")

    assert resolved == (tmp_path / "docs" / "generated").resolve()


@pytest.mark.parametrize("output_dir", ["", "~/docs", "/tmp/docs"])
def test_resolve_output_dir_rejects_non_relative(tmp_path: Path, output_dir: str) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


def test_resolve_output_dir_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="escapes the project root"):
        resolve_output_dir(tmp_path / "repo", "../outside")


@pytest.mark.parametrize("document", ["../../x.json", "docs/ARCHITECTURE.json", ""])
def test_drift_document_must_be_a_bare_filename(tmp_path: Path, document: str) -> None:
    _write_config(tmp_path, f'[drift]\ndocument = "{document}"\n')

    with pytest.raises(ConfigError, match="bare filename"):
        load_config(tmp_path)


def test_nested_gitignore_option(tmp_path: Path) -> None:
    assert load_config(tmp_path).catalog.nested_gitignore is False

    _write_config(tmp_path, "[catalog]\nnested_gitignore = true\n")

    assert load_config(tmp_path).catalog.nested_gitignore is True
