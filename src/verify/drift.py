"""Documentation drift detection."""

from __future__ import annotations

import filecmp
import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from ir.reports import DriftedFile, DriftReport
from render.write import JsonArtifactRenderer
from utils import is_bare_filename

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ir.models import ModuleDoc
    from render.write import Renderer

logger = logging.getLogger(__name__)

DriftStrategy = Literal["tree", "document"]

DEFAULT_DOCUMENT_NAME = "ARCHITECTURE.json"


def _list_files(root: Path) -> set[Path]:
    return {path for path in root.rglob("*") if path.is_file()}


def _list_relative_files(root: Path) -> set[Path]:
    if not root.is_dir():
        return set()
    return {path.relative_to(root) for path in _list_files(root)}


def _count_lines(data: bytes) -> int:
    return len(data.decode("utf-8", errors="replace").splitlines())


def _check_tree(
    docs: Sequence[ModuleDoc], artifacts_dir: Path, renderer: Renderer
) -> DriftReport:
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        renderer.render_tree(docs, temp_path)

        persisted_files = _list_relative_files(artifacts_dir)
        expected_files = _list_relative_files(temp_path)

        missing = sorted(p.as_posix() for p in expected_files - persisted_files)
        extra = sorted(p.as_posix() for p in persisted_files - expected_files)

        drifted: list[DriftedFile] = []
        for path in sorted(expected_files & persisted_files):
            expected_path = temp_path / path
            persisted_path = artifacts_dir / path
            if not filecmp.cmp(persisted_path, expected_path, shallow=False):
                drifted.append(
                    DriftedFile(
                        path=path.as_posix(),
                        expected_lines=_count_lines(expected_path.read_bytes()),
                        actual_lines=_count_lines(persisted_path.read_bytes()),
                    )
                )

    return DriftReport(drifted_files=drifted, missing_files=missing, extra_files=extra)


def _check_document(
    docs: Sequence[ModuleDoc],
    artifacts_dir: Path,
    renderer: Renderer,
    document_name: str,
) -> DriftReport:
    report = DriftReport()
    expected = renderer.render_document(docs)
    document_path = artifacts_dir / document_name

    if not document_path.is_file():
        report.missing_files.append(document_name)
        return report

    actual_bytes = document_path.read_bytes()
    expected_bytes = expected.encode("utf-8")
    if actual_bytes != expected_bytes:
        report.drifted_files.append(
            DriftedFile(
                path=document_name,
                expected_lines=_count_lines(expected_bytes),
                actual_lines=_count_lines(actual_bytes),
            )
        )
    return report


def _require_document_name(document_name: str) -> None:
    if not is_bare_filename(document_name):
        msg = f"Document name must be a bare filename: {document_name!r}"
        raise ValueError(msg)


def _remove_stale(artifacts_dir: Path, written: Sequence[str]) -> None:
    keep = {Path(relative) for relative in written}
    stale = sorted(_list_relative_files(artifacts_dir) - keep)
    for path in stale:
        (artifacts_dir / path).unlink()
        logger.debug("Removed stale artifact %s", path.as_posix())

    # Deepest directories first so parents empty out before they are checked.
    directories = sorted(
        (p for p in artifacts_dir.rglob("*") if p.is_dir()),
        key=lambda p: len(p.parts),
        reverse=True,
    )
    for directory in directories:
        if not any(directory.iterdir()):
            directory.rmdir()


def check_drift(
    docs: Sequence[ModuleDoc],
    *,
    artifacts_dir: Path,
    strategy: DriftStrategy = "tree",
    renderer: Renderer | None = None,
    document_name: str = DEFAULT_DOCUMENT_NAME,
) -> DriftReport:
    """Compare artifacts derivable from docs against the persisted ones.

    Args:
        docs: Current IR.
        artifacts_dir: Directory holding the last published artifacts. A
            missing directory reports every expected artifact as missing.
        strategy: "tree" renders every artifact into a scratch directory and
            diffs the trees by relative path; "document" renders one
            canonical document and byte-compares it.
        renderer: Rendering collaborator (default: JsonArtifactRenderer).
        document_name: Persisted file compared by the "document" strategy.

    Returns:
        DriftReport with sorted drifted, missing and extra relative paths.

    Raises:
        NotADirectoryError: If artifacts_dir exists but is not a directory.
        ValueError: If strategy is not recognized or document_name is not a
            bare filename.
    """
    _require_document_name(document_name)
    if artifacts_dir.exists() and not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    renderer = renderer or JsonArtifactRenderer()
    if strategy == "tree":
        return _check_tree(docs, artifacts_dir, renderer)
    if strategy == "document":
        return _check_document(docs, artifacts_dir, renderer, document_name)

    msg = f"Unknown drift strategy: {strategy!r}"
    raise ValueError(msg)


def publish_artifacts(
    docs: Sequence[ModuleDoc],
    *,
    artifacts_dir: Path,
    strategy: DriftStrategy = "tree",
    renderer: Renderer | None = None,
    document_name: str = DEFAULT_DOCUMENT_NAME,
) -> list[str]:
    """Write the artifacts that check_drift compares against.

    Returns the relative paths written. In "tree" mode files left over from
    an earlier publish are removed, so a following check reports no drift.
    """
    _require_document_name(document_name)
    renderer = renderer or JsonArtifactRenderer()
    artifacts_dir.mkdir(parents=True, exist_ok=True)

    if strategy == "tree":
        written = renderer.render_tree(docs, artifacts_dir)
        _remove_stale(artifacts_dir, written)
        return written
    if strategy == "document":
        (artifacts_dir / document_name).write_text(
            renderer.render_document(docs), encoding="utf-8"
        )
        return [document_name]

    msg = f"Unknown drift strategy: {strategy!r}"
    raise ValueError(msg)


def format_drift_report(report: DriftReport) -> str:
    """Format a drift report as human-readable text."""
    if not report.has_drift:
        return "Documentation is up to date.\n"

    lines = ["Documentation drift detected!", ""]

    if report.drifted_files:
        lines.append(f"Changed files ({len(report.drifted_files)}):")
        lines.extend(
            f"  {f.path} (expected {f.expected_lines} lines, got {f.actual_lines})"
            for f in report.drifted_files
        )

    for label, paths in (
        ("Missing files", report.missing_files),
        ("Extra files", report.extra_files),
    ):
        if paths:
            lines.append(f"{label} ({len(paths)}):")
            lines.extend(f"  {path}" for path in paths)

    lines.extend(["", "Run `archidoc publish` to regenerate."])
    return "\n".join(lines) + "\n"


__all__ = [
    "DEFAULT_DOCUMENT_NAME",
    "DriftStrategy",
    "check_drift",
    "format_drift_report",
    "publish_artifacts",
]
