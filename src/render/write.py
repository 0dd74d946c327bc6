"""Rendering collaborator: turn the IR into persisted artifacts.

Rendering is pure templating over the IR. The drift detector depends only on
the ``Renderer`` protocol, so documentation back ends (markdown, diagrams)
plug in without the detector knowing about them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import orjson

from ir.codec import serialize_bytes
from ir.models import sort_modules

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ir.models import ModuleDoc

IR_JSON = "ir.json"
MODULES_DIR = "modules"


class Renderer(Protocol):
    def render_tree(self, docs: Sequence[ModuleDoc], out_dir: Path) -> list[str]:
        """Write all artifacts under out_dir; return their relative POSIX paths."""
        ...

    def render_document(self, docs: Sequence[ModuleDoc]) -> str:
        """Return the single canonical document for docs."""
        ...


def _artifact_path(out_dir: Path, relative: str) -> Path:
    path = (out_dir / relative).resolve()
    if not path.is_relative_to(out_dir.resolve()):
        msg = f"Artifact path escapes the artifacts directory: {relative!r}"
        raise ValueError(msg)
    return path


def _write_json(path: Path, obj: object) -> None:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    path.write_bytes(orjson.dumps(obj, option=opts) + b"\n")


class JsonArtifactRenderer:
    """Renders the IR as JSON artifacts.

    Tree layout::

        ir.json                     full serialized IR
        modules/<module_path>.json  one document per module

    The single-document form is the serialized IR itself.
    """

    def render_tree(self, docs: Sequence[ModuleDoc], out_dir: Path) -> list[str]:
        ordered = sort_modules(docs)
        modules_dir = out_dir / MODULES_DIR
        modules_dir.mkdir(parents=True, exist_ok=True)

        _artifact_path(out_dir, IR_JSON).write_bytes(serialize_bytes(ordered))
        written = [IR_JSON]

        for doc in ordered:
            relative = f"{MODULES_DIR}/{doc.module_path}.json"
            path = _artifact_path(out_dir, relative)
            _write_json(path, doc.model_dump(mode="json"))
            written.append(relative)

        return written

    def render_document(self, docs: Sequence[ModuleDoc]) -> str:
        return serialize_bytes(sort_modules(docs)).decode("utf-8")


__all__ = ["IR_JSON", "MODULES_DIR", "JsonArtifactRenderer", "Renderer"]
