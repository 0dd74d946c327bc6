"""JSON (de)serialization of the architecture IR.

The wire format is a JSON array of ModuleDoc objects with lowercase enum
tokens. Serialization is deterministic: field order follows the model,
indentation is fixed, and the output always ends with a newline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from ir.validation import validate_ir

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ir.models import ModuleDoc


class IRSchemaError(ValueError):
    """Raised when a serialized IR payload does not conform to the schema."""

    def __init__(self, message: str, errors: list[object] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


def to_payload(docs: Iterable[ModuleDoc]) -> list[dict[str, object]]:
    return [doc.model_dump(mode="json") for doc in docs]


def serialize(docs: Iterable[ModuleDoc]) -> str:
    """Serialize ModuleDocs to the portable JSON IR."""
    return serialize_bytes(docs).decode("utf-8")


def serialize_bytes(docs: Iterable[ModuleDoc]) -> bytes:
    return orjson.dumps(to_payload(docs), option=orjson.OPT_INDENT_2) + b"\n"


def deserialize(payload: str | bytes) -> list[ModuleDoc]:
    """Deserialize JSON IR into ModuleDocs.

    Raises:
        IRSchemaError: If the payload is malformed or does not conform to
            the ModuleDoc[] schema.
    """
    result = validate_ir(payload)
    if not result.ok:
        msg = f"invalid IR: {result.summary()}"
        raise IRSchemaError(msg, list(result.errors))
    return result.modules


def load_ir_file(path: Path) -> list[ModuleDoc]:
    """Read and deserialize an IR file."""
    try:
        payload = path.read_bytes()
    except OSError as exc:
        msg = f"invalid IR: failed to read {path}: {exc}"
        raise IRSchemaError(msg) from exc
    return deserialize(payload)


def write_ir_file(path: Path, docs: Iterable[ModuleDoc]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(serialize_bytes(docs))


__all__ = [
    "IRSchemaError",
    "deserialize",
    "load_ir_file",
    "serialize",
    "serialize_bytes",
    "to_payload",
    "write_ir_file",
]
