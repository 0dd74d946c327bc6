"""Schema validation for serialized architecture IR.

Validation is structural only: it checks shapes, required fields and enum
tokens, never cross-references between modules (a relationship target does
not have to name an existing module).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import orjson
from pydantic import ValidationError

from ir.models import ModuleDoc


@dataclass(frozen=True)
class IRValidationMessage:
    field: str
    message: str
    index: int | None = None

    def location(self) -> str:
        if self.index is None:
            return self.field or "<root>"
        if self.field:
            return f"[{self.index}].{self.field}"
        return f"[{self.index}]"


@dataclass
class IRValidationResult:
    errors: list[IRValidationMessage] = field(default_factory=list)
    modules: list[ModuleDoc] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        return "; ".join(
            f"{error.location()}: {error.message}" for error in self.errors
        )


def _format_loc(loc: tuple[int | str, ...]) -> str:
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)


def _describe_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def validate_payload(data: Any) -> IRValidationResult:
    """Validate already-decoded JSON data against the ModuleDoc[] schema."""
    result = IRValidationResult()

    if not isinstance(data, list):
        result.errors.append(
            IRValidationMessage(
                field="",
                message=f"Expected a JSON array of modules, got {_describe_type(data)}.",
            )
        )
        return result

    modules: list[ModuleDoc] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            result.errors.append(
                IRValidationMessage(
                    index=index,
                    field="",
                    message=f"Expected a module object, got {_describe_type(item)}.",
                )
            )
            continue

        try:
            modules.append(ModuleDoc.model_validate(item))
        except ValidationError as exc:
            for error in exc.errors():
                result.errors.append(
                    IRValidationMessage(
                        index=index,
                        field=_format_loc(tuple(error["loc"])),
                        message=f"{error['msg']}.",
                    )
                )

    if result.ok:
        result.modules = modules
    return result


def validate_ir(payload: str | bytes) -> IRValidationResult:
    """Validate a serialized IR payload.

    Never raises on malformed input; every problem is reported as an
    ``IRValidationMessage`` that names the offending module index and field.
    """
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        result = IRValidationResult()
        result.errors.append(IRValidationMessage(field="", message=f"Invalid JSON: {exc}."))
        return result

    return validate_payload(data)


__all__ = [
    "IRValidationMessage",
    "IRValidationResult",
    "validate_ir",
    "validate_payload",
]
