"""Structural pattern heuristics for Python source (tree-sitter-python).

An "interface" in Python is a class deriving from ``ABC``/``Protocol`` (or
using ``ABCMeta``), or one declaring an ``@abstractmethod``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from heuristics.base import (
    COMMAND_METHODS,
    OBSERVER_METHODS,
    SINGLETON_ACCESSORS,
    DispatchChecker,
    Pattern,
    is_factory_name,
)
from heuristics.treesitter import (
    field_text,
    iter_children,
    iter_descendants,
    node_text,
    parse_source,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from tree_sitter import Node

_INTERFACE_BASES = re.compile(r"\b(ABC|ABCMeta|Protocol)\b")

_NON_IMPLEMENTING_BASES = frozenset({"object", "ABC", "ABCMeta", "Protocol", "Generic"})

_CALLBACK_TYPE = re.compile(r"\bCallable\b")

_CHANNEL_INDICATORS = re.compile(
    r"\b(queue|asyncio|multiprocessing)\.(Simple|Lifo|Priority|Joinable)?Queue\b"
    r"|\bmultiprocessing\.Pipe\b"
)

_CACHE_DECORATOR = re.compile(r"^@\s*(functools\.)?(cache|lru_cache)\b")


@dataclass
class _ClassInfo:
    name: str
    bases: list[str]
    methods: dict[str, Node] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)
    class_vars: set[str] = field(default_factory=set)
    is_interface: bool = False

    @property
    def implements(self) -> list[str]:
        return [base for base in self.bases if base not in _NON_IMPLEMENTING_BASES]


def _base_name(text: str) -> str:
    """Reduce an annotation or base expression to its bare type name.

    ``"pkg.Handler"`` -> ``Handler``; ``Optional[Handler]`` -> ``Optional``.
    """
    head = text.strip().strip("\"'").split("[", 1)[0].strip()
    return head.rsplit(".", 1)[-1]


def _unwrap_definition(node: Node) -> tuple[Node, list[str]]:
    """Return the definition under a decorated_definition plus decorator texts."""
    if node.type != "decorated_definition":
        return node, []
    decorators = [node_text(d) for d in iter_children(node, "decorator")]
    definition = node.child_by_field_name("definition")
    return (definition if definition is not None else node), decorators


def _iter_functions(body: Node | None) -> Iterator[tuple[Node, list[str]]]:
    for child in iter_children(body, "function_definition", "decorated_definition"):
        definition, decorators = _unwrap_definition(child)
        if definition.type == "function_definition":
            yield definition, decorators


def _class_bases(class_node: Node) -> list[str]:
    superclasses = class_node.child_by_field_name("superclasses")
    bases: list[str] = []
    for arg in iter_children(superclasses):
        if arg.type == "keyword_argument":
            if field_text(arg, "name") == "metaclass":
                bases.append(_base_name(field_text(arg, "value")))
            continue
        bases.append(_base_name(node_text(arg)))
    return bases


def _instance_attributes(init: Node) -> dict[str, str]:
    """Collect ``self.x = ...`` / ``self.x: T = ...`` assignments in __init__.

    Values are the annotation text, or the type of the assigned parameter.
    """
    param_types: dict[str, str] = {}
    for param in iter_children(
        init.child_by_field_name("parameters"),
        "typed_parameter",
        "typed_default_parameter",
    ):
        name_node = param.child_by_field_name("name")
        if name_node is None:
            name_node = next(iter_children(param, "identifier"), None)
        param_types[node_text(name_node)] = field_text(param, "type")

    attributes: dict[str, str] = {}
    for assignment in iter_descendants(init, "assignment"):
        left = assignment.child_by_field_name("left")
        if left is None or left.type != "attribute":
            continue
        if field_text(left, "object") != "self":
            continue
        name = field_text(left, "attribute")
        annotation = field_text(assignment, "type")
        if not annotation:
            annotation = param_types.get(field_text(assignment, "right"), "")
        attributes.setdefault(name, annotation)
    return attributes


def _class_body_attributes(body: Node | None) -> tuple[dict[str, str], set[str]]:
    """Collect class-level assignments.

    Returns annotated fields (``x: T`` as in dataclasses) and every assigned
    class variable name.
    """
    attributes: dict[str, str] = {}
    class_vars: set[str] = set()
    for statement in iter_children(body, "expression_statement"):
        for assignment in iter_children(statement, "assignment"):
            annotation = field_text(assignment, "type")
            left = assignment.child_by_field_name("left")
            if left is None or left.type != "identifier":
                continue
            class_vars.add(node_text(left))
            if annotation:
                attributes[node_text(left)] = annotation
    return attributes, class_vars


def _collect_classes(root: Node) -> list[_ClassInfo]:
    classes: list[_ClassInfo] = []
    for class_node in iter_descendants(root, "class_definition"):
        info = _ClassInfo(
            name=field_text(class_node, "name"), bases=_class_bases(class_node)
        )
        body = class_node.child_by_field_name("body")
        has_abstract = False
        for method, decorators in _iter_functions(body):
            info.methods[field_text(method, "name")] = method
            if any("abstractmethod" in d for d in decorators):
                has_abstract = True

        info.attributes, info.class_vars = _class_body_attributes(body)
        init = info.methods.get("__init__")
        if init is not None:
            for name, annotation in _instance_attributes(init).items():
                info.attributes.setdefault(name, annotation)

        info.is_interface = has_abstract or any(
            _INTERFACE_BASES.search(base) for base in info.bases
        )
        classes.append(info)
    return classes


def _is_public(name: str) -> bool:
    return not name.startswith("_") or (name.startswith("__") and name.endswith("__"))


def _parse(source: str, filename: str) -> Node | None:
    return parse_source("python", source, filename=filename)


def check_observer(source: str, filename: str = "<source>") -> bool:
    """Queues/pipes, public callback parameters, or subscription interface methods."""
    if _CHANNEL_INDICATORS.search(source):
        return True

    root = _parse(source, filename)
    if root is None:
        return False

    for func in iter_descendants(root, "function_definition"):
        if not _is_public(field_text(func, "name")):
            continue
        for param in iter_children(
            func.child_by_field_name("parameters"),
            "typed_parameter",
            "typed_default_parameter",
        ):
            if _CALLBACK_TYPE.search(field_text(param, "type")):
                return True

    return any(
        name in OBSERVER_METHODS
        for info in _collect_classes(root)
        if info.is_interface
        for name in info.methods
    )


def check_strategy(source: str, filename: str = "<source>") -> bool:
    """Any interface class."""
    root = _parse(source, filename)
    if root is None:
        return False
    return any(info.is_interface for info in _collect_classes(root))


def _all_names(root: Node) -> set[str]:
    names: set[str] = set()
    for statement in iter_children(root, "expression_statement"):
        for assignment in iter_children(statement, "assignment"):
            if field_text(assignment, "left") != "__all__":
                continue
            right = assignment.child_by_field_name("right")
            for item in iter_descendants(right, "string"):
                names.add(node_text(item).strip("\"'"))
    return names


def _imported_names(import_node: Node) -> Iterator[tuple[str, str, bool]]:
    """Yield (imported name, bound name, explicitly aliased) per imported name."""
    for name_node in import_node.children_by_field_name("name"):
        if name_node.type == "aliased_import":
            yield field_text(name_node, "name"), field_text(name_node, "alias"), True
            continue
        text = node_text(name_node)
        if import_node.type == "import_statement":
            yield text, text.split(".", 1)[0], False
        else:
            yield text, text, False


def _relative_submodules(statement: Node) -> list[str]:
    """Sub-modules named by ``from .a import x`` or ``from . import a, b``."""
    module_name = statement.child_by_field_name("module_name")
    if module_name is None or module_name.type != "relative_import":
        return []
    dotted = node_text(next(iter_children(module_name, "dotted_name"), None))
    if dotted:
        return [dotted.split(".", 1)[0]]
    return [name for name, _, _ in _imported_names(statement)]


def check_facade(source: str, filename: str = "<source>") -> bool:
    """A re-export, or two public sub-modules referenced through relative imports.

    Re-exports are imported names listed in ``__all__`` and redundant
    aliases (``from x import y as y``).
    """
    root = _parse(source, filename)
    if root is None:
        return False

    exported = _all_names(root)
    submodules: set[str] = set()

    for statement in iter_children(root, "import_statement", "import_from_statement"):
        for name, bound, aliased in _imported_names(statement):
            if bound in exported or (aliased and name == bound):
                return True

        if statement.type == "import_from_statement":
            submodules.update(
                name for name in _relative_submodules(statement) if _is_public(name)
            )

    return len(submodules) >= 2


def check_builder(source: str, filename: str = "<source>") -> bool:
    """A ``build`` method, or two or more methods annotated to return the class."""
    root = _parse(source, filename)
    if root is None:
        return False

    for info in _collect_classes(root):
        if "build" in info.methods:
            return True
        self_returns = sum(
            1
            for method in info.methods.values()
            if _base_name(field_text(method, "return_type")) in (info.name, "Self")
        )
        if self_returns >= 2:
            return True
    return False


def check_factory(source: str, filename: str = "<source>") -> bool:
    """A function returning an interface declared in the file, or named create/make."""
    root = _parse(source, filename)
    if root is None:
        return False

    interfaces = {info.name for info in _collect_classes(root) if info.is_interface}
    for func in iter_descendants(root, "function_definition"):
        if is_factory_name(field_text(func, "name")):
            return True
        return_type = field_text(func, "return_type")
        if return_type and _base_name(return_type) in interfaces:
            return True
    return False


def check_adapter(source: str, filename: str = "<source>") -> bool:
    """A class implementing some base while holding only one or two attributes."""
    root = _parse(source, filename)
    if root is None:
        return False

    return any(
        not info.is_interface and info.implements and 1 <= len(info.attributes) <= 2
        for info in _collect_classes(root)
    )


def check_decorator(source: str, filename: str = "<source>") -> bool:
    """A class deriving from T that also holds an attribute typed T."""
    root = _parse(source, filename)
    if root is None:
        return False

    for info in _collect_classes(root):
        wrapped = {_base_name(a) for a in info.attributes.values() if a}
        if wrapped.intersection(info.implements):
            return True
    return False


def check_singleton(source: str, filename: str = "<source>") -> bool:
    """An ``instance()`` accessor, an ``_instance`` slot, or a cached zero-arg function."""
    root = _parse(source, filename)
    if root is None:
        return False

    for info in _collect_classes(root):
        if SINGLETON_ACCESSORS.intersection(info.methods):
            return True
        if "_instance" in info.attributes or "_instance" in info.class_vars:
            return True

    for func in iter_children(root, "function_definition", "decorated_definition"):
        definition, decorators = _unwrap_definition(func)
        if definition.type != "function_definition":
            continue
        if field_text(definition, "name") in SINGLETON_ACCESSORS:
            return True
        params = definition.child_by_field_name("parameters")
        if params is not None and not params.named_children and any(
            _CACHE_DECORATOR.match(d) for d in decorators
        ):
            return True

    return "cls._instance" in source


def check_command(source: str, filename: str = "<source>") -> bool:
    """An interface declaring execute/run/undo-style methods."""
    root = _parse(source, filename)
    if root is None:
        return False
    return any(
        name in COMMAND_METHODS
        for info in _collect_classes(root)
        if info.is_interface
        for name in info.methods
    )


class PythonPatternChecker(DispatchChecker):
    language = "python"
    extensions = frozenset({".py"})

    def _checks(self) -> dict[Pattern, Callable[[str, str], bool]]:
        return {
            Pattern.OBSERVER: check_observer,
            Pattern.STRATEGY: check_strategy,
            Pattern.FACADE: check_facade,
            Pattern.BUILDER: check_builder,
            Pattern.FACTORY: check_factory,
            Pattern.ADAPTER: check_adapter,
            Pattern.DECORATOR: check_decorator,
            Pattern.SINGLETON: check_singleton,
            Pattern.COMMAND: check_command,
        }


__all__ = [
    "PythonPatternChecker",
    "check_adapter",
    "check_builder",
    "check_command",
    "check_decorator",
    "check_facade",
    "check_factory",
    "check_observer",
    "check_singleton",
    "check_strategy",
]
