"""Structural pattern heuristics for Rust source (tree-sitter-rust).

Some indicators (channel types, lazy statics) are matched on the raw text,
the rest are read from the syntax tree. Text indicators still apply to
files that do not parse cleanly; tree-based checks do not.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from heuristics.base import (
    COMMAND_METHODS,
    OBSERVER_METHODS,
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

_CHANNEL_INDICATORS = re.compile(
    r"mpsc::(Sender|Receiver|SyncSender|channel|sync_channel)"
    r"|crossbeam_channel"
    r"|broadcast::(Sender|Receiver)"
    r"|watch::(Sender|Receiver)"
    r"|->\s*(Sender|Receiver)\b"
)

_CALLBACK_INDICATORS = re.compile(
    r"\b(Box|Arc|Rc)\s*<\s*dyn\s+Fn(Mut|Once)?\s*\("
    r"|\bimpl\s+Fn(Mut|Once)?\s*\("
)

_FACTORY_RETURN = re.compile(r"->\s*(Box|Arc|Rc)\s*<\s*dyn\b")

_BOXED_DYN = re.compile(r"\b(Box|Arc|Rc)\s*<\s*dyn\s+([A-Za-z_][\w:]*)")

_SINGLETON_INDICATORS = re.compile(
    r"lazy_static!"
    r"|once_cell::sync::Lazy"
    r"|\bOnceLock\b"
    r"|\bOnceCell\b"
    r"|\bLazyLock\b"
    r"|\bstatic\s+ref\s"
    r"|\bfn\s+(get_)?instance\s*\("
)

_BUILD_METHOD = re.compile(r"\bfn\s+build\s*\(\s*(&\s*(mut\s+)?)?self\b")

_SELF_TYPE = re.compile(r"\bSelf\b")

_REFERENCE_PREFIX = re.compile(r"^&\s*('\w+\s+)?(mut\s+)?")


def _base_type_name(type_text: str) -> str:
    """Strip generics and path qualifiers: ``crate::a::Foo<T>`` -> ``Foo``."""
    head = type_text.split("<", 1)[0].strip()
    return head.rsplit("::", 1)[-1].strip()


def _is_pub(node: Node) -> bool:
    return any(
        node_text(child) == "pub" for child in iter_children(node, "visibility_modifier")
    )


def _returns_self(return_type: str, self_type: str) -> bool:
    if not return_type:
        return False
    if _SELF_TYPE.search(return_type):
        return True
    return _base_type_name(_REFERENCE_PREFIX.sub("", return_type)) == self_type


def _trait_method_names(root: Node) -> Iterator[str]:
    for trait in iter_descendants(root, "trait_item"):
        body = trait.child_by_field_name("body")
        for method in iter_children(body, "function_signature_item", "function_item"):
            yield field_text(method, "name")


def _impl_methods(impl: Node) -> Iterator[Node]:
    yield from iter_children(impl.child_by_field_name("body"), "function_item")


def _struct_fields(struct: Node) -> list[Node]:
    body = struct.child_by_field_name("body")
    if body is None or body.type != "field_declaration_list":
        return []
    return list(iter_children(body, "field_declaration"))


def _implemented_traits(root: Node) -> set[tuple[str, str]]:
    """Return (trait, implementing type) pairs of every ``impl Trait for Type``."""
    pairs: set[tuple[str, str]] = set()
    for impl in iter_descendants(root, "impl_item"):
        trait = impl.child_by_field_name("trait")
        if trait is None:
            continue
        pairs.add(
            (_base_type_name(node_text(trait)), _base_type_name(field_text(impl, "type")))
        )
    return pairs


def check_observer(source: str, filename: str = "<source>") -> bool:
    """Channels, callback parameters, or a trait with subscription methods."""
    if _CHANNEL_INDICATORS.search(source) or _CALLBACK_INDICATORS.search(source):
        return True

    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False
    return any(name in OBSERVER_METHODS for name in _trait_method_names(root))


def check_strategy(source: str, filename: str = "<source>") -> bool:
    """Any trait definition: an interchangeable behavior contract."""
    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False
    return next(iter_descendants(root, "trait_item"), None) is not None


def check_facade(source: str, filename: str = "<source>") -> bool:
    """At least one ``pub use`` re-export or two ``pub mod`` declarations."""
    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False

    pub_uses = sum(1 for item in iter_children(root, "use_declaration") if _is_pub(item))
    pub_mods = sum(1 for item in iter_children(root, "mod_item") if _is_pub(item))
    return pub_uses >= 1 or pub_mods >= 2


def check_builder(source: str, filename: str = "<source>") -> bool:
    """A ``build`` method, or two or more methods returning the implementing type."""
    root = parse_source("rust", source, filename=filename)
    if root is None:
        return _BUILD_METHOD.search(source) is not None

    for impl in iter_descendants(root, "impl_item"):
        self_type = _base_type_name(field_text(impl, "type"))
        self_returns = 0
        for method in _impl_methods(impl):
            if field_text(method, "name") == "build":
                return True
            return_type = field_text(method, "return_type")
            if _returns_self(return_type, self_type):
                self_returns += 1
        if self_returns >= 2:
            return True
    return False


def check_factory(source: str, filename: str = "<source>") -> bool:
    """A function returning a trait object / ``impl Trait``, or named create/make."""
    if _FACTORY_RETURN.search(source):
        return True

    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False

    for func in iter_descendants(root, "function_item", "function_signature_item"):
        if is_factory_name(field_text(func, "name")):
            return True
        return_type = func.child_by_field_name("return_type")
        if return_type is None:
            continue
        if return_type.type in ("abstract_type", "dynamic_type"):
            return True
        if next(iter_descendants(return_type, "dynamic_type"), None) is not None:
            return True
    return False


def check_adapter(source: str, filename: str = "<source>") -> bool:
    """A thin wrapper struct (one or two fields) that implements some trait."""
    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False

    implementing_types = {type_name for _, type_name in _implemented_traits(root)}
    return any(
        1 <= len(_struct_fields(struct)) <= 2
        and field_text(struct, "name") in implementing_types
        for struct in iter_descendants(root, "struct_item")
    )


def check_decorator(source: str, filename: str = "<source>") -> bool:
    """A struct holding ``Box<dyn T>``/``Arc<dyn T>`` that also implements T."""
    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False

    implemented = _implemented_traits(root)
    if not implemented:
        return False

    for struct in iter_descendants(root, "struct_item"):
        struct_name = field_text(struct, "name")
        for field in _struct_fields(struct):
            for match in _BOXED_DYN.finditer(field_text(field, "type")):
                wrapped = _base_type_name(match.group(2))
                if (wrapped, struct_name) in implemented:
                    return True
    return False


def check_singleton(source: str, filename: str = "<source>") -> bool:
    """Lazy/once statics or an ``instance()``/``get_instance()`` accessor."""
    return _SINGLETON_INDICATORS.search(source) is not None


def check_command(source: str, filename: str = "<source>") -> bool:
    """A trait declaring execute/run/invoke-style methods."""
    root = parse_source("rust", source, filename=filename)
    if root is None:
        return False
    return any(name in COMMAND_METHODS for name in _trait_method_names(root))


class RustPatternChecker(DispatchChecker):
    language = "rust"
    extensions = frozenset({".rs"})

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
    "RustPatternChecker",
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
