"""
Rule name -> node builder table.

Builder modules register themselves with `@builder("rule", ...)` at import
time; `freeze()` is called once after every builder module has been
imported and publishes the read-only `DISPATCH` mapping. Lookups for rules
without a registered builder fall back to `build_unsupported`, which keeps
the node as an `Unsupported` pass-through instead of failing.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from ..core.diagnostics import UnsupportedRuleError
from .ast import Node, Unsupported
from .cst import CstNode

if TYPE_CHECKING:
    from .transform import BuildContext

Builder = Callable[[CstNode, "BuildContext"], Any]

_REGISTRY: Dict[str, Builder] = {}
DISPATCH: Optional[Mapping[str, Builder]] = None


def builder(*rules: str) -> Callable[[Builder], Builder]:
    """Register the decorated function as the builder for `rules`."""

    def register(fn: Builder) -> Builder:
        if DISPATCH is not None:
            raise RuntimeError(f"dispatch table is frozen; cannot register {fn.__name__} for {rules}")
        for rule in rules:
            if rule in _REGISTRY:
                raise ValueError(f"duplicate builder for rule '{rule}': {_REGISTRY[rule].__name__} and {fn.__name__}")
            _REGISTRY[rule] = fn
        return fn

    return register


def freeze() -> Mapping[str, Builder]:
    global DISPATCH
    if DISPATCH is None:
        DISPATCH = MappingProxyType(dict(_REGISTRY))
    return DISPATCH


def lookup(rule: str) -> Builder:
    if DISPATCH is None:
        raise RuntimeError("dispatch table used before it was frozen")
    return DISPATCH.get(rule, build_unsupported)


def _flatten_nodes(value: Any):
    if isinstance(value, Node):
        yield value
    elif isinstance(value, tuple):
        for item in value:
            if isinstance(item, Node):
                yield item


def build_unsupported(node: CstNode, ctx: "BuildContext") -> Unsupported:
    """Default builder: keep the rule name, its source text and the converted children."""
    trees = node.trees()
    rng = node.range
    if not node.children and rng is None:
        raise UnsupportedRuleError(node.rule_name, range=rng)
    children = tuple(n for tree in trees for n in _flatten_nodes(ctx.value(tree)))
    return Unsupported(rule=node.rule_name, text=node.text(), children=children, range=ctx.range(node))


__all__ = ["DISPATCH", "Builder", "builder", "freeze", "lookup", "build_unsupported"]
