from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from lark import Tree

from ..core.diagnostics import ParseError, ParseResult, ParserError, StructuralError
from ..core.options import ParseOptions
from ..core.span import Range, range_of, source_range
from . import dispatch
from . import builders  # noqa: F401  (registers every builder and freezes the table)
from .ast import ErrorNode, Node, SourceUnit
from .cst import CstNode
from .engine import ConcreteTree

logger = logging.getLogger(__name__)


class BuildContext:
    """
    Per-parse state shared by the builders.

    Holds the already-converted value of every CST node visited so far
    (keyed by node identity); builders read their children's values from
    here instead of recursing.
    """

    def __init__(self, source: str, options: ParseOptions) -> None:
        self.source = source
        self.options = options
        self._values: Dict[int, Any] = {}

    def store(self, tree: Tree, value: Any) -> None:
        self._values[id(tree)] = value

    def value(self, child: Any) -> Any:
        """Converted value of `child` (a Lark tree or CstNode); None for a missing child."""
        if child is None:
            return None
        tree = child.tree if isinstance(child, CstNode) else child
        try:
            return self._values[id(tree)]
        except KeyError:
            raise LookupError(f"CST node '{tree.data}' has not been converted yet") from None

    def values(self, child: Any) -> Tuple[Any, ...]:
        """Converted value of a list-producing child, always as a tuple."""
        value = self.value(child)
        if value is None:
            return ()
        if isinstance(value, tuple):
            return value
        # A list rule that failed in tolerant mode converts to a single ErrorNode.
        return (value,)

    def range(self, *parts: Any) -> Optional[Range]:
        if not self.options.include_ranges:
            return None
        return range_of(*parts)


def _sort_key(error: ParseError) -> Tuple[int, int]:
    if error.range is None:
        return (1, 0)
    return (0, error.range.start_offset)


def build_value(tree: Tree, source: str, options: ParseOptions, errors: List[ParseError]) -> Any:
    """
    Convert the CST rooted at `tree` bottom-up with an explicit work stack.

    Structural failures raise ParserError in strict mode. In tolerant mode
    they are appended to `errors` and the failing node becomes an ErrorNode.
    """
    ctx = BuildContext(source, options)
    stack: List[Tuple[Tree, bool]] = [(tree, False)]
    while stack:
        current, expanded = stack.pop()
        if not expanded:
            stack.append((current, True))
            for child in reversed(current.children):
                if isinstance(child, Tree):
                    stack.append((child, False))
            continue
        node = CstNode(current, source)
        try:
            value = dispatch.lookup(node.rule_name)(node, ctx)
        except StructuralError as err:
            if not options.tolerant:
                raise ParserError([*errors, err.to_parse_error()]) from err
            logger.debug("substituting error node for %s: %s", node.rule_name, err)
            errors.append(err.to_parse_error())
            value = ErrorNode(message=str(err), rule=node.rule_name, range=ctx.range(node))
        ctx.store(current, value)
    return ctx.value(tree)


def transform(cst: ConcreteTree, options: Optional[ParseOptions] = None) -> ParseResult:
    """
    Convert an engine result into a ParseResult.

    Errors already recorded by the engine are kept first, in source order,
    followed by anything the builders report. In strict mode any engine
    error is fatal.
    """
    options = ParseOptions.coerce(options)
    errors: List[ParseError] = sorted(cst.errors, key=_sort_key)
    if errors and not options.tolerant:
        raise ParserError(errors)
    engine_count = len(errors)
    value = build_value(cst.tree, cst.source, options, errors)
    if not isinstance(value, SourceUnit):
        children = value if isinstance(value, tuple) else (value,)
        value = SourceUnit(children=tuple(c for c in children if isinstance(c, Node)))
    if options.include_ranges:
        value = replace(value, range=source_range(cst.source))
    errors = errors[:engine_count] + sorted(errors[engine_count:], key=_sort_key)
    logger.debug("transform produced %d top-level nodes, %d errors", len(value.children), len(errors))
    return ParseResult(root=value, errors=tuple(errors))


__all__ = ["BuildContext", "build_value", "transform"]
