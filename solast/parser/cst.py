from __future__ import annotations

from typing import List, Optional, Tuple, Union

from lark import Token, Tree

from ..core.diagnostics import MalformedCstError
from ..core.span import Range, range_of

Child = Union[Tree, Token]


def label(node: Child) -> str:
    """Label of a CST child: rule name for trees, terminal name for tokens."""
    if isinstance(node, Tree):
        # Tree.data is often a Token (a str subclass); keep CST objects out of the AST.
        return str(node.data)
    return node.type


class CstNode:
    """
    Read-only view over one Lark tree node.

    Lookups are by label (child rule name or terminal name). A single
    optional lookup returns None when the child is absent; sequence lookups
    return an empty tuple. The `require*` variants raise MalformedCstError
    naming the rule and the missing piece.
    """

    __slots__ = ("tree", "source")

    def __init__(self, tree: Tree, source: str) -> None:
        self.tree = tree
        self.source = source

    @property
    def rule_name(self) -> str:
        return label(self.tree)

    @property
    def children(self) -> List[Child]:
        return self.tree.children

    @property
    def range(self) -> Optional[Range]:
        return range_of(self.tree)

    def trees(self) -> List[Tree]:
        return [c for c in self.tree.children if isinstance(c, Tree)]

    def tree_at(self, index: int, expected: str = "operand") -> Tree:
        """Positional tree child (for expression rules whose operands have varying labels)."""
        trees = self.trees()
        if index >= len(trees):
            raise MalformedCstError(self.rule_name, expected, range=self.range)
        return trees[index]

    def child(self, name: str) -> Optional[Child]:
        return next((c for c in self.tree.children if label(c) == name), None)

    def children_named(self, name: str) -> Tuple[Child, ...]:
        return tuple(c for c in self.tree.children if label(c) == name)

    def require(self, name: str) -> Child:
        found = self.child(name)
        if found is None:
            raise MalformedCstError(self.rule_name, name, range=self.range)
        return found

    def token(self, *types: str) -> Optional[Token]:
        return next((c for c in self.tree.children if isinstance(c, Token) and c.type in types), None)

    def tokens(self, *types: str) -> Tuple[Token, ...]:
        return tuple(c for c in self.tree.children if isinstance(c, Token) and c.type in types)

    def require_token(self, *types: str) -> Token:
        found = self.token(*types)
        if found is None:
            raise MalformedCstError(self.rule_name, " or ".join(types), range=self.range)
        return found

    def text(self) -> str:
        meta = self.tree.meta
        if getattr(meta, "empty", True) or not hasattr(meta, "start_pos"):
            return "".join(str(t) for t in self.tree.scan_values(lambda v: isinstance(v, Token)))
        return self.source[meta.start_pos:meta.end_pos]

    def __repr__(self) -> str:
        return f"CstNode({self.rule_name!r}, children={len(self.tree.children)})"


__all__ = ["CstNode", "Child", "label"]
