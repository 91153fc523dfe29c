# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Public AST traversal.

All traversals use explicit stacks, so trees of any depth can be walked
without hitting the interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

from .parser.ast import Node

# Returned from an enter callback to skip the node's children.
SKIP = object()

Callback = Callable[[Node, Optional[Node]], Any]
Visitor = Union[Callback, Tuple[Optional[Callback], Optional[Callback]]]

_ENTER = 0
_EXIT = 1


def children_of(node: Node) -> Iterator[Node]:
	"""Direct child nodes of `node`, in field declaration order."""
	for f in fields(node):
		if f.name == "range":
			continue
		value = getattr(node, f.name)
		if isinstance(value, Node):
			yield value
		elif isinstance(value, tuple):
			for item in value:
				if isinstance(item, Node):
					yield item


def iter_nodes(root: Node) -> Iterator[Node]:
	"""Every node under (and including) `root`, pre-order."""
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(list(children_of(node))))


def _handlers(visitors: Mapping[str, Visitor], node_type: str) -> Tuple[Optional[Callback], Optional[Callback]]:
	entry = visitors.get(node_type)
	if isinstance(entry, tuple):
		enter, exit_ = entry
	else:
		enter, exit_ = entry, None
	exit_ = visitors.get(f"{node_type}:exit", exit_)
	return enter, exit_


def walk(root: Node, visitors: Mapping[str, Visitor]) -> None:
	"""
	Visit `root` and its descendants pre-order.

	`visitors` maps a node type to an enter callback or an (enter, exit)
	pair; a "Type:exit" key also registers an exit callback. Callbacks are
	called as `cb(node, parent)`. An enter callback returning SKIP (or
	False) prevents descent into that node's children; its exit callback
	still runs.
	"""
	stack: list = [(_ENTER, root, None)]
	while stack:
		action, node, parent = stack.pop()
		enter, exit_ = _handlers(visitors, node.type)
		if action == _EXIT:
			exit_(node, parent)
			continue
		result = enter(node, parent) if enter is not None else None
		if exit_ is not None:
			stack.append((_EXIT, node, parent))
		if result is SKIP or result is False:
			continue
		for child in reversed(list(children_of(node))):
			stack.append((_ENTER, child, node))


def _camel(name: str) -> str:
	head, *rest = name.split("_")
	return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _plain(value: Any, converted: Dict[int, dict]) -> Any:
	if isinstance(value, Node):
		return converted[id(value)]
	if isinstance(value, tuple):
		return [_plain(item, converted) for item in value]
	return value


def to_dict(root: Node) -> dict:
	"""
	Plain-dict rendering of an AST (camelCase keys, `type` first, `range`
	only when present). Children are converted before their parents.
	"""
	converted: Dict[int, dict] = {}
	for node in reversed(list(iter_nodes(root))):
		out: dict = {"type": node.type}
		for f in fields(node):
			if f.name == "range":
				continue
			out[_camel(f.name)] = _plain(getattr(node, f.name), converted)
		if node.range is not None:
			out["range"] = node.range.to_dict()
		converted[id(node)] = out
	return converted[id(root)]


__all__ = ["SKIP", "children_of", "iter_nodes", "to_dict", "walk"]
