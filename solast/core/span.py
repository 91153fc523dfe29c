# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source ranges attached to AST nodes and parse errors.

A Range is resolved from Lark positions: lines and columns are 1-based,
offsets are 0-based character offsets into the source string, and the end
position is exclusive (the same convention as Lark's `end_pos`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from lark import Token, Tree


@dataclass(frozen=True)
class Range:
	"""Start and end position of a source fragment."""

	start_line: int
	start_column: int
	start_offset: int
	end_line: int
	end_column: int
	end_offset: int

	@classmethod
	def union(cls, *ranges: Optional["Range"]) -> Optional["Range"]:
		"""Smallest range covering every non-None argument (None if there are none)."""
		present = [r for r in ranges if r is not None]
		if not present:
			return None
		first = min(present, key=lambda r: r.start_offset)
		last = max(present, key=lambda r: r.end_offset)
		return cls(
			start_line=first.start_line,
			start_column=first.start_column,
			start_offset=first.start_offset,
			end_line=last.end_line,
			end_column=last.end_column,
			end_offset=last.end_offset,
		)

	def contains(self, other: "Range") -> bool:
		return self.start_offset <= other.start_offset and other.end_offset <= self.end_offset

	def to_dict(self) -> dict:
		return {
			"start": {"line": self.start_line, "column": self.start_column, "offset": self.start_offset},
			"end": {"line": self.end_line, "column": self.end_column, "offset": self.end_offset},
		}


def _range_of_positioned(obj: Any) -> Optional[Range]:
	# Tokens carry positions directly; trees carry them on `meta` unless the
	# rule matched nothing (meta.empty).
	if isinstance(obj, Tree):
		meta = obj.meta
		if getattr(meta, "empty", True) or not hasattr(meta, "line"):
			return None
		pos = meta
	else:
		pos = obj
	start_line = getattr(pos, "line", None)
	start_column = getattr(pos, "column", None)
	start_offset = getattr(pos, "start_pos", None)
	end_line = getattr(pos, "end_line", None)
	end_column = getattr(pos, "end_column", None)
	end_offset = getattr(pos, "end_pos", None)
	if None in (start_line, start_column, start_offset, end_line, end_column, end_offset):
		return None
	return Range(start_line, start_column, start_offset, end_line, end_column, end_offset)


def range_of(*items: Any) -> Optional[Range]:
	"""
	Resolve the range covering `items`.

	Accepts Lark trees and tokens, objects exposing a `range` attribute (CST
	adapters, AST nodes), Ranges and None. Items without a position are
	skipped, so a node built from an empty rule or a synthetic token simply
	contributes nothing.
	"""
	found: list[Range] = []
	for item in _flatten(items):
		if item is None:
			continue
		if isinstance(item, Range):
			found.append(item)
			continue
		if isinstance(item, (Tree, Token)):
			resolved = _range_of_positioned(item)
		else:
			resolved = getattr(item, "range", None)
		if resolved is not None:
			found.append(resolved)
	return Range.union(*found)


def _flatten(items: Iterable[Any]) -> Iterable[Any]:
	for item in items:
		if isinstance(item, (tuple, list)):
			yield from item
		else:
			yield item


def source_range(text: str) -> Range:
	"""Range spanning the whole of `text`."""
	lines = text.split("\n")
	end_line = len(lines)
	end_column = len(lines[-1]) + 1
	return Range(1, 1, 0, end_line, end_column, len(text))


__all__ = ["Range", "range_of", "source_range"]
