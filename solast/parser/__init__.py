"""
Parser entry points: source text -> Lark CST -> AST.

`parse` handles complete source units; `parse_expression` parses a single
expression fragment through the grammar's second start symbol.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from ..core.diagnostics import ParseResult
from ..core.options import ParseOptions
from . import ast
from .ast import Node
from .engine import START_EXPRESSION, ConcreteTree, parse_cst
from .transform import build_value, transform

logger = logging.getLogger(__name__)

OptionsArg = Union[ParseOptions, Mapping[str, Any], None]


def parse(source: str, options: OptionsArg = None, **overrides: Any) -> ParseResult:
	"""
	Parse `source` into a ParseResult.

	`options` is a ParseOptions, a mapping (snake_case or camelCase keys) or
	None; keyword arguments override individual options. Strict parses raise
	ParserError on the first error; tolerant parses always return a result.
	"""
	opts = ParseOptions.coerce(options, **overrides)
	cst = parse_cst(source, tolerant=opts.tolerant, max_errors=opts.max_errors)
	result = transform(cst, opts)
	logger.debug("parsed %d chars: %d errors", len(source), len(result.errors))
	return result


def parse_expression(text: str, options: OptionsArg = None, **overrides: Any) -> Node:
	"""Parse a single expression (strict) and return its AST node."""
	opts = ParseOptions.coerce(options, **overrides)
	cst = parse_cst(text, tolerant=False, start=START_EXPRESSION)
	return build_value(cst.tree, text, ParseOptions(include_ranges=opts.include_ranges), [])


__all__ = ["ConcreteTree", "ast", "parse", "parse_cst", "parse_expression", "transform"]
