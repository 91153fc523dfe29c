# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
solast: Solidity-style source -> typed AST.

	>>> from solast import parse
	>>> result = parse("pragma solidity ^0.8.0;")
	>>> result.root.children[0].value
	'^0.8.0'
"""

from __future__ import annotations

from .core import (
	MalformedCstError,
	ParseError,
	ParseOptions,
	ParseResult,
	ParserError,
	Range,
	StructuralError,
	UnsupportedRuleError,
)
from .parser import ast, parse, parse_expression
from .parser.transform import transform
from .walk import SKIP, children_of, iter_nodes, to_dict, walk

__all__ = [
	"MalformedCstError",
	"ParseError",
	"ParseOptions",
	"ParseResult",
	"ParserError",
	"Range",
	"SKIP",
	"StructuralError",
	"UnsupportedRuleError",
	"ast",
	"children_of",
	"iter_nodes",
	"parse",
	"parse_expression",
	"to_dict",
	"transform",
	"walk",
]
