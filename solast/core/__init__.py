# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared data types: ranges, parse errors and options."""

from .diagnostics import (
	MalformedCstError,
	ParseError,
	ParseResult,
	ParserError,
	StructuralError,
	UnsupportedRuleError,
)
from .options import ParseOptions
from .span import Range, range_of, source_range

__all__ = [
	"MalformedCstError",
	"ParseError",
	"ParseOptions",
	"ParseResult",
	"ParserError",
	"Range",
	"StructuralError",
	"UnsupportedRuleError",
	"range_of",
	"source_range",
]
