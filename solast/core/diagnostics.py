# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parse errors and the exceptions that carry them.

`ParseError` is the plain record handed back to callers (in
`ParseResult.errors` or inside `ParserError`). The exception classes are the
in-process signals: builders raise `StructuralError` subclasses, the walker
turns them into records, and strict mode surfaces everything as a single
`ParserError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence

from .span import Range

if TYPE_CHECKING:
	from ..parser.ast import SourceUnit

# Error kinds, one per failure source.
LEXICAL = "lexical"
SYNTACTIC = "syntactic"
UNSUPPORTED_RULE = "unsupported-rule"
MALFORMED_CST = "malformed-cst"

# Stable codes, prefixed to messages the same way throughout the package.
E_LEX = "E-LEX"
E_SYNTAX = "E-SYNTAX"
E_UNSUPPORTED_RULE = "E-UNSUPPORTED-RULE"
E_MALFORMED_CST = "E-MALFORMED-CST"


@dataclass(frozen=True)
class ParseError:
	"""One recorded failure (engine or structural)."""

	message: str
	range: Optional[Range] = None
	severity: str = "error"
	code: Optional[str] = None
	kind: str = SYNTACTIC


class StructuralError(ValueError):
	"""A CST node could not be converted into an AST node."""

	code = E_MALFORMED_CST
	kind = MALFORMED_CST

	def __init__(self, message: str, *, rule: str, range: Optional[Range]) -> None:
		super().__init__(message)
		self.rule = rule
		self.range = range

	def to_parse_error(self) -> ParseError:
		return ParseError(message=str(self), range=self.range, code=self.code, kind=self.kind)


class UnsupportedRuleError(StructuralError):
	code = E_UNSUPPORTED_RULE
	kind = UNSUPPORTED_RULE

	def __init__(self, rule: str, *, range: Optional[Range] = None) -> None:
		super().__init__(f"{E_UNSUPPORTED_RULE}: no conversion for rule '{rule}'", rule=rule, range=range)


class MalformedCstError(StructuralError):
	code = E_MALFORMED_CST
	kind = MALFORMED_CST

	def __init__(self, rule: str, expected: str, *, range: Optional[Range] = None) -> None:
		super().__init__(f"{E_MALFORMED_CST}: malformed '{rule}', expected {expected}", rule=rule, range=range)
		self.expected = expected


class ParserError(ValueError):
	"""Strict-mode failure: carries every error recorded up to the abort."""

	def __init__(self, errors: Sequence[ParseError]) -> None:
		if not errors:
			raise ValueError("ParserError needs at least one error")
		self.errors = tuple(errors)
		super().__init__(self.errors[0].message)

	@property
	def range(self) -> Optional[Range]:
		return self.errors[0].range


@dataclass(frozen=True)
class ParseResult:
	root: "SourceUnit"
	errors: tuple[ParseError, ...] = field(default_factory=tuple)


__all__ = [
	"ParseError",
	"ParseResult",
	"ParserError",
	"StructuralError",
	"UnsupportedRuleError",
	"MalformedCstError",
	"LEXICAL",
	"SYNTACTIC",
	"UNSUPPORTED_RULE",
	"MALFORMED_CST",
	"E_LEX",
	"E_SYNTAX",
	"E_UNSUPPORTED_RULE",
	"E_MALFORMED_CST",
]
