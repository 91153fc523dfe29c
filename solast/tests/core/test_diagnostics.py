# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from solast.core.diagnostics import (
	E_MALFORMED_CST,
	E_UNSUPPORTED_RULE,
	MALFORMED_CST,
	UNSUPPORTED_RULE,
	MalformedCstError,
	ParseError,
	ParserError,
	UnsupportedRuleError,
)
from solast.core.span import Range


def test_malformed_error_record() -> None:
	rng = Range(1, 1, 0, 1, 4, 3)
	err = MalformedCstError("local_variable", "type name", range=rng)
	record = err.to_parse_error()
	assert record.code == E_MALFORMED_CST
	assert record.kind == MALFORMED_CST
	assert record.severity == "error"
	assert record.range == rng
	assert record.message == "E-MALFORMED-CST: malformed 'local_variable', expected type name"
	assert err.rule == "local_variable"


def test_unsupported_rule_record() -> None:
	record = UnsupportedRuleError("mystery").to_parse_error()
	assert record.code == E_UNSUPPORTED_RULE
	assert record.kind == UNSUPPORTED_RULE
	assert record.range is None
	assert "mystery" in record.message


def test_parser_error_carries_every_record() -> None:
	first = ParseError("E-SYNTAX: one", range=Range(1, 1, 0, 1, 2, 1))
	second = ParseError("E-SYNTAX: two")
	exc = ParserError([first, second])
	assert exc.errors == (first, second)
	assert exc.range == first.range
	assert str(exc) == "E-SYNTAX: one"


def test_parser_error_needs_a_record() -> None:
	with pytest.raises(ValueError):
		ParserError([])
