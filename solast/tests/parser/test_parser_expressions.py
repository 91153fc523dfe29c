# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from solast import ParserError, parse_expression
from solast.parser import ast as A


def _ident(name: str) -> A.Identifier:
	return A.Identifier(name=name)


def _num(text: str, sub: str | None = None) -> A.NumberLiteral:
	return A.NumberLiteral(number=text, subdenomination=sub)


def _bin(op: str, left: A.Node, right: A.Node) -> A.BinaryOperation:
	return A.BinaryOperation(operator=op, left=left, right=right)


def test_multiplication_binds_tighter() -> None:
	assert parse_expression("1 + 2 * 3") == _bin("+", _num("1"), _bin("*", _num("2"), _num("3")))


def test_subtraction_is_left_associative() -> None:
	assert parse_expression("a - b - c") == _bin("-", _bin("-", _ident("a"), _ident("b")), _ident("c"))


def test_assignment_is_right_associative() -> None:
	assert parse_expression("a = b += 1") == _bin("=", _ident("a"), _bin("+=", _ident("b"), _num("1")))


def test_logical_operators() -> None:
	expr = parse_expression("!a && b || c")
	assert expr == _bin(
		"||",
		_bin("&&", A.UnaryOperation(operator="!", sub_expression=_ident("a")), _ident("b")),
		_ident("c"),
	)


def test_comparison_below_shift() -> None:
	assert parse_expression("x << 2 >= y") == _bin(">=", _bin("<<", _ident("x"), _num("2")), _ident("y"))


def test_conditional() -> None:
	assert parse_expression("ok ? 1 : 2") == A.Conditional(
		condition=_ident("ok"),
		true_expression=_num("1"),
		false_expression=_num("2"),
	)


def test_prefix_and_postfix_operators() -> None:
	assert parse_expression("-x") == A.UnaryOperation(operator="-", sub_expression=_ident("x"))
	assert parse_expression("x--") == A.UnaryOperation(operator="--", sub_expression=_ident("x"), is_prefix=False)
	assert parse_expression("delete m[k]") == A.UnaryOperation(
		operator="delete",
		sub_expression=A.IndexAccess(base=_ident("m"), index=_ident("k")),
	)


def test_member_chain_and_call() -> None:
	expr = parse_expression("a.b.c(1)")
	assert expr == A.FunctionCall(
		expression=A.MemberAccess(
			expression=A.MemberAccess(expression=_ident("a"), member_name="b"),
			member_name="c",
		),
		arguments=(_num("1"),),
	)


def test_index_range_access() -> None:
	assert parse_expression("data[1:2]") == A.IndexRangeAccess(base=_ident("data"), index_start=_num("1"), index_end=_num("2"))
	assert parse_expression("data[:2]") == A.IndexRangeAccess(base=_ident("data"), index_end=_num("2"))
	assert parse_expression("data[1:]") == A.IndexRangeAccess(base=_ident("data"), index_start=_num("1"))


def test_new_array() -> None:
	assert parse_expression("new uint[](3)") == A.FunctionCall(
		expression=A.NewExpression(type_name=A.ArrayTypeName(base_type_name=A.ElementaryTypeName(name="uint"))),
		arguments=(_num("3"),),
	)


def test_type_conversions() -> None:
	assert parse_expression("address(this).balance") == A.MemberAccess(
		expression=A.FunctionCall(expression=A.ElementaryTypeName(name="address"), arguments=(_ident("this"),)),
		member_name="balance",
	)
	assert parse_expression("payable(owner)") == A.FunctionCall(expression=_ident("payable"), arguments=(_ident("owner"),))
	assert parse_expression("type(uint8).max") == A.MemberAccess(
		expression=A.FunctionCall(expression=_ident("type"), arguments=(A.ElementaryTypeName(name="uint8"),)),
		member_name="max",
	)


@pytest.mark.parametrize(
	"src, number, sub",
	[
		("1 ether", "1", "ether"),
		("0xff", "0xff", None),
		("1e18", "1e18", None),
		("1_000", "1_000", None),
		(".5", ".5", None),
		("2 days", "2", "days"),
	],
)
def test_number_literals(src: str, number: str, sub: str | None) -> None:
	assert parse_expression(src) == _num(number, sub)


def test_boolean_literals() -> None:
	assert parse_expression("true") == A.BooleanLiteral(value=True)
	assert parse_expression("false") == A.BooleanLiteral(value=False)


def test_adjacent_strings_concatenate() -> None:
	assert parse_expression('"ab" \'cd\'') == A.StringLiteral(value="abcd", parts=("ab", "cd"))


def test_string_escapes() -> None:
	assert parse_expression(r'"\x41\né"').value == "A\né"
	assert parse_expression(r"'it\'s'").value == "it's"
	assert parse_expression(r'"\q"').value == "\\q"


def test_unicode_and_hex_strings() -> None:
	assert parse_expression('unicode"héllo"') == A.StringLiteral(value="héllo", parts=("héllo",), is_unicode=True)
	assert parse_expression("hex\"00ff\" hex'aa_bb'") == A.HexLiteral(value="00ffaabb", parts=("00ff", "aa_bb"))


def test_tuples_and_inline_arrays() -> None:
	assert parse_expression("(1, 2)") == A.TupleExpression(components=(_num("1"), _num("2")))
	assert parse_expression("(x)") == A.TupleExpression(components=(_ident("x"),))
	assert parse_expression("(, y)") == A.TupleExpression(components=(None, _ident("y")))
	assert parse_expression("[1, 2, 3]") == A.TupleExpression(components=(_num("1"), _num("2"), _num("3")), is_array=True)


def test_expression_ranges() -> None:
	src = "  a + bb"
	expr = parse_expression(src)
	assert (expr.range.start_offset, expr.range.end_offset) == (2, 8)
	assert (expr.right.range.start_offset, expr.right.range.end_offset) == (6, 8)
	assert parse_expression(src, include_ranges=False).range is None


def test_incomplete_expression_raises() -> None:
	with pytest.raises(ParserError) as excinfo:
		parse_expression("1 +")
	(error,) = excinfo.value.errors
	assert error.code == "E-SYNTAX"
	assert "end of input" in error.message
	assert error.range.start_offset == 3
