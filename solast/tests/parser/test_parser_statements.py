# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from solast import ParserError, parse, parse_expression
from solast.parser import ast as A

UINT = A.ElementaryTypeName(name="uint")
BOOL = A.ElementaryTypeName(name="bool")


def _wrap(body: str) -> str:
	return "contract C {\n  function f() public {\n" + body + "\n  }\n}"


def _statements(body: str):
	result = parse(_wrap(body))
	assert result.errors == ()
	return result.root.children[0].sub_nodes[0].body.statements


def _ident(name: str) -> A.Identifier:
	return A.Identifier(name=name)


def _num(text: str) -> A.NumberLiteral:
	return A.NumberLiteral(number=text)


def test_simple_declaration() -> None:
	(stmt,) = _statements("uint x = 1;")
	assert stmt == A.VariableDeclarationStatement(
		variables=(A.VariableDeclaration(type_name=UINT, name="x"),),
		initial_value=_num("1"),
	)


def test_declaration_without_value() -> None:
	(stmt,) = _statements("bool done;")
	assert stmt == A.VariableDeclarationStatement(variables=(A.VariableDeclaration(type_name=BOOL, name="done"),))


def test_declared_types_are_narrowed_from_expressions() -> None:
	arr, point, fixed = _statements("uint[] memory arr;\nLib.Point storage p;\nbytes32[4] calldata words;")
	assert arr.variables[0] == A.VariableDeclaration(
		type_name=A.ArrayTypeName(base_type_name=UINT),
		name="arr",
		storage_location="memory",
	)
	assert point.variables[0] == A.VariableDeclaration(
		type_name=A.UserDefinedTypeName(name_path="Lib.Point"),
		name="p",
		storage_location="storage",
	)
	assert fixed.variables[0].type_name == A.ArrayTypeName(
		base_type_name=A.ElementaryTypeName(name="bytes32"),
		length=_num("4"),
	)


def test_mapping_local() -> None:
	(stmt,) = _statements("mapping(uint => uint) storage m = other;")
	assert stmt.variables[0].type_name == A.Mapping(key_type=UINT, value_type=UINT)
	assert stmt.variables[0].storage_location == "storage"
	assert stmt.initial_value == _ident("other")


def test_tuple_declaration_keeps_empty_slots() -> None:
	(stmt,) = _statements("(uint a, , bool c) = g();")
	assert stmt == A.VariableDeclarationStatement(
		variables=(
			A.VariableDeclaration(type_name=UINT, name="a"),
			None,
			A.VariableDeclaration(type_name=BOOL, name="c"),
		),
		initial_value=A.FunctionCall(expression=_ident("g")),
	)


def test_tuple_assignment_stays_an_expression() -> None:
	(stmt,) = _statements("(a, b) = (b, a);")
	assert stmt == A.ExpressionStatement(
		expression=A.BinaryOperation(
			operator="=",
			left=A.TupleExpression(components=(_ident("a"), _ident("b"))),
			right=A.TupleExpression(components=(_ident("b"), _ident("a"))),
		)
	)


def test_non_type_in_declaration_position_strict() -> None:
	with pytest.raises(ParserError) as excinfo:
		parse(_wrap("1 x;"))
	assert excinfo.value.errors[-1].code == "E-MALFORMED-CST"


def test_non_type_in_declaration_position_tolerant() -> None:
	result = parse(_wrap("1 x;"), tolerant=True)
	(error,) = result.errors
	assert error.code == "E-MALFORMED-CST"
	assert error.kind == "malformed-cst"
	(stmt,) = result.root.children[0].sub_nodes[0].body.statements
	(var,) = stmt.variables
	assert var.type == "Error"
	assert var.rule == "local_variable"


def test_tuple_declaration_needs_a_value() -> None:
	with pytest.raises(ParserError) as excinfo:
		parse(_wrap("(uint a, uint b);"))
	assert excinfo.value.errors[-1].code == "E-MALFORMED-CST"


def test_if_else() -> None:
	(stmt,) = _statements("if (a) { g(); } else return;")
	assert stmt.condition == _ident("a")
	assert stmt.true_body == A.Block(statements=(A.ExpressionStatement(expression=A.FunctionCall(expression=_ident("g"))),))
	assert stmt.false_body == A.ReturnStatement()


def test_dangling_else_binds_to_inner_if() -> None:
	(stmt,) = _statements("if (a) if (b) x = 1; else x = 2;")
	assert stmt.false_body is None
	assert isinstance(stmt.true_body, A.IfStatement)
	assert stmt.true_body.false_body is not None


def test_for_loop() -> None:
	(stmt,) = _statements("for (uint i = 0; i < n; i++) { continue; }")
	assert stmt.init_expression == A.VariableDeclarationStatement(
		variables=(A.VariableDeclaration(type_name=UINT, name="i"),),
		initial_value=_num("0"),
	)
	assert stmt.condition_expression == A.BinaryOperation(operator="<", left=_ident("i"), right=_ident("n"))
	assert stmt.loop_expression == A.UnaryOperation(operator="++", sub_expression=_ident("i"), is_prefix=False)
	assert stmt.body == A.Block(statements=(A.ContinueStatement(),))


def test_empty_for_loop() -> None:
	(stmt,) = _statements("for (;;) break;")
	assert stmt == A.ForStatement(
		init_expression=None,
		condition_expression=None,
		loop_expression=None,
		body=A.BreakStatement(),
	)


def test_while_and_do_while() -> None:
	loop, do = _statements("while (x > 0) x--;\ndo { x++; } while (x < 10);")
	assert isinstance(loop, A.WhileStatement)
	assert loop.condition == A.BinaryOperation(operator=">", left=_ident("x"), right=_num("0"))
	assert isinstance(do, A.DoWhileStatement)
	assert do.condition == A.BinaryOperation(operator="<", left=_ident("x"), right=_num("10"))


def test_return_throw_and_emit() -> None:
	ret, throw, emit = _statements("return x;\nthrow;\nemit Transfer(a, b);")
	assert ret == A.ReturnStatement(expression=_ident("x"))
	assert throw == A.ThrowStatement()
	assert emit == A.EmitStatement(
		event_call=A.FunctionCall(expression=_ident("Transfer"), arguments=(_ident("a"), _ident("b")))
	)


def test_emit_requires_a_call() -> None:
	with pytest.raises(ParserError) as excinfo:
		parse(_wrap("emit x;"))
	assert excinfo.value.errors[-1].code == "E-MALFORMED-CST"


def test_revert_custom_error() -> None:
	(stmt,) = _statements("revert Unauthorized(msg.sender);")
	assert stmt == A.RevertStatement(
		revert_call=A.FunctionCall(
			expression=_ident("Unauthorized"),
			arguments=(A.MemberAccess(expression=_ident("msg"), member_name="sender"),),
		)
	)


def test_legacy_revert_call_is_an_expression_statement() -> None:
	with_reason, bare = _statements('revert("no");\nrevert();')
	assert with_reason == A.ExpressionStatement(
		expression=A.FunctionCall(
			expression=_ident("revert"),
			arguments=(A.StringLiteral(value="no", parts=("no",)),),
		)
	)
	assert bare == A.ExpressionStatement(expression=A.FunctionCall(expression=_ident("revert")))


def test_try_catch() -> None:
	(stmt,) = _statements(
		"try t.foo(1) returns (uint v) { } catch Error(string memory reason) { } catch (bytes memory) { }"
	)
	assert stmt.expression == A.FunctionCall(
		expression=A.MemberAccess(expression=_ident("t"), member_name="foo"),
		arguments=(_num("1"),),
	)
	assert stmt.return_parameters == (A.VariableDeclaration(type_name=UINT, name="v"),)
	assert stmt.body == A.Block()
	first, second = stmt.catch_clauses
	assert first.kind == "Error"
	assert first.parameters == (
		A.VariableDeclaration(type_name=A.ElementaryTypeName(name="string"), name="reason", storage_location="memory"),
	)
	assert second.kind is None
	assert second.parameters == (
		A.VariableDeclaration(type_name=A.ElementaryTypeName(name="bytes"), storage_location="memory"),
	)


def test_catch_all_clause() -> None:
	(stmt,) = _statements("try new Token() { } catch { }")
	assert stmt.expression == A.FunctionCall(
		expression=A.NewExpression(type_name=A.UserDefinedTypeName(name_path="Token"))
	)
	(clause,) = stmt.catch_clauses
	assert clause == A.CatchClause(kind=None, body=A.Block())


def test_try_with_call_options() -> None:
	(stmt,) = _statements("try this.h{value: 1, gas: g}(a) returns (bool) { x; } catch { }")
	assert stmt.expression == parse_expression("this.h{value: 1, gas: g}(a)")
	assert isinstance(stmt.expression.expression, A.NameValueExpression)
	assert stmt.expression.expression.arguments.names == ("value", "gas")
	assert stmt.body == A.Block(statements=(A.ExpressionStatement(expression=_ident("x")),))


def test_unchecked_and_nested_blocks() -> None:
	unchecked, block = _statements("unchecked { i++; }\n{ { } }")
	assert unchecked == A.UncheckedStatement(
		block=A.Block(
			statements=(
				A.ExpressionStatement(
					expression=A.UnaryOperation(operator="++", sub_expression=_ident("i"), is_prefix=False)
				),
			)
		)
	)
	assert block == A.Block(statements=(A.Block(),))
