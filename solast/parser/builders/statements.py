"""Builders for statements and the tolerant-mode error markers."""

from __future__ import annotations

from ...core.diagnostics import MalformedCstError
from ..ast import (
    BinaryOperation,
    Block,
    BreakStatement,
    CatchClause,
    ContinueStatement,
    DoWhileStatement,
    EmitStatement,
    ErrorNode,
    ExpressionStatement,
    ForStatement,
    FunctionCall,
    Identifier,
    IfStatement,
    InlineAssemblyStatement,
    ReturnStatement,
    RevertStatement,
    ThrowStatement,
    TryStatement,
    TupleExpression,
    UncheckedStatement,
    VariableDeclaration,
    VariableDeclarationStatement,
    WhileStatement,
)
from ..cst import label
from ..dispatch import builder
from .common import decode_string, expression_to_type


@builder("block")
def build_block(node, ctx):
    return Block(statements=tuple(ctx.value(t) for t in node.trees()), range=ctx.range(node))


def _declares(tuple_expr: TupleExpression) -> bool:
    return any(isinstance(c, VariableDeclaration) for c in tuple_expr.components)


@builder("expression_statement")
def build_expression_statement(node, ctx):
    expr = ctx.value(node.tree_at(0, "expression"))
    # `(uint a, , uint b) = f();` reaches us as an assignment to a tuple.
    if isinstance(expr, BinaryOperation) and expr.operator == "=" and isinstance(expr.left, TupleExpression):
        if _declares(expr.left):
            if not all(c is None or isinstance(c, VariableDeclaration) for c in expr.left.components):
                raise MalformedCstError(node.rule_name, "declarations only in tuple declaration", range=node.range)
            return VariableDeclarationStatement(
                variables=expr.left.components,
                initial_value=expr.right,
                range=ctx.range(node),
            )
    if isinstance(expr, TupleExpression) and _declares(expr):
        raise MalformedCstError(node.rule_name, "initial value for tuple declaration", range=node.range)
    return ExpressionStatement(expression=expr, range=ctx.range(node))


@builder("variable_declaration_statement")
def build_variable_declaration_statement(node, ctx):
    trees = node.trees()
    return VariableDeclarationStatement(
        variables=(ctx.value(node.require("local_variable")),),
        initial_value=ctx.value(trees[1]) if len(trees) > 1 else None,
        range=ctx.range(node),
    )


@builder("local_variable")
def build_local_variable(node, ctx):
    type_tree = node.tree_at(0, "type name")
    type_name = ctx.value(type_tree)
    if label(type_tree) not in ("mapping", "function_type_name"):
        type_name = expression_to_type(type_name, rule=node.rule_name, error_range=node.range)
    return VariableDeclaration(
        type_name=type_name,
        name=str(node.require_token("NAME")),
        storage_location=ctx.value(node.child("storage_location")),
        range=ctx.range(node),
    )


@builder("if_statement")
def build_if(node, ctx):
    trees = node.trees()
    return IfStatement(
        condition=ctx.value(node.tree_at(0, "condition")),
        true_body=ctx.value(node.tree_at(1, "body")),
        false_body=ctx.value(trees[2]) if len(trees) > 2 else None,
        range=ctx.range(node),
    )


@builder("for_statement")
def build_for(node, ctx):
    trees = node.trees()
    if len(trees) not in (3, 4):
        raise MalformedCstError(node.rule_name, "init, condition and body", range=node.range)
    init, condition = trees[0], trees[1]
    loop = trees[2] if len(trees) == 4 else None
    cond_value = ctx.value(condition)
    if isinstance(cond_value, ExpressionStatement):
        cond_value = cond_value.expression
    return ForStatement(
        init_expression=ctx.value(init),
        condition_expression=cond_value,
        loop_expression=ctx.value(loop),
        body=ctx.value(trees[-1]),
        range=ctx.range(node),
    )


@builder("empty_statement")
def build_empty(node, ctx):
    return None


@builder("while_statement")
def build_while(node, ctx):
    return WhileStatement(
        condition=ctx.value(node.tree_at(0, "condition")),
        body=ctx.value(node.tree_at(1, "body")),
        range=ctx.range(node),
    )


@builder("do_while_statement")
def build_do_while(node, ctx):
    return DoWhileStatement(
        body=ctx.value(node.tree_at(0, "body")),
        condition=ctx.value(node.tree_at(1, "condition")),
        range=ctx.range(node),
    )


@builder("continue_statement")
def build_continue(node, ctx):
    return ContinueStatement(range=ctx.range(node))


@builder("break_statement")
def build_break(node, ctx):
    return BreakStatement(range=ctx.range(node))


@builder("throw_statement")
def build_throw(node, ctx):
    return ThrowStatement(range=ctx.range(node))


@builder("return_statement")
def build_return(node, ctx):
    trees = node.trees()
    return ReturnStatement(expression=ctx.value(trees[0]) if trees else None, range=ctx.range(node))


@builder("emit_statement")
def build_emit(node, ctx):
    call = ctx.value(node.tree_at(0, "event call"))
    if not isinstance(call, (FunctionCall, ErrorNode)):
        raise MalformedCstError(node.rule_name, "event call", range=node.range)
    return EmitStatement(event_call=call, range=ctx.range(node))


@builder("revert_statement")
def build_revert(node, ctx):
    expr = ctx.value(node.tree_at(0, "revert call"))
    if isinstance(expr, (FunctionCall, ErrorNode)):
        return RevertStatement(revert_call=expr, range=ctx.range(node))
    # `revert(...)` / `revert("reason")`: the parenthesised arguments parse as a tuple.
    if isinstance(expr, TupleExpression) and not expr.is_array and None not in expr.components:
        keyword = node.require_token("REVERT")
        call = FunctionCall(
            expression=Identifier(name="revert", range=ctx.range(keyword)),
            arguments=expr.components,
            range=ctx.range(node.children[0], node.children[1]),
        )
        return ExpressionStatement(expression=call, range=ctx.range(node))
    raise MalformedCstError(node.rule_name, "revert call", range=node.range)


@builder("try_statement")
def build_try(node, ctx):
    return TryStatement(
        expression=ctx.value(node.tree_at(0, "call")),
        return_parameters=ctx.values(node.child("return_parameters")),
        body=ctx.value(node.require("block")),
        catch_clauses=tuple(ctx.value(t) for t in node.children_named("catch_clause")),
        range=ctx.range(node),
    )


@builder("catch_clause")
def build_catch(node, ctx):
    kind = node.token("NAME")
    return CatchClause(
        kind=str(kind) if kind is not None else None,
        parameters=ctx.values(node.child("parameter_list")),
        body=ctx.value(node.require("block")),
        range=ctx.range(node),
    )


@builder("unchecked_statement")
def build_unchecked(node, ctx):
    return UncheckedStatement(block=ctx.value(node.require("block")), range=ctx.range(node))


@builder("inline_assembly_statement")
def build_inline_assembly(node, ctx):
    language = node.token("STRING")
    return InlineAssemblyStatement(
        language=decode_string(str(language)) if language is not None else None,
        flags=ctx.values(node.child("assembly_flags")),
        body=ctx.value(node.require("assembly_block")),
        range=ctx.range(node),
    )


@builder("assembly_flags")
def build_assembly_flags(node, ctx):
    return tuple(decode_string(str(t)) for t in node.tokens("STRING"))


@builder("error_item", "error_expr")
def build_error_marker(node, ctx):
    # Markers only exist in trees produced by the tolerant engine.
    if not ctx.options.tolerant:
        raise MalformedCstError(node.rule_name, "valid input in place of error marker", range=node.range)
    return ErrorNode(message="syntax error", rule=node.rule_name, range=ctx.range(node))
