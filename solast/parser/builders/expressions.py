"""Builders for expressions, literals and call arguments."""

from __future__ import annotations

from lark import Token

from ...core.diagnostics import MalformedCstError
from ..ast import (
    BinaryOperation,
    BooleanLiteral,
    Conditional,
    ErrorNode,
    FunctionCall,
    HexLiteral,
    Identifier,
    IndexAccess,
    IndexRangeAccess,
    MemberAccess,
    NameValueExpression,
    NewExpression,
    NumberLiteral,
    StringLiteral,
    TupleExpression,
    UnaryOperation,
)
from ..dispatch import builder
from .common import CallArguments, call_arguments_of, decode_string, name_value_list


def _operator(node) -> str:
    tok = next((c for c in node.children if isinstance(c, Token)), None)
    if tok is None:
        raise MalformedCstError(node.rule_name, "operator", range=node.range)
    return str(tok)


@builder("assignment", "binary_operation")
def build_binary(node, ctx):
    return BinaryOperation(
        operator=_operator(node),
        left=ctx.value(node.tree_at(0, "left operand")),
        right=ctx.value(node.tree_at(1, "right operand")),
        range=ctx.range(node),
    )


@builder("conditional")
def build_conditional(node, ctx):
    return Conditional(
        condition=ctx.value(node.tree_at(0, "condition")),
        true_expression=ctx.value(node.tree_at(1, "true expression")),
        false_expression=ctx.value(node.tree_at(2, "false expression")),
        range=ctx.range(node),
    )


@builder("unary_operation")
def build_unary(node, ctx):
    return UnaryOperation(
        operator=_operator(node),
        sub_expression=ctx.value(node.tree_at(0)),
        is_prefix=True,
        range=ctx.range(node),
    )


@builder("postfix_operation")
def build_postfix(node, ctx):
    return UnaryOperation(
        operator=_operator(node),
        sub_expression=ctx.value(node.tree_at(0)),
        is_prefix=False,
        range=ctx.range(node),
    )


@builder("index_access")
def build_index_access(node, ctx):
    trees = node.trees()
    return IndexAccess(
        base=ctx.value(node.tree_at(0, "base expression")),
        index=ctx.value(trees[1]) if len(trees) > 1 else None,
        range=ctx.range(node),
    )


@builder("index_range_access")
def build_index_range_access(node, ctx):
    base = node.tree_at(0, "base expression")
    start = end = None
    after_colon = False
    for child in node.children:
        if isinstance(child, Token):
            after_colon = after_colon or child.type == "COLON"
        elif child is not base:
            if after_colon:
                end = child
            else:
                start = child
    return IndexRangeAccess(
        base=ctx.value(base),
        index_start=ctx.value(start),
        index_end=ctx.value(end),
        range=ctx.range(node),
    )


@builder("member_access")
def build_member_access(node, ctx):
    return MemberAccess(
        expression=ctx.value(node.tree_at(0, "expression")),
        member_name=str(node.require_token("NAME")),
        range=ctx.range(node),
    )


@builder("function_call")
def build_function_call(node, ctx):
    args = call_arguments_of(ctx, node.require("call_arguments"))
    return FunctionCall(
        expression=ctx.value(node.tree_at(0, "callee")),
        arguments=args.arguments,
        names=args.names,
        identifiers=args.identifiers,
        range=ctx.range(node),
    )


@builder("name_value_expression")
def build_name_value_expression(node, ctx):
    return NameValueExpression(
        expression=ctx.value(node.tree_at(0, "expression")),
        arguments=ctx.value(node.require("named_arguments")),
        range=ctx.range(node),
    )


@builder("new_expression")
def build_new(node, ctx):
    return NewExpression(type_name=ctx.value(node.tree_at(0, "type name")), range=ctx.range(node))


@builder("call_arguments")
def build_call_arguments(node, ctx):
    """
    Exactly one of the two argument forms may be present, or neither for an
    empty call; both at once means the tree did not come from this grammar.
    """
    positional = node.child("positional_arguments")
    named = node.child("named_arguments")
    if positional is not None and named is not None:
        raise MalformedCstError(node.rule_name, "one argument form", range=node.range)
    if positional is not None:
        return CallArguments(arguments=ctx.values(positional))
    if named is not None:
        names = ctx.value(named)
        if isinstance(names, ErrorNode):
            return CallArguments(arguments=(names,))
        return CallArguments(arguments=names.arguments, names=names.names, identifiers=names.identifiers)
    return CallArguments()


@builder("positional_arguments")
def build_positional_arguments(node, ctx):
    return tuple(ctx.value(t) for t in node.trees())


@builder("named_arguments")
def build_named_arguments(node, ctx):
    return name_value_list([ctx.value(t) for t in node.children_named("name_value")], ctx.range(node))


@builder("name_value")
def build_name_value(node, ctx):
    name = node.require_token("NAME")
    return (
        Identifier(name=str(name), range=ctx.range(name)),
        ctx.value(node.tree_at(0, "value")),
    )


@builder("identifier")
def build_identifier(node, ctx):
    return Identifier(name=str(node.require_token("NAME", "PAYABLE")), range=ctx.range(node))


@builder("number_literal")
def build_number(node, ctx):
    sub = node.token("SUBDENOMINATION")
    return NumberLiteral(
        number=str(node.require_token("DECIMAL_NUMBER", "HEX_NUMBER")),
        subdenomination=str(sub) if sub is not None else None,
        range=ctx.range(node),
    )


@builder("boolean_literal")
def build_boolean(node, ctx):
    return BooleanLiteral(value=node.require_token("TRUE", "FALSE").type == "TRUE", range=ctx.range(node))


@builder("string_literal")
def build_string(node, ctx):
    parts = tuple(decode_string(str(t)) for t in node.tokens("STRING"))
    return StringLiteral(value="".join(parts), parts=parts, range=ctx.range(node))


@builder("unicode_string_literal")
def build_unicode_string(node, ctx):
    prefix = len("unicode")
    parts = tuple(decode_string(str(t)[prefix:]) for t in node.tokens("UNICODE_STRING"))
    return StringLiteral(value="".join(parts), parts=parts, is_unicode=True, range=ctx.range(node))


@builder("hex_literal")
def build_hex(node, ctx):
    # hex"00ff" / hex'00_ff': keep the digits between the quotes.
    parts = tuple(str(t)[4:-1] for t in node.tokens("HEX_STRING"))
    return HexLiteral(value="".join(p.replace("_", "") for p in parts), parts=parts, range=ctx.range(node))


@builder("tuple_expression")
def build_tuple(node, ctx):
    slots = [None]
    for child in node.children:
        if isinstance(child, Token):
            if child.type == "COMMA":
                slots.append(None)
        else:
            slots[-1] = ctx.value(child)
    components = () if slots == [None] else tuple(slots)
    return TupleExpression(components=components, range=ctx.range(node))


@builder("inline_array")
def build_inline_array(node, ctx):
    return TupleExpression(components=tuple(ctx.value(t) for t in node.trees()), is_array=True, range=ctx.range(node))
