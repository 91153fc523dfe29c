"""Builders for inline assembly (Yul) blocks."""

from __future__ import annotations

from lark import Token

from ...core.diagnostics import MalformedCstError
from ..ast import (
    AssemblyAssignment,
    AssemblyBlock,
    AssemblyBreak,
    AssemblyCall,
    AssemblyCase,
    AssemblyContinue,
    AssemblyFor,
    AssemblyFunctionDefinition,
    AssemblyIdentifier,
    AssemblyIf,
    AssemblyLeave,
    AssemblyLiteral,
    AssemblyLocalDefinition,
    AssemblyMemberAccess,
    AssemblySwitch,
)
from ..dispatch import builder
from .common import decode_string


def _identifiers(ctx, tokens):
    return tuple(AssemblyIdentifier(name=str(t), range=ctx.range(t)) for t in tokens)


@builder("assembly_block")
def build_assembly_block(node, ctx):
    return AssemblyBlock(operations=tuple(ctx.value(t) for t in node.trees()), range=ctx.range(node))


@builder("assembly_path")
def build_assembly_path(node, ctx):
    names = node.tokens("NAME")
    if not names:
        raise MalformedCstError(node.rule_name, "identifier", range=node.range)
    result = AssemblyIdentifier(name=str(names[0]), range=ctx.range(names[0]))
    for member in names[1:]:
        result = AssemblyMemberAccess(
            expression=result,
            member_name=str(member),
            range=ctx.range(names[0], member),
        )
    return result


@builder("assembly_call")
def build_assembly_call(node, ctx):
    return AssemblyCall(
        function_name=str(node.require_token("NAME")),
        arguments=tuple(ctx.value(t) for t in node.trees()),
        range=ctx.range(node),
    )


_LITERAL_KINDS = {
    "DECIMAL_NUMBER": "number",
    "HEX_NUMBER": "hex-number",
    "STRING": "string",
    "HEX_STRING": "hex-string",
    "TRUE": "bool",
    "FALSE": "bool",
}


@builder("assembly_literal")
def build_assembly_literal(node, ctx):
    tok = node.require_token(*_LITERAL_KINDS)
    kind = _LITERAL_KINDS[tok.type]
    if kind == "string":
        value = decode_string(str(tok))
    elif kind == "hex-string":
        value = str(tok)[4:-1].replace("_", "")
    else:
        value = str(tok)
    return AssemblyLiteral(kind=kind, value=value, range=ctx.range(node))


@builder("assembly_local_definition")
def build_assembly_let(node, ctx):
    trees = node.trees()
    return AssemblyLocalDefinition(
        names=_identifiers(ctx, node.tokens("NAME")),
        expression=ctx.value(trees[0]) if trees else None,
        range=ctx.range(node),
    )


@builder("assembly_assignment")
def build_assembly_assignment(node, ctx):
    targets = []
    value = None
    after_assign = False
    for child in node.children:
        if isinstance(child, Token):
            after_assign = after_assign or child.type == "ASSIGN_YUL"
        elif after_assign:
            value = child
        else:
            targets.append(child)
    if value is None or not targets:
        raise MalformedCstError(node.rule_name, "targets and value", range=node.range)
    return AssemblyAssignment(
        names=tuple(ctx.value(t) for t in targets),
        expression=ctx.value(value),
        range=ctx.range(node),
    )


@builder("assembly_if")
def build_assembly_if(node, ctx):
    return AssemblyIf(
        condition=ctx.value(node.tree_at(0, "condition")),
        body=ctx.value(node.tree_at(1, "body")),
        range=ctx.range(node),
    )


@builder("assembly_for")
def build_assembly_for(node, ctx):
    return AssemblyFor(
        pre=ctx.value(node.tree_at(0, "init block")),
        condition=ctx.value(node.tree_at(1, "condition")),
        post=ctx.value(node.tree_at(2, "post block")),
        body=ctx.value(node.tree_at(3, "body")),
        range=ctx.range(node),
    )


@builder("assembly_switch")
def build_assembly_switch(node, ctx):
    return AssemblySwitch(
        expression=ctx.value(node.tree_at(0, "expression")),
        cases=tuple(ctx.value(t) for t in node.children_named("assembly_case")),
        range=ctx.range(node),
    )


@builder("assembly_case")
def build_assembly_case(node, ctx):
    is_default = node.token("DEFAULT") is not None
    return AssemblyCase(
        value=None if is_default else ctx.value(node.require("assembly_literal")),
        block=ctx.value(node.require("assembly_block")),
        is_default=is_default,
        range=ctx.range(node),
    )


@builder("assembly_function_definition")
def build_assembly_function(node, ctx):
    return AssemblyFunctionDefinition(
        name=str(node.require_token("NAME")),
        arguments=ctx.values(node.child("assembly_identifier_list")),
        return_arguments=ctx.values(node.child("assembly_returns")),
        body=ctx.value(node.require("assembly_block")),
        range=ctx.range(node),
    )


@builder("assembly_identifier_list")
def build_assembly_identifier_list(node, ctx):
    return _identifiers(ctx, node.tokens("NAME"))


@builder("assembly_returns")
def build_assembly_returns(node, ctx):
    return ctx.values(node.require("assembly_identifier_list"))


@builder("assembly_break")
def build_assembly_break(node, ctx):
    return AssemblyBreak(range=ctx.range(node))


@builder("assembly_continue")
def build_assembly_continue(node, ctx):
    return AssemblyContinue(range=ctx.range(node))


@builder("assembly_leave")
def build_assembly_leave(node, ctx):
    return AssemblyLeave(range=ctx.range(node))
