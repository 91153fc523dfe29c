"""Builders for type names."""

from __future__ import annotations

from lark import Token

from ..ast import ArrayTypeName, ElementaryTypeName, FunctionTypeName, Mapping, UserDefinedTypeName
from ..dispatch import builder


@builder("elementary_type_name")
def build_elementary_type_name(node, ctx):
    payable = node.token("PAYABLE")
    return ElementaryTypeName(
        name=str(node.require_token("ELEMENTARY_TYPE")),
        state_mutability="payable" if payable is not None else None,
        range=ctx.range(node),
    )


@builder("user_defined_type_name")
def build_user_defined_type_name(node, ctx):
    node.require_token("NAME")
    return UserDefinedTypeName(name_path=".".join(str(t) for t in node.tokens("NAME")), range=ctx.range(node))


@builder("mapping")
def build_mapping(node, ctx):
    key_tree = node.tree_at(0, "key type")
    value_tree = node.tree_at(1, "value type")
    key_name = value_name = None
    seen_value = False
    for child in node.children:
        if child is value_tree:
            seen_value = True
        elif isinstance(child, Token) and child.type == "NAME":
            if seen_value:
                value_name = str(child)
            else:
                key_name = str(child)
    return Mapping(
        key_type=ctx.value(key_tree),
        key_name=key_name,
        value_type=ctx.value(value_tree),
        value_name=value_name,
        range=ctx.range(node),
    )


@builder("array_type_name")
def build_array_type_name(node, ctx):
    trees = node.trees()
    return ArrayTypeName(
        base_type_name=ctx.value(node.tree_at(0, "base type")),
        length=ctx.value(trees[1]) if len(trees) > 1 else None,
        range=ctx.range(node),
    )


@builder("function_type_name")
def build_function_type_name(node, ctx):
    return FunctionTypeName(
        parameter_types=ctx.values(node.require("parameter_list")),
        return_types=ctx.values(node.child("return_parameters")),
        visibility=ctx.value(node.child("visibility")) or "default",
        state_mutability=ctx.value(node.child("state_mutability")),
        range=ctx.range(node),
    )
