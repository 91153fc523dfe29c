"""Builders for source-unit and contract-level declarations."""

from __future__ import annotations

from lark import Token

from ..ast import (
    ContractDefinition,
    CustomErrorDefinition,
    EnumDefinition,
    EnumValue,
    EventDefinition,
    FileLevelConstant,
    FunctionDefinition,
    ImportDirective,
    InheritanceSpecifier,
    ModifierDefinition,
    ModifierInvocation,
    OverrideSpecifier,
    PragmaDirective,
    SourceUnit,
    StateVariableDeclaration,
    StructDefinition,
    SymbolAlias,
    TypeDefinition,
    UsingForDeclaration,
    VariableDeclaration,
)
from ..cst import label
from ..dispatch import builder
from .common import call_arguments_of, decode_string, keyword


@builder("source_unit")
def build_source_unit(node, ctx):
    return SourceUnit(children=tuple(ctx.value(t) for t in node.trees()), range=ctx.range(node))


@builder("pragma_directive")
def build_pragma(node, ctx):
    value = node.token("PRAGMA_VALUE")
    return PragmaDirective(
        name=str(node.require_token("NAME")),
        value=str(value).strip() if value is not None else "",
        range=ctx.range(node),
    )


@builder("import_directive")
def build_import(node, ctx):
    alias = node.token("NAME")
    return ImportDirective(
        path=decode_string(str(node.require_token("STRING"))),
        unit_alias=str(alias) if alias is not None else None,
        symbol_aliases=tuple(ctx.value(t) for t in node.children_named("symbol_alias")),
        range=ctx.range(node),
    )


@builder("symbol_alias")
def build_symbol_alias(node, ctx):
    names = node.tokens("NAME")
    return SymbolAlias(
        symbol=str(node.require_token("NAME")),
        alias=str(names[1]) if len(names) > 1 else None,
        range=ctx.range(node),
    )


@builder("contract_kind", "visibility", "state_mutability", "storage_location", "constant_keyword", "immutable_keyword")
def build_keyword(node, ctx):
    return keyword(node)


@builder("contract_definition")
def build_contract(node, ctx):
    header = ("contract_kind", "inheritance_list")
    return ContractDefinition(
        name=str(node.require_token("NAME")),
        kind=ctx.value(node.require("contract_kind")),
        is_abstract=node.token("ABSTRACT") is not None,
        base_contracts=ctx.values(node.child("inheritance_list")),
        sub_nodes=tuple(ctx.value(t) for t in node.trees() if label(t) not in header),
        range=ctx.range(node),
    )


@builder("inheritance_list")
def build_inheritance_list(node, ctx):
    return tuple(ctx.value(t) for t in node.trees())


@builder("inheritance_specifier")
def build_inheritance_specifier(node, ctx):
    return InheritanceSpecifier(
        base_name=ctx.value(node.require("user_defined_type_name")),
        arguments=call_arguments_of(ctx, node.child("call_arguments")).arguments,
        range=ctx.range(node),
    )


@builder("state_variable_declaration")
def build_state_variable(node, ctx):
    type_tree = node.tree_at(0, "type name")
    name = node.require_token("NAME")
    visibility = None
    is_constant = False
    is_immutable = False
    override = None
    initial_value = None
    after_name = False
    for child in node.children:
        if isinstance(child, Token):
            after_name = after_name or child is name
            continue
        if child is type_tree:
            continue
        if after_name:
            initial_value = ctx.value(child)
            continue
        kind = label(child)
        if kind == "visibility":
            visibility = ctx.value(child)
        elif kind == "constant_keyword":
            is_constant = True
        elif kind == "immutable_keyword":
            is_immutable = True
        elif kind == "override_specifier":
            override = ctx.value(child)
    variable = VariableDeclaration(
        type_name=ctx.value(type_tree),
        name=str(name),
        visibility=visibility,
        is_state_var=True,
        is_declared_const=is_constant,
        is_immutable=is_immutable,
        override=override,
        range=ctx.range(type_tree, name),
    )
    return StateVariableDeclaration(variables=(variable,), initial_value=initial_value, range=ctx.range(node))


@builder("file_level_constant")
def build_file_level_constant(node, ctx):
    return FileLevelConstant(
        type_name=ctx.value(node.tree_at(0, "type name")),
        name=str(node.require_token("NAME")),
        initial_value=ctx.value(node.tree_at(1, "initial value")),
        range=ctx.range(node),
    )


@builder("using_for_declaration")
def build_using_for(node, ctx):
    target = node.tree_at(0, "library name")
    if label(target) == "using_function_list":
        library_name = None
        functions = tuple(getattr(f, "name_path", "") for f in ctx.values(target))
    else:
        library_name = ctx.value(target).name_path
        functions = ()
    type_name = None if node.token("STAR") is not None else ctx.value(node.tree_at(1, "type name"))
    return UsingForDeclaration(
        library_name=library_name,
        functions=functions,
        type_name=type_name,
        is_global=node.token("GLOBAL") is not None,
        range=ctx.range(node),
    )


@builder("using_function_list", "parameter_list", "event_parameter_list")
def build_node_list(node, ctx):
    return tuple(ctx.value(t) for t in node.trees())


@builder("struct_definition")
def build_struct(node, ctx):
    return StructDefinition(
        name=str(node.require_token("NAME")),
        members=tuple(ctx.value(t) for t in node.children_named("struct_member")),
        range=ctx.range(node),
    )


@builder("struct_member")
def build_struct_member(node, ctx):
    return VariableDeclaration(
        type_name=ctx.value(node.tree_at(0, "type name")),
        name=str(node.require_token("NAME")),
        range=ctx.range(node),
    )


@builder("enum_definition")
def build_enum(node, ctx):
    return EnumDefinition(
        name=str(node.require_token("NAME")),
        members=tuple(ctx.value(t) for t in node.children_named("enum_value")),
        range=ctx.range(node),
    )


@builder("enum_value")
def build_enum_value(node, ctx):
    return EnumValue(name=str(node.require_token("NAME")), range=ctx.range(node))


@builder("event_definition")
def build_event(node, ctx):
    return EventDefinition(
        name=str(node.require_token("NAME")),
        parameters=ctx.values(node.require("event_parameter_list")),
        is_anonymous=node.token("ANONYMOUS") is not None,
        range=ctx.range(node),
    )


@builder("event_parameter")
def build_event_parameter(node, ctx):
    name = node.token("NAME")
    return VariableDeclaration(
        type_name=ctx.value(node.tree_at(0, "type name")),
        name=str(name) if name is not None else None,
        is_indexed=node.token("INDEXED") is not None,
        range=ctx.range(node),
    )


@builder("parameter")
def build_parameter(node, ctx):
    name = node.token("NAME")
    return VariableDeclaration(
        type_name=ctx.value(node.tree_at(0, "type name")),
        name=str(name) if name is not None else None,
        storage_location=ctx.value(node.child("storage_location")),
        range=ctx.range(node),
    )


@builder("custom_error_definition")
def build_custom_error(node, ctx):
    return CustomErrorDefinition(
        name=str(node.require_token("NAME")),
        parameters=ctx.values(node.require("parameter_list")),
        range=ctx.range(node),
    )


@builder("type_definition")
def build_type_definition(node, ctx):
    return TypeDefinition(
        name=str(node.require_token("NAME")),
        definition=ctx.value(node.require("elementary_type_name")),
        range=ctx.range(node),
    )


@builder("modifier_definition")
def build_modifier_definition(node, ctx):
    return ModifierDefinition(
        name=str(node.require_token("NAME")),
        parameters=ctx.values(node.child("parameter_list")),
        is_virtual=node.token("VIRTUAL") is not None,
        override=ctx.value(node.child("override_specifier")),
        body=ctx.value(node.child("block")),
        range=ctx.range(node),
    )


_SPECIAL_FUNCTIONS = {"CONSTRUCTOR": "constructor", "FALLBACK": "fallback", "RECEIVE": "receive"}


@builder("function_definition")
def build_function(node, ctx):
    special = node.token(*_SPECIAL_FUNCTIONS)
    if special is not None:
        kind, name = _SPECIAL_FUNCTIONS[special.type], None
    else:
        kind, name = "function", str(node.require_token("NAME"))
    return FunctionDefinition(
        name=name,
        kind=kind,
        parameters=ctx.values(node.require("parameter_list")),
        return_parameters=ctx.values(node.child("return_parameters")),
        modifiers=tuple(ctx.value(t) for t in node.children_named("modifier_invocation")),
        visibility=ctx.value(node.child("visibility")) or "default",
        state_mutability=ctx.value(node.child("state_mutability")),
        is_virtual=node.token("VIRTUAL") is not None,
        override=ctx.value(node.child("override_specifier")),
        body=ctx.value(node.child("block")),
        range=ctx.range(node),
    )


@builder("return_parameters")
def build_return_parameters(node, ctx):
    return ctx.values(node.require("parameter_list"))


@builder("modifier_invocation")
def build_modifier_invocation(node, ctx):
    return ModifierInvocation(
        name=ctx.value(node.require("user_defined_type_name")).name_path,
        arguments=call_arguments_of(ctx, node.child("call_arguments")).arguments,
        range=ctx.range(node),
    )


@builder("override_specifier")
def build_override(node, ctx):
    return OverrideSpecifier(overrides=tuple(ctx.value(t) for t in node.trees()), range=ctx.range(node))
