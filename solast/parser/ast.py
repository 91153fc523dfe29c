from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from ..core.span import Range


@dataclass(frozen=True)
class Node:
    """Base of every AST variant. `type` is the variant tag used by walkers and serializers."""

    type: ClassVar[str] = "Node"
    range: Optional[Range] = field(default=None, kw_only=True, compare=False)

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if "type" not in cls.__dict__:
            cls.type = cls.__name__


# --------------------------------------------------------------------- source


@dataclass(frozen=True)
class SourceUnit(Node):
    children: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class PragmaDirective(Node):
    name: str
    value: str


@dataclass(frozen=True)
class SymbolAlias(Node):
    symbol: str
    alias: Optional[str] = None


@dataclass(frozen=True)
class ImportDirective(Node):
    path: str
    unit_alias: Optional[str] = None
    symbol_aliases: Tuple[SymbolAlias, ...] = ()


@dataclass(frozen=True)
class ContractDefinition(Node):
    name: str
    kind: str
    is_abstract: bool = False
    base_contracts: Tuple["InheritanceSpecifier", ...] = ()
    sub_nodes: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class InheritanceSpecifier(Node):
    base_name: "UserDefinedTypeName"
    arguments: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class OverrideSpecifier(Node):
    overrides: Tuple["UserDefinedTypeName", ...] = ()


@dataclass(frozen=True)
class VariableDeclaration(Node):
    """
    A declared name with its type, shared by state variables, parameters,
    struct members, event parameters and local declarations.
    """

    type_name: Optional[Node]
    name: Optional[str] = None
    storage_location: Optional[str] = None
    visibility: Optional[str] = None
    is_state_var: bool = False
    is_declared_const: bool = False
    is_immutable: bool = False
    is_indexed: bool = False
    override: Optional[OverrideSpecifier] = None


@dataclass(frozen=True)
class StateVariableDeclaration(Node):
    variables: Tuple[VariableDeclaration, ...]
    initial_value: Optional[Node] = None


@dataclass(frozen=True)
class FileLevelConstant(Node):
    type_name: Node
    name: str
    initial_value: Node


@dataclass(frozen=True)
class UsingForDeclaration(Node):
    """`library_name` is None for the `using {f, g} for T` form; `type_name` is None for `*`."""

    library_name: Optional[str]
    functions: Tuple[str, ...] = ()
    type_name: Optional[Node] = None
    is_global: bool = False


@dataclass(frozen=True)
class StructDefinition(Node):
    name: str
    members: Tuple[VariableDeclaration, ...] = ()


@dataclass(frozen=True)
class EnumValue(Node):
    name: str


@dataclass(frozen=True)
class EnumDefinition(Node):
    name: str
    members: Tuple[EnumValue, ...] = ()


@dataclass(frozen=True)
class EventDefinition(Node):
    name: str
    parameters: Tuple[VariableDeclaration, ...] = ()
    is_anonymous: bool = False


@dataclass(frozen=True)
class CustomErrorDefinition(Node):
    name: str
    parameters: Tuple[VariableDeclaration, ...] = ()


@dataclass(frozen=True)
class TypeDefinition(Node):
    name: str
    definition: "ElementaryTypeName"


@dataclass(frozen=True)
class ModifierInvocation(Node):
    name: str
    arguments: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class ModifierDefinition(Node):
    name: str
    parameters: Tuple[VariableDeclaration, ...] = ()
    is_virtual: bool = False
    override: Optional[OverrideSpecifier] = None
    body: Optional["Block"] = None


@dataclass(frozen=True)
class FunctionDefinition(Node):
    """
    `kind` is one of "function", "constructor", "fallback" or "receive";
    only plain functions carry a name. `visibility` is "default" when no
    visibility keyword was written. `body` is None for declarations
    terminated by `;`.
    """

    name: Optional[str]
    kind: str = "function"
    parameters: Tuple[VariableDeclaration, ...] = ()
    return_parameters: Tuple[VariableDeclaration, ...] = ()
    modifiers: Tuple[ModifierInvocation, ...] = ()
    visibility: str = "default"
    state_mutability: Optional[str] = None
    is_virtual: bool = False
    override: Optional[OverrideSpecifier] = None
    body: Optional["Block"] = None


# ---------------------------------------------------------------------- types


@dataclass(frozen=True)
class ElementaryTypeName(Node):
    name: str
    state_mutability: Optional[str] = None


@dataclass(frozen=True)
class UserDefinedTypeName(Node):
    name_path: str


@dataclass(frozen=True)
class Mapping(Node):
    key_type: Node
    key_name: Optional[str] = None
    value_type: Optional[Node] = None
    value_name: Optional[str] = None


@dataclass(frozen=True)
class ArrayTypeName(Node):
    base_type_name: Node
    length: Optional[Node] = None


@dataclass(frozen=True)
class FunctionTypeName(Node):
    parameter_types: Tuple[VariableDeclaration, ...] = ()
    return_types: Tuple[VariableDeclaration, ...] = ()
    visibility: str = "default"
    state_mutability: Optional[str] = None


# ----------------------------------------------------------------- statements


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Node


@dataclass(frozen=True)
class VariableDeclarationStatement(Node):
    # Tuple declarations may leave slots empty: `(, uint b) = f();`
    variables: Tuple[Optional[VariableDeclaration], ...]
    initial_value: Optional[Node] = None


@dataclass(frozen=True)
class IfStatement(Node):
    condition: Node
    true_body: Node
    false_body: Optional[Node] = None


@dataclass(frozen=True)
class ForStatement(Node):
    init_expression: Optional[Node]
    condition_expression: Optional[Node]
    loop_expression: Optional[Node]
    body: Node


@dataclass(frozen=True)
class WhileStatement(Node):
    condition: Node
    body: Node


@dataclass(frozen=True)
class DoWhileStatement(Node):
    body: Node
    condition: Node


@dataclass(frozen=True)
class ContinueStatement(Node):
    pass


@dataclass(frozen=True)
class BreakStatement(Node):
    pass


@dataclass(frozen=True)
class ReturnStatement(Node):
    expression: Optional[Node] = None


@dataclass(frozen=True)
class ThrowStatement(Node):
    pass


@dataclass(frozen=True)
class EmitStatement(Node):
    event_call: "FunctionCall"


@dataclass(frozen=True)
class RevertStatement(Node):
    revert_call: "FunctionCall"


@dataclass(frozen=True)
class CatchClause(Node):
    kind: Optional[str]
    parameters: Tuple[VariableDeclaration, ...] = ()
    body: Optional[Block] = None


@dataclass(frozen=True)
class TryStatement(Node):
    expression: Node
    return_parameters: Tuple[VariableDeclaration, ...] = ()
    body: Optional[Block] = None
    catch_clauses: Tuple[CatchClause, ...] = ()


@dataclass(frozen=True)
class UncheckedStatement(Node):
    block: Block


@dataclass(frozen=True)
class InlineAssemblyStatement(Node):
    language: Optional[str]
    flags: Tuple[str, ...] = ()
    body: Optional["AssemblyBlock"] = None


# ---------------------------------------------------------------- expressions


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class NumberLiteral(Node):
    number: str
    subdenomination: Optional[str] = None


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str
    parts: Tuple[str, ...] = ()
    is_unicode: bool = False


@dataclass(frozen=True)
class HexLiteral(Node):
    value: str
    parts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TupleExpression(Node):
    components: Tuple[Optional[Node], ...] = ()
    is_array: bool = False


@dataclass(frozen=True)
class MemberAccess(Node):
    expression: Node
    member_name: str


@dataclass(frozen=True)
class IndexAccess(Node):
    base: Node
    index: Optional[Node] = None


@dataclass(frozen=True)
class IndexRangeAccess(Node):
    base: Node
    index_start: Optional[Node] = None
    index_end: Optional[Node] = None


@dataclass(frozen=True)
class UnaryOperation(Node):
    operator: str
    sub_expression: Node
    is_prefix: bool = True


@dataclass(frozen=True)
class BinaryOperation(Node):
    """Binary operators and assignments (`operator` is "=", "+=", ...)."""

    operator: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Conditional(Node):
    condition: Node
    true_expression: Node
    false_expression: Node


@dataclass(frozen=True)
class FunctionCall(Node):
    """
    A call expression. Positional calls leave `names` and `identifiers`
    empty; named-argument calls carry one name and one Identifier per
    argument, in source order and of equal length to `arguments`.
    """

    expression: Node
    arguments: Tuple[Node, ...] = ()
    names: Tuple[str, ...] = ()
    identifiers: Tuple[Identifier, ...] = ()


@dataclass(frozen=True)
class NewExpression(Node):
    type_name: Node


@dataclass(frozen=True)
class NameValueList(Node):
    names: Tuple[str, ...] = ()
    identifiers: Tuple[Identifier, ...] = ()
    arguments: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class NameValueExpression(Node):
    expression: Node
    arguments: NameValueList


# ------------------------------------------------------------------- assembly


@dataclass(frozen=True)
class AssemblyBlock(Node):
    operations: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class AssemblyIdentifier(Node):
    name: str


@dataclass(frozen=True)
class AssemblyMemberAccess(Node):
    expression: Node
    member_name: str


@dataclass(frozen=True)
class AssemblyLiteral(Node):
    # kind: "number", "hex-number", "string", "hex-string" or "bool"
    kind: str
    value: str


@dataclass(frozen=True)
class AssemblyCall(Node):
    function_name: str
    arguments: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class AssemblyLocalDefinition(Node):
    names: Tuple[AssemblyIdentifier, ...]
    expression: Optional[Node] = None


@dataclass(frozen=True)
class AssemblyAssignment(Node):
    names: Tuple[Node, ...]
    expression: Node


@dataclass(frozen=True)
class AssemblyIf(Node):
    condition: Node
    body: AssemblyBlock


@dataclass(frozen=True)
class AssemblyFor(Node):
    pre: AssemblyBlock
    condition: Node
    post: AssemblyBlock
    body: AssemblyBlock


@dataclass(frozen=True)
class AssemblyCase(Node):
    value: Optional[AssemblyLiteral]
    block: AssemblyBlock
    is_default: bool = False


@dataclass(frozen=True)
class AssemblySwitch(Node):
    expression: Node
    cases: Tuple[AssemblyCase, ...] = ()


@dataclass(frozen=True)
class AssemblyFunctionDefinition(Node):
    name: str
    arguments: Tuple[AssemblyIdentifier, ...] = ()
    return_arguments: Tuple[AssemblyIdentifier, ...] = ()
    body: Optional[AssemblyBlock] = None


@dataclass(frozen=True)
class AssemblyBreak(Node):
    pass


@dataclass(frozen=True)
class AssemblyContinue(Node):
    pass


@dataclass(frozen=True)
class AssemblyLeave(Node):
    pass


# ------------------------------------------------------------------ catch-alls


@dataclass(frozen=True)
class Unsupported(Node):
    """A CST node with no dedicated conversion, kept with its source text."""

    rule: str
    text: str
    children: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class ErrorNode(Node):
    """Placeholder for input that failed to parse or convert (tolerant mode)."""

    type = "Error"
    message: str
    rule: Optional[str] = None
