from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Tuple

from lark import Token

from ...core.diagnostics import MalformedCstError
from ...core.span import Range
from ..ast import (
    ArrayTypeName,
    ElementaryTypeName,
    ErrorNode,
    FunctionTypeName,
    Identifier,
    IndexAccess,
    Mapping,
    MemberAccess,
    Node,
    NameValueList,
    UserDefinedTypeName,
)

if TYPE_CHECKING:
    from ..transform import BuildContext


@dataclass(frozen=True)
class CallArguments:
    """Converted `call_arguments`: either positional arguments or a name/value list."""

    arguments: Tuple[Node, ...] = ()
    names: Tuple[str, ...] = ()
    identifiers: Tuple[Identifier, ...] = ()


def call_arguments_of(ctx: "BuildContext", child: Any) -> CallArguments:
    """Value of an optional `call_arguments` child; absent means an empty argument list."""
    value = ctx.value(child)
    if value is None:
        return CallArguments()
    if isinstance(value, CallArguments):
        return value
    return CallArguments(arguments=(value,))


def keyword(node) -> str:
    """Text of a `!`-rule that matches a single keyword token."""
    tok = next((c for c in node.children if isinstance(c, Token)), None)
    if tok is None:
        raise MalformedCstError(node.rule_name, "keyword", range=node.range)
    return str(tok)


_ESCAPE = re.compile(r"\\(?:x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})|(.))", re.S)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def decode_string(raw: str) -> str:
    """
    Decode a quoted string token body.

    `\\xNN` escapes are raw bytes, so the body is assembled as UTF-8 bytes and
    decoded once at the end. Unknown escapes are kept verbatim.
    """
    body = raw[1:-1]
    out = bytearray()
    pos = 0
    for m in _ESCAPE.finditer(body):
        out += body[pos:m.start()].encode("utf-8")
        hex_byte, code_point, other = m.groups()
        if hex_byte is not None:
            out.append(int(hex_byte, 16))
        elif code_point is not None:
            out += chr(int(code_point, 16)).encode("utf-8")
        elif other in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[other].encode("utf-8")
        else:
            out += m.group(0).encode("utf-8")
        pos = m.end()
    out += body[pos:].encode("utf-8")
    return out.decode("utf-8", errors="replace")


_TYPE_NODES = (ElementaryTypeName, UserDefinedTypeName, ArrayTypeName, Mapping, FunctionTypeName, ErrorNode)


def _dotted_path(expr: Node) -> Optional[str]:
    names = []
    cur = expr
    while isinstance(cur, MemberAccess):
        names.append(cur.member_name)
        cur = cur.expression
    if not isinstance(cur, Identifier):
        return None
    names.append(cur.name)
    return ".".join(reversed(names))


def expression_to_type(expr: Any, *, rule: str, error_range: Optional[Range]) -> Node:
    """
    Narrow an expression parsed in type position (`uint[] memory x`,
    `Lib.Point p`) to the equivalent type name.
    """
    dims = []
    base = expr
    while isinstance(base, IndexAccess):
        dims.append(base)
        base = base.base
    if isinstance(base, _TYPE_NODES):
        result = base
    elif isinstance(base, (Identifier, MemberAccess)):
        path = _dotted_path(base)
        if path is None:
            raise MalformedCstError(rule, "type name", range=error_range)
        result = UserDefinedTypeName(name_path=path, range=base.range)
    else:
        raise MalformedCstError(rule, "type name", range=error_range)
    for access in reversed(dims):
        result = ArrayTypeName(base_type_name=result, length=access.index, range=access.range)
    return result


def name_value_list(pairs, rng: Optional[Range]) -> NameValueList:
    identifiers = tuple(ident for ident, _ in pairs)
    return NameValueList(
        names=tuple(ident.name for ident in identifiers),
        identifiers=identifiers,
        arguments=tuple(value for _, value in pairs),
        range=rng,
    )


__all__ = [
    "CallArguments",
    "call_arguments_of",
    "decode_string",
    "expression_to_type",
    "keyword",
    "name_value_list",
]
