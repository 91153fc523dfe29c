from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from lark.tree import Meta

from ..core.diagnostics import E_LEX, E_SYNTAX, LEXICAL, SYNTACTIC, ParseError, ParserError
from ..core.span import Range, range_of, source_range

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text(encoding="utf-8")

START_SOURCE_UNIT = "source_unit"
START_EXPRESSION = "expression"

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    lexer="contextual",
    start=[START_SOURCE_UNIT, START_EXPRESSION],
    propagate_positions=True,
    maybe_placeholders=False,
)

# Markers the tolerant engine feeds in place of unparseable input.
ERROR_EXPR = "ERROR_EXPR"
ERROR_ITEM = "ERROR_ITEM"
_MARKERS = (ERROR_EXPR, ERROR_ITEM)
# Fed, in order of preference, when the input ends inside an open construct.
_CLOSERS = (("RPAR", ")"), ("RSQB", "]"), ("RBRACE", "}"))
_TERMINATORS = (("SEMICOLON", ";"), ("LBRACE", "{"))
_END = "$END"


@dataclass(frozen=True)
class ConcreteTree:
    """Engine output: the Lark tree, the text it was parsed from and any recorded errors."""

    tree: Tree
    source: str
    errors: Tuple[ParseError, ...] = ()


def _describe(token: Token) -> str:
    if token.type == _END:
        return "end of input"
    return f"{token.type} {str(token)!r}"


def _error_from_lark(err: UnexpectedInput, source: str) -> ParseError:
    """Convert a Lark exception into a ParseError with a best-effort range."""
    if isinstance(err, UnexpectedToken):
        token = err.token
        rng = range_of(token)
        if rng is None or token.type == _END:
            # $END borrows the last real token's position; report end of input instead.
            end = source_range(source)
            rng = Range(end.end_line, end.end_column, end.end_offset, end.end_line, end.end_column, end.end_offset)
        expected = sorted(t for t in err.expected if not t.startswith("ERROR_"))
        msg = f"{E_SYNTAX}: unexpected {_describe(token)}"
        if expected:
            msg += f", expected one of: {', '.join(expected[:8])}"
            if len(expected) > 8:
                msg += ", ..."
        return ParseError(message=msg, range=rng, code=E_SYNTAX, kind=SYNTACTIC)
    if isinstance(err, UnexpectedCharacters):
        offset = err.pos_in_stream
        char = source[offset] if offset < len(source) else ""
        rng = Range(err.line, err.column, offset, err.line, err.column + 1, min(offset + 1, len(source)))
        return ParseError(message=f"{E_LEX}: illegal character {char!r}", range=rng, code=E_LEX, kind=LEXICAL)
    line = getattr(err, "line", None) or 1
    column = getattr(err, "column", None) or 1
    offset = getattr(err, "pos_in_stream", None) or 0
    return ParseError(
        message=f"{E_SYNTAX}: {err}",
        range=Range(line, column, offset, line, column, offset),
        code=E_SYNTAX,
        kind=SYNTACTIC,
    )


class _Recovery:
    """
    `on_error` callback for tolerant parsing.

    Each call either consumes the offending token (dropped or re-fed after a
    marker) or skips one character, so the parse always makes progress.
    """

    def __init__(self, source: str, max_errors: int) -> None:
        self.source = source
        self.max_errors = max_errors
        self.errors: List[ParseError] = []
        self._last_lex_end: Optional[int] = None

    def record(self, err: UnexpectedInput) -> None:
        self.errors.append(_error_from_lark(err, self.source))

    def __call__(self, err: UnexpectedInput) -> bool:
        if isinstance(err, UnexpectedCharacters):
            return self._skip_character(err)
        if not isinstance(err, UnexpectedToken) or err.interactive_parser is None:
            return False
        ip = err.interactive_parser
        token = err.token
        stack = ip.parser_state.value_stack
        in_error_run = bool(stack) and isinstance(stack[-1], Token) and stack[-1].type in _MARKERS
        if not in_error_run:
            if len(self.errors) >= self.max_errors:
                logger.debug("recovery budget of %d errors exhausted", self.max_errors)
                return False
            self.record(err)
            self._feed_marker(ip, token)
        if token.type == _END:
            return self._close(ip, token)
        if token.type in ip.accepts():
            ip.feed_token(token)
        else:
            logger.debug("dropping %s at %s:%s", token.type, token.line, token.column)
        return True

    def _skip_character(self, err: UnexpectedCharacters) -> bool:
        # A run of illegal characters is one error.
        if self._last_lex_end != err.pos_in_stream:
            if len(self.errors) >= self.max_errors:
                return False
            self.record(err)
        self._last_lex_end = err.pos_in_stream + 1
        return True

    def _feed_marker(self, ip, token: Token) -> bool:
        accepts = ip.accepts()
        for marker in _MARKERS:
            if marker in accepts:
                logger.debug("feeding %s before %s", marker, _describe(token))
                ip.feed_token(Token.new_borrow_pos(marker, "", token))
                return True
        return False

    def _close(self, ip, token: Token) -> bool:
        """Feed synthetic tokens until the parser can accept end of input."""
        for _ in range(len(self.source) + 16):
            accepts = ip.accepts()
            if _END in accepts:
                return True
            pick = next(((kind, text) for kind, text in _CLOSERS if kind in accepts), None)
            if pick is None and ERROR_EXPR in accepts:
                ip.feed_token(Token.new_borrow_pos(ERROR_EXPR, "", token))
                continue
            if pick is None:
                pick = next(((kind, text) for kind, text in _TERMINATORS if kind in accepts), None)
            if pick is None:
                return False
            ip.feed_token(Token.new_borrow_pos(pick[0], pick[1], token))
        return False


def _fallback_tree(source: str) -> Tree:
    """An empty source unit holding one error item that spans the whole input."""
    rng = source_range(source)
    marker = Token(
        ERROR_ITEM,
        "",
        start_pos=rng.start_offset,
        line=rng.start_line,
        column=rng.start_column,
        end_line=rng.end_line,
        end_column=rng.end_column,
        end_pos=rng.end_offset,
    )
    meta = Meta()
    meta.empty = False
    meta.line, meta.column, meta.start_pos = rng.start_line, rng.start_column, rng.start_offset
    meta.end_line, meta.end_column, meta.end_pos = rng.end_line, rng.end_column, rng.end_offset
    item = Tree("error_item", [marker], meta)
    return Tree(START_SOURCE_UNIT, [item], meta)


def parse_cst(source: str, *, tolerant: bool = False, max_errors: int = 100, start: str = START_SOURCE_UNIT) -> ConcreteTree:
    """
    Run the Lark parser over `source`.

    Strict mode raises ParserError on the first lexical or syntactic error.
    Tolerant mode always returns a tree; errors are recorded on the result
    and error markers stand in for the input that could not be parsed.
    """
    if not tolerant:
        try:
            tree = _PARSER.parse(source, start=start)
        except UnexpectedInput as err:
            raise ParserError([_error_from_lark(err, source)]) from err
        return ConcreteTree(tree=tree, source=source)

    recovery = _Recovery(source, max_errors)
    try:
        tree = _PARSER.parse(source, start=start, on_error=recovery)
    except UnexpectedInput as err:
        logger.debug("recovery gave up after %d errors: %s", len(recovery.errors), err)
        if len(recovery.errors) < max_errors:
            recovery.record(err)
        tree = _fallback_tree(source)
    if recovery.errors:
        logger.debug("tolerant parse recorded %d errors", len(recovery.errors))
    return ConcreteTree(tree=tree, source=source, errors=tuple(recovery.errors))


__all__ = ["ConcreteTree", "parse_cst", "START_SOURCE_UNIT", "START_EXPRESSION"]
