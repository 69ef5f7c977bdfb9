"""JavaScript parsing with tree-sitter.

Turns source text into a SourceCode:

- leaf nodes of the concrete syntax tree become code tokens
  (strings, numbers and regexes are kept whole),
- ``comment`` / ``hash_bang_line`` nodes become Block or Line comments,
- syntax nodes are converted to the expression tree in
  ``kanon.source.nodes`` (parentheses unwrapped, as in ESTree).

A leading byte-order mark is dropped before parsing. tree-sitter reports
byte offsets; positions are converted to UTF-16 code unit columns (as
JavaScript counts them) and to the same line numbering ``split_lines`` uses.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import TYPE_CHECKING

from loguru import logger

from kanon.source.nodes import (
    AssignmentExpression,
    CallExpression,
    GenericNode,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    ObjectExpression,
    Program,
    Property,
)
from kanon.source.source_code import LINE_BREAK_PATTERN, SourceCode
from kanon.source.tokens import Token, TokenType
from kanon.types.core import BYTE_ORDER_MARK, Position, SourceSpan
from kanon.types.errors import ErrorCode, ErrorContext, ParseError, RecoveryAction

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode
    from tree_sitter import Parser


COMMENT_NODE_TYPES = frozenset({"comment", "html_comment", "hash_bang_line"})

# Kept as a single token instead of descending into quotes/fragments
ATOMIC_TOKEN_TYPES: dict[str, TokenType] = {
    "string": TokenType.STRING,
    "number": TokenType.NUMERIC,
    "regex": TokenType.REGULAR_EXPRESSION,
}

_LEAF_TOKEN_TYPES: dict[str, TokenType] = {
    "identifier": TokenType.IDENTIFIER,
    "property_identifier": TokenType.IDENTIFIER,
    "shorthand_property_identifier": TokenType.IDENTIFIER,
    "shorthand_property_identifier_pattern": TokenType.IDENTIFIER,
    "private_property_identifier": TokenType.IDENTIFIER,
    "statement_identifier": TokenType.IDENTIFIER,
    "this": TokenType.KEYWORD,
    "super": TokenType.KEYWORD,
    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
    "null": TokenType.NULL,
    "string_fragment": TokenType.TEMPLATE,
    "escape_sequence": TokenType.TEMPLATE,
    "`": TokenType.TEMPLATE,
}

_IDENTIFIER_NODE_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "private_property_identifier",
})

_WORD = re.compile(r"^[A-Za-z_$][\w$]*$")

LANGUAGE = "javascript"


class _PositionIndex:
    """Maps tree-sitter byte offsets to character offsets and line/column positions."""

    def __init__(self, text: str) -> None:
        self._text = text
        encoded = text.encode("utf-8")
        if len(encoded) == len(text):
            self._byte_to_char: list[int] | None = None
        else:
            mapping: list[int] = []
            for index, char in enumerate(text):
                mapping.extend([index] * len(char.encode("utf-8")))
            mapping.append(len(text))
            self._byte_to_char = mapping

        self._line_starts = [0]
        for match in LINE_BREAK_PATTERN.finditer(text):
            self._line_starts.append(match.end())

        self._has_astral = any(ord(char) > 0xFFFF for char in text)

    def char_offset(self, byte_offset: int) -> int:
        if self._byte_to_char is None:
            return byte_offset
        return self._byte_to_char[byte_offset]

    def position(self, char_offset: int) -> Position:
        line_index = bisect_right(self._line_starts, char_offset) - 1
        line_start = self._line_starts[line_index]
        if not self._has_astral:
            return Position(line_index + 1, char_offset - line_start)
        # Columns count UTF-16 code units; astral characters take two
        prefix = self._text[line_start:char_offset]
        return Position(line_index + 1, len(prefix.encode("utf-16-le")) // 2)

    def span(self, node: TSNode) -> SourceSpan:
        start = self.char_offset(node.start_byte)
        end = self.char_offset(node.end_byte)
        return SourceSpan(self.position(start), self.position(end), (start, end))

    def text(self, node: TSNode) -> str:
        return self._text[self.char_offset(node.start_byte) : self.char_offset(node.end_byte)]


class JavaScriptParser:
    """Parse JavaScript text into a SourceCode.

    The tree-sitter parser is loaded lazily on first use and reused.

    Usage:
        parser = JavaScriptParser()
        source = parser.parse("module.exports = {};")
        source.ast.body
    """

    def __init__(self) -> None:
        self._parser: Parser | None = None

    def _ensure_parser(self) -> Parser:
        if self._parser is not None:
            return self._parser

        try:
            import tree_sitter_language_pack as tslp
            from tree_sitter import Parser
        except ImportError as e:
            raise ParseError(
                "tree-sitter is not installed",
                user_message="JavaScript parsing requires tree-sitter.",
                code=ErrorCode.LANGUAGE_UNSUPPORTED,
                context=ErrorContext(operation="load_parser", component="tree_sitter_parser"),
                recovery_actions=[
                    RecoveryAction(
                        "Install the parser dependencies",
                        command="pip install tree-sitter tree-sitter-language-pack",
                    )
                ],
                original_error=e,
            ) from e

        try:
            self._parser = Parser(tslp.get_language(LANGUAGE))
        except Exception as e:
            raise ParseError(
                f"Failed to initialize tree-sitter for {LANGUAGE}: {e}",
                code=ErrorCode.TREE_SITTER_FAILED,
                context=ErrorContext(operation="load_parser", component="tree_sitter_parser"),
                original_error=e,
            ) from e

        logger.debug("Initialized tree-sitter parser for {}", LANGUAGE)
        return self._parser

    def parse(self, text: str, file_path: str | None = None) -> SourceCode:
        """Parse ``text``.

        Raises:
            ParseError: tree-sitter is unavailable or the source has syntax errors.
        """
        parser = self._ensure_parser()
        if text.startswith(BYTE_ORDER_MARK):
            text = text[1:]
        tree = parser.parse(text.encode("utf-8"))
        root = tree.root_node
        index = _PositionIndex(text)

        if root.has_error:
            bad = _first_error_node(root)
            where = index.span(bad).start if bad is not None else Position(1, 0)
            raise ParseError(
                f"Parsing error at {where.line}:{where.column + 1}",
                user_message=f"Syntax error at line {where.line}, column {where.column + 1}.",
                context=ErrorContext(
                    operation="parse",
                    file_path=file_path,
                    component="tree_sitter_parser",
                    additional_info={"line": where.line, "column": where.column},
                ),
            )

        tokens, comments = _collect_tokens(root, index)
        program = _convert(root, index)
        if not isinstance(program, Program):
            program = Program(span=index.span(root), body=[program] if program is not None else [])

        logger.debug(
            "Parsed {}: {} tokens, {} comments",
            file_path or "<text>",
            len(tokens),
            len(comments),
        )
        return SourceCode(text, program, tokens=tokens, comments=comments)


def _first_error_node(root: TSNode) -> TSNode | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


# ============================================================================
# Tokens
# ============================================================================


def _comment_token(node: TSNode, index: _PositionIndex) -> Token:
    raw = index.text(node)
    if raw.startswith("/*"):
        return Token(TokenType.BLOCK, raw[2:-2], index.span(node))
    if raw.startswith("//"):
        return Token(TokenType.LINE, raw[2:], index.span(node))
    return Token(TokenType.LINE, raw, index.span(node))


def _leaf_type(node: TSNode, raw: str) -> TokenType:
    if node.type in _LEAF_TOKEN_TYPES:
        return _LEAF_TOKEN_TYPES[node.type]
    if not node.is_named and _WORD.match(raw):
        return TokenType.KEYWORD
    return TokenType.PUNCTUATOR


def _collect_tokens(root: TSNode, index: _PositionIndex) -> tuple[list[Token], list[Token]]:
    tokens: list[Token] = []
    comments: list[Token] = []

    stack = [root]
    while stack:
        node = stack.pop()
        if node.start_byte == node.end_byte:
            continue
        if node.type in COMMENT_NODE_TYPES:
            comments.append(_comment_token(node, index))
        elif node.type in ATOMIC_TOKEN_TYPES:
            tokens.append(Token(ATOMIC_TOKEN_TYPES[node.type], index.text(node), index.span(node)))
        elif node.child_count == 0:
            raw = index.text(node)
            tokens.append(Token(_leaf_type(node, raw), raw, index.span(node)))
        else:
            stack.extend(reversed(node.children))

    return tokens, comments


# ============================================================================
# Expression tree
# ============================================================================


def _named(node: TSNode) -> list[TSNode]:
    return [c for c in node.named_children if c.type not in COMMENT_NODE_TYPES]


def _convert_all(nodes: list[TSNode], index: _PositionIndex) -> list[Node]:
    converted = (_convert(c, index) for c in nodes)
    return [n for n in converted if n is not None]


def _field(node: TSNode, name: str, index: _PositionIndex) -> Node | None:
    child = node.child_by_field_name(name)
    return _convert(child, index) if child is not None else None


def _literal(node: TSNode, index: _PositionIndex) -> Literal:
    raw = index.text(node)
    value: object
    if node.type == "string":
        value = raw[1:-1]
    elif node.type == "number":
        try:
            value = int(raw)
        except ValueError:
            try:
                value = float(raw)
            except ValueError:
                value = raw
    elif node.type in ("true", "false"):
        value = node.type == "true"
    else:
        value = None
    return Literal(span=index.span(node), value=value, raw=raw)


def _property(node: TSNode, index: _PositionIndex) -> Node | None:
    span = index.span(node)
    if node.type == "pair":
        return Property(span=span, key=_field(node, "key", index), value=_field(node, "value", index))
    if node.type == "shorthand_property_identifier":
        name = index.text(node)
        return Property(
            span=span,
            key=Identifier(span=span, name=name),
            value=Identifier(span=span, name=name),
            shorthand=True,
        )
    if node.type == "method_definition":
        value = GenericNode(span=span, raw_type="FunctionExpression", nodes=_convert_all(_named(node), index))
        return Property(span=span, key=_field(node, "name", index), value=value, method=True)
    return _convert(node, index)


def _convert(node: TSNode, index: _PositionIndex) -> Node | None:
    kind = node.type
    span = index.span(node)

    if kind in COMMENT_NODE_TYPES:
        return None

    if kind == "program":
        return Program(span=span, body=_convert_all(_named(node), index))

    if kind == "parenthesized_expression":
        inner = _named(node)
        return _convert(inner[0], index) if len(inner) == 1 else GenericNode(
            span=span, raw_type="SequenceExpression",
            nodes=_convert_all(inner, index),
        )

    if kind in ("assignment_expression", "augmented_assignment_expression"):
        operator = "="
        if kind == "augmented_assignment_expression":
            op_node = node.child_by_field_name("operator")
            operator = index.text(op_node) if op_node is not None else operator
        return AssignmentExpression(
            span=span,
            left=_field(node, "left", index),
            right=_field(node, "right", index),
            operator=operator,
        )

    if kind == "member_expression":
        return MemberExpression(
            span=span,
            object=_field(node, "object", index),
            property=_field(node, "property", index),
        )

    if kind == "subscript_expression":
        return MemberExpression(
            span=span,
            object=_field(node, "object", index),
            property=_field(node, "index", index),
            computed=True,
        )

    if kind == "call_expression":
        args_node = node.child_by_field_name("arguments")
        arguments: list[Node] = []
        if args_node is not None:
            if args_node.type == "arguments":
                arguments = _convert_all(_named(args_node), index)
            else:
                converted = _convert(args_node, index)
                arguments = [converted] if converted is not None else []
        return CallExpression(span=span, callee=_field(node, "function", index), arguments=arguments)

    if kind == "object":
        return ObjectExpression(
            span=span,
            properties=[n for n in (_property(c, index) for c in _named(node)) if n is not None],
        )

    if kind in _IDENTIFIER_NODE_TYPES:
        return Identifier(span=span, name=index.text(node))

    if kind in ("string", "number", "true", "false", "null"):
        return _literal(node, index)

    return GenericNode(
        span=span,
        raw_type=kind,
        nodes=_convert_all(_named(node), index),
    )
