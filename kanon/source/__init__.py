"""Source unit model: lines, tokens, comments and the expression tree.

Components:
- Token / TokenType / TokenStore: lexical units and neighbour lookup
- Node classes and ``walk``: the expression tree and its pre-order events
- SourceCode: the per-unit view handed to rules
- JavaScriptParser: tree-sitter based parser producing SourceCode

Usage:
    from kanon.source import JavaScriptParser

    source = JavaScriptParser().parse(text, "lib/rules/foo.js")
    for comment in source.get_all_comments():
        print(comment.start.line, comment.value)
"""

from .nodes import (
    AssignmentExpression,
    CallExpression,
    GenericNode,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    NodeKind,
    ObjectExpression,
    Phase,
    Program,
    Property,
    walk,
)
from .source_code import SourceCode, split_lines
from .tokens import COMMENT_TYPES, Token, TokenStore, TokenType, is_comment_token, is_token_on_same_line
from .tree_sitter_parser import JavaScriptParser

__all__ = [
    "AssignmentExpression",
    "CallExpression",
    "COMMENT_TYPES",
    "GenericNode",
    "Identifier",
    "JavaScriptParser",
    "Literal",
    "MemberExpression",
    "Node",
    "NodeKind",
    "ObjectExpression",
    "Phase",
    "Program",
    "Property",
    "SourceCode",
    "Token",
    "TokenStore",
    "TokenType",
    "is_comment_token",
    "is_token_on_same_line",
    "split_lines",
    "walk",
]
