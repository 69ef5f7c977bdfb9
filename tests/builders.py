"""Hand-built tokens, comments and expression nodes for parser-free tests.

Spans are only as precise as each test needs: nodes take the line they
should report on, tokens and comments take full start/end coordinates.
"""

from kanon.source import (
    AssignmentExpression,
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    ObjectExpression,
    Program,
    Property,
    SourceCode,
    Token,
    TokenType,
)
from kanon.types import SourceSpan


def span(line=1, column=0, end_line=None, end_column=None):
    return SourceSpan.from_points(
        line,
        column,
        end_line if end_line is not None else line,
        end_column if end_column is not None else column + 1,
    )


def tok(line, column, end_line=None, end_column=None, value="x", type=TokenType.IDENTIFIER):
    return Token(type, value, span(line, column, end_line, end_column))


def block(line, column, end_line, end_column, value=" c "):
    return Token(TokenType.BLOCK, value, span(line, column, end_line, end_column))


def line_comment(line, column, end_column=None, value=" c"):
    return Token(TokenType.LINE, value, span(line, column, line, end_column))


def source(text, tokens=(), comments=(), body=()):
    return SourceCode(text, Program(span=span(1, 0), body=list(body)), tokens=tokens, comments=comments)


def lines_text(count):
    return "\n".join(f"line{i}" for i in range(1, count + 1))


# ----------------------------------------------------------------------------
# Expression nodes
# ----------------------------------------------------------------------------


def ident(name, line=1):
    return Identifier(span=span(line), name=name)


def member(object_name, property_name, line=1):
    return MemberExpression(span=span(line), object=ident(object_name, line), property=ident(property_name, line))


def prop(name, value=None, line=1):
    return Property(span=span(line), key=ident(name, line), value=value if value is not None else ident("v", line))


def obj(*properties, line=1):
    return ObjectExpression(span=span(line), properties=list(properties))


def assign(left, right, line=1):
    return AssignmentExpression(span=span(line), left=left, right=right)


def call(callee, *arguments, line=1):
    return CallExpression(span=span(line), callee=callee, arguments=list(arguments))


def exports(value, line=1):
    return assign(member("module", "exports", line), value, line)


def program(*body: Node):
    return Program(span=span(1), body=list(body))


def valid_meta(line=2, fixable=False, **overrides):
    """A complete ``meta`` property; pass name=None to drop a piece."""
    docs_names = ["description", "category", "recommended"]
    docs = obj(*[prop(n, line=line) for n in docs_names if overrides.get(n, True) is not None], line=line)
    pieces = []
    if overrides.get("docs", True) is not None:
        pieces.append(prop("docs", docs, line=line))
    if overrides.get("schema", True) is not None:
        pieces.append(prop("schema", line=line))
    if fixable:
        pieces.append(prop("fixable", line=line))
    return prop("meta", obj(*pieces, line=line), line=line)
