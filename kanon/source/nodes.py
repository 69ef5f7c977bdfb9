"""Expression tree model and pre-order traversal events.

Only the node kinds the rules inspect get their own class; every other
syntax kind is a GenericNode that keeps the parser's raw type name and its
children so the walk still reaches everything below it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import Any, Iterator

from kanon.types.core import SourceSpan


class NodeKind(StrEnum):
    """Structural node kinds used as dispatch keys."""

    PROGRAM = "Program"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    PROPERTY = "Property"
    MEMBER_EXPRESSION = "MemberExpression"
    CALL_EXPRESSION = "CallExpression"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    OTHER = "Other"


class Phase(Enum):
    """Whether a node is being entered or left during the walk."""

    ENTER = "enter"
    EXIT = "exit"


@dataclass(eq=False)
class Node:
    """Base class for expression tree nodes."""

    span: SourceSpan

    kind = NodeKind.OTHER

    @property
    def type(self) -> str:
        return self.kind.value

    def children(self) -> list[Node]:
        return []


@dataclass(eq=False)
class Program(Node):
    body: list[Node] = field(default_factory=list)

    kind = NodeKind.PROGRAM

    def children(self) -> list[Node]:
        return list(self.body)


@dataclass(eq=False)
class Identifier(Node):
    name: str = ""

    kind = NodeKind.IDENTIFIER


@dataclass(eq=False)
class Literal(Node):
    value: Any = None
    raw: str = ""

    kind = NodeKind.LITERAL


@dataclass(eq=False)
class MemberExpression(Node):
    object: Node | None = None
    property: Node | None = None
    computed: bool = False

    kind = NodeKind.MEMBER_EXPRESSION

    def children(self) -> list[Node]:
        return [n for n in (self.object, self.property) if n is not None]


@dataclass(eq=False)
class AssignmentExpression(Node):
    left: Node | None = None
    right: Node | None = None
    operator: str = "="

    kind = NodeKind.ASSIGNMENT_EXPRESSION

    def children(self) -> list[Node]:
        return [n for n in (self.left, self.right) if n is not None]


@dataclass(eq=False)
class Property(Node):
    key: Node | None = None
    value: Node | None = None
    shorthand: bool = False
    method: bool = False

    kind = NodeKind.PROPERTY

    @property
    def key_name(self) -> str | None:
        """Name of an identifier key; None for literal or computed keys."""
        if isinstance(self.key, Identifier):
            return self.key.name
        return None

    def children(self) -> list[Node]:
        if self.shorthand:
            return [self.key] if self.key is not None else []
        return [n for n in (self.key, self.value) if n is not None]


@dataclass(eq=False)
class ObjectExpression(Node):
    """Object literal. ``properties`` may also hold spread elements."""

    properties: list[Node] = field(default_factory=list)

    kind = NodeKind.OBJECT_EXPRESSION

    def children(self) -> list[Node]:
        return list(self.properties)

    def get_property(self, name: str) -> Property | None:
        """First property whose identifier key is ``name``."""
        for prop in self.properties:
            if isinstance(prop, Property) and prop.key_name == name:
                return prop
        return None


@dataclass(eq=False)
class CallExpression(Node):
    callee: Node | None = None
    arguments: list[Node] = field(default_factory=list)

    kind = NodeKind.CALL_EXPRESSION

    def children(self) -> list[Node]:
        head = [self.callee] if self.callee is not None else []
        return head + list(self.arguments)


@dataclass(eq=False)
class GenericNode(Node):
    """Any syntax kind without a dedicated class."""

    raw_type: str = ""
    nodes: list[Node] = field(default_factory=list)

    @property
    def type(self) -> str:
        return self.raw_type or self.kind.value

    def children(self) -> list[Node]:
        return list(self.nodes)


def walk(root: Node) -> Iterator[tuple[Node, Phase]]:
    """Pre-order walk yielding (node, ENTER) going down, (node, EXIT) coming up.

    Iterative so deeply nested sources don't hit the recursion limit.
    """
    stack: list[tuple[Node, Phase]] = [(root, Phase.ENTER)]
    while stack:
        node, phase = stack.pop()
        yield node, phase
        if phase is Phase.ENTER:
            stack.append((node, Phase.EXIT))
            for child in reversed(node.children()):
                stack.append((child, Phase.ENTER))
