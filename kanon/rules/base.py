"""Rule module shape shared by every check.

A rule is a RuleModule: static metadata (docs and the JSON schema its
options must satisfy) plus a ``create`` factory. The host calls ``create``
once per source unit with a fresh RuleContext; the factory returns a table
mapping traversal events to handlers, and the host dispatches the walk of the
expression tree through that table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, NamedTuple

from kanon.source.nodes import Node, NodeKind, Phase
from kanon.source.source_code import SourceCode
from kanon.types.core import Position, Violation


class Event(NamedTuple):
    """Dispatch key: a node kind and whether it is being entered or left."""

    kind: NodeKind
    phase: Phase = Phase.ENTER


# Fired once, after every node of the unit has been seen
PROGRAM_EXIT = Event(NodeKind.PROGRAM, Phase.EXIT)

Handler = Callable[[Node], None]
Listeners = Mapping[Event, Handler]


@dataclass(frozen=True)
class RuleDocs:
    description: str
    category: str
    recommended: bool = False


@dataclass(frozen=True)
class RuleMeta:
    """Static metadata: documentation and the options schema."""

    docs: RuleDocs
    schema: list[dict[str, Any]] | dict[str, Any] = field(default_factory=list)
    fixable: str | None = None


@dataclass(frozen=True)
class RuleModule:
    meta: RuleMeta
    create: Callable[[RuleContext], Listeners]


class RuleContext:
    """What a rule sees of the host during one run.

    Holds the rule's resolved options and the source unit, and forwards
    reports to the host's sink as Violations.
    """

    def __init__(
        self,
        rule_id: str,
        source_code: SourceCode,
        sink: Callable[[Violation], None],
        options: tuple[Any, ...] = (),
        severity: int = 2,
        filename: str = "<input>",
    ) -> None:
        self.rule_id = rule_id
        self.source_code = source_code
        self.options = options
        self.severity = severity
        self.filename = filename
        self._sink = sink

    def get_source_code(self) -> SourceCode:
        return self.source_code

    def report(
        self,
        node: Node | None = None,
        message: str = "",
        loc: Position | None = None,
    ) -> Violation:
        """Record a violation at ``loc`` if given, else at ``node``'s start."""
        if loc is None and node is None:
            raise ValueError("report() needs a node or a loc")

        end_line = end_column = None
        if loc is None:
            loc = node.span.start
            end_line, end_column = node.span.end.line, node.span.end.column

        violation = Violation(
            rule_id=self.rule_id,
            message=message,
            line=loc.line,
            column=loc.column,
            severity=self.severity,
            end_line=end_line,
            end_column=end_column,
            node_type=node.type if node is not None else None,
        )
        self._sink(violation)
        return violation
