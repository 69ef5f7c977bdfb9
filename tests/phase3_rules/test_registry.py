"""
Phase 3 Tests: rule registry and RuleContext
"""

import pytest

from kanon.rules import BUILTIN_RULES, PROGRAM_EXIT, Event, RuleContext, get_rule
from kanon.source import NodeKind, Phase
from kanon.types import ConfigurationError, ErrorCode, Position
from tests.builders import ident, source


class TestRegistry:
    def test_builtin_rule_ids(self):
        assert set(BUILTIN_RULES) == {"max-lines", "internal-no-invalid-meta"}

    def test_get_rule(self):
        rule = get_rule("max-lines")
        assert rule.meta.docs.description == "enforce a maximum number of lines per file"
        assert rule.meta.docs.category == "Stylistic Issues"
        assert get_rule("internal-no-invalid-meta").meta.schema == []

    def test_unknown_rule(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_rule("no-such-rule")
        assert exc_info.value.code == ErrorCode.UNKNOWN_RULE


class TestEvent:
    def test_default_phase_is_enter(self):
        assert Event(NodeKind.CALL_EXPRESSION) == (NodeKind.CALL_EXPRESSION, Phase.ENTER)

    def test_program_exit(self):
        assert PROGRAM_EXIT == Event(NodeKind.PROGRAM, Phase.EXIT)
        assert PROGRAM_EXIT != Event(NodeKind.PROGRAM)


class TestRuleContext:
    def _context(self, sink):
        return RuleContext("demo", source("a"), sink, options=(1,), severity=1, filename="a.js")

    def test_report_at_node(self):
        seen = []
        context = self._context(seen.append)
        violation = context.report(ident("x", line=2), "bad")
        assert seen == [violation]
        assert (violation.line, violation.column) == (2, 0)
        assert (violation.end_line, violation.end_column) == (2, 1)
        assert violation.node_type == "Identifier"
        assert violation.severity == 1
        assert violation.rule_id == "demo"

    def test_loc_takes_precedence(self):
        seen = []
        violation = self._context(seen.append).report(ident("x", line=2), "bad", loc=Position(7, 3))
        assert (violation.line, violation.column) == (7, 3)
        assert violation.end_line is None

    def test_report_needs_a_location(self):
        with pytest.raises(ValueError):
            self._context(lambda v: None).report(message="nowhere")

    def test_source_code_and_options(self):
        context = self._context(lambda v: None)
        assert context.get_source_code().lines == ["a"]
        assert context.options == (1,)
