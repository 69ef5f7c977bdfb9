"""
Phase 2 Tests: Expression tree and walk
"""

from kanon.source import GenericNode, NodeKind, Phase, Property, walk
from kanon.source.nodes import Literal
from tests.builders import assign, call, exports, ident, member, obj, program, prop, span


class TestNodes:
    def test_types_follow_kind(self):
        assert program().type == "Program"
        assert ident("x").kind is NodeKind.IDENTIFIER
        assert member("a", "b").type == "MemberExpression"
        assert GenericNode(span=span(), raw_type="return_statement").type == "return_statement"
        assert GenericNode(span=span()).type == "Other"

    def test_key_name_only_for_identifier_keys(self):
        assert prop("meta").key_name == "meta"
        literal_key = Property(span=span(), key=Literal(span=span(), value="meta", raw="'meta'"))
        assert literal_key.key_name is None

    def test_get_property_returns_first_match(self):
        first = prop("docs", line=1)
        second = prop("docs", line=2)
        assert obj(first, second).get_property("docs") is first
        assert obj(first).get_property("schema") is None

    def test_get_property_ignores_spread_elements(self):
        spread = GenericNode(span=span(), raw_type="spread_element", nodes=[ident("meta")])
        assert obj(spread).get_property("meta") is None

    def test_shorthand_property_visits_key_once(self):
        key = ident("create")
        shorthand = Property(span=span(), key=key, value=key, shorthand=True)
        assert shorthand.children() == [key]


class TestWalk:
    def test_enter_and_exit_in_pre_order(self):
        inner = call(member("context", "report"), obj())
        tree = program(exports(obj(prop("meta"))), inner)

        events = [(node.type, phase) for node, phase in walk(tree)]

        assert events[0] == ("Program", Phase.ENTER)
        assert events[-1] == ("Program", Phase.EXIT)
        assert events.index(("AssignmentExpression", Phase.EXIT)) < events.index(
            ("CallExpression", Phase.ENTER)
        )

    def test_every_node_entered_and_left_once(self):
        tree = program(assign(ident("a"), obj(prop("b", obj(prop("c"))))))
        events = list(walk(tree))
        entered = [id(n) for n, phase in events if phase is Phase.ENTER]
        exited = [id(n) for n, phase in events if phase is Phase.EXIT]
        assert sorted(entered) == sorted(exited)
        assert len(entered) == len(set(entered))

    def test_children_exit_before_parent(self):
        child = ident("x")
        tree = program(child)
        events = list(walk(tree))
        assert events == [
            (tree, Phase.ENTER),
            (child, Phase.ENTER),
            (child, Phase.EXIT),
            (tree, Phase.EXIT),
        ]

    def test_deep_nesting_does_not_recurse(self):
        node = ident("leaf")
        for _ in range(5000):
            node = assign(ident("a"), node)
        count = sum(1 for _ in walk(program(node)))
        assert count == 2 * (1 + 5000 * 2 + 1)
