"""internal-no-invalid-meta: rule definitions must carry a complete ``meta``.

Checks the object assigned to ``module.exports`` in a rule source file:

    module.exports = {
        meta: {
            docs: {description, category, recommended},
            schema,
            fixable,        # only when some context.report({... fix ...}) exists
        },
        create,
    };

Only the first missing piece is reported. A file with no
``module.exports = {...}`` is left alone.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from kanon.constants import (
    FIX_PROPERTY,
    MODULE_EXPORT_OBJECT,
    MODULE_EXPORT_PROPERTY,
    RULE_CONTEXT_OBJECT,
    RULE_REPORT_METHOD,
)
from kanon.rules.base import (
    PROGRAM_EXIT,
    Event,
    Listeners,
    RuleContext,
    RuleDocs,
    RuleMeta,
    RuleModule,
)
from kanon.source.nodes import (
    AssignmentExpression,
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    NodeKind,
    ObjectExpression,
    Property,
)

RULE_ID = "internal-no-invalid-meta"

# Nested properties required under meta.docs, in reporting order
REQUIRED_DOCS_PROPERTIES = ("description", "category", "recommended")


@dataclass
class MetaCheckState:
    """Evidence gathered while walking one source unit."""

    exports_node: ObjectExpression | None = None
    is_fixable: bool = False


def get_property(node: Node | None, name: str) -> Property | None:
    """Property ``name`` of an object literal; None for anything else."""
    if isinstance(node, ObjectExpression):
        return node.get_property(name)
    return None


def _is_member(node: Node | None, object_name: str, property_name: str) -> bool:
    return (
        isinstance(node, MemberExpression)
        and isinstance(node.object, Identifier)
        and node.object.name == object_name
        and isinstance(node.property, Identifier)
        and node.property.name == property_name
    )


def is_module_exports_assignment(node: AssignmentExpression) -> bool:
    return (
        _is_member(node.left, MODULE_EXPORT_OBJECT, MODULE_EXPORT_PROPERTY)
        and isinstance(node.right, ObjectExpression)
    )


def is_fixable_report_call(node: CallExpression) -> bool:
    """``context.report({... fix ...})`` with a single descriptor argument.

    Only the one-argument form can carry a fix, so the positional
    ``context.report(node, message)`` form never counts.
    """
    return (
        _is_member(node.callee, RULE_CONTEXT_OBJECT, RULE_REPORT_METHOD)
        and len(node.arguments) == 1
        and get_property(node.arguments[0], FIX_PROPERTY) is not None
    )


def check_meta_validity(context: RuleContext, state: MetaCheckState) -> None:
    """Report the first problem with the exported ``meta``, if any."""
    exports_node = state.exports_node
    if exports_node is None:
        logger.debug("{}: no module.exports object found", context.filename)
        return

    meta = exports_node.get_property("meta")
    if meta is None:
        context.report(exports_node, "Rule is missing a meta property.")
        return

    docs = get_property(meta.value, "docs")
    if docs is None:
        context.report(meta, "Rule is missing a meta.docs property.")
        return

    for name in REQUIRED_DOCS_PROPERTIES:
        if get_property(docs.value, name) is None:
            context.report(meta, f"Rule is missing a meta.docs.{name} property.")
            return

    if get_property(meta.value, "schema") is None:
        context.report(meta, "Rule is missing a meta.schema property.")
        return

    if state.is_fixable and get_property(meta.value, "fixable") is None:
        context.report(meta, "Rule is fixable, but is missing a meta.fixable property.")


def create(context: RuleContext) -> Listeners:
    state = MetaCheckState()

    def on_assignment(node: Node) -> None:
        if isinstance(node, AssignmentExpression) and is_module_exports_assignment(node):
            # Last assignment wins.
            # TODO: confirm with rule authors whether the first export should win instead.
            state.exports_node = node.right

    def on_call(node: Node) -> None:
        if isinstance(node, CallExpression) and is_fixable_report_call(node):
            state.is_fixable = True

    def on_program_exit(node: Node) -> None:
        check_meta_validity(context, state)

    return {
        Event(NodeKind.ASSIGNMENT_EXPRESSION): on_assignment,
        Event(NodeKind.CALL_EXPRESSION): on_call,
        PROGRAM_EXIT: on_program_exit,
    }


rule = RuleModule(
    meta=RuleMeta(
        docs=RuleDocs(
            description="enforce correct use of `meta` property in core rules",
            category="Internal",
            recommended=False,
        ),
        schema=[],
    ),
    create=create,
)
