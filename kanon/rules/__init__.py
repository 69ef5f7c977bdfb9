"""Builtin rules.

Components:
- RuleModule / RuleMeta / RuleDocs: the shape every rule exports
- RuleContext: per-run view of the host handed to ``create``
- Event / PROGRAM_EXIT: traversal dispatch keys
- BUILTIN_RULES: rule id -> RuleModule

Usage:
    from kanon.rules import get_rule

    rule = get_rule("max-lines")
    print(rule.meta.docs.description)
"""

from kanon.types.errors import ConfigurationError, ErrorCode, ErrorContext

from . import internal_no_invalid_meta, max_lines
from .base import (
    PROGRAM_EXIT,
    Event,
    Handler,
    Listeners,
    RuleContext,
    RuleDocs,
    RuleMeta,
    RuleModule,
)

BUILTIN_RULES: dict[str, RuleModule] = {
    max_lines.RULE_ID: max_lines.rule,
    internal_no_invalid_meta.RULE_ID: internal_no_invalid_meta.rule,
}


def get_rule(rule_id: str) -> RuleModule:
    """Look up a builtin rule.

    Raises:
        ConfigurationError: No rule has this id.
    """
    try:
        return BUILTIN_RULES[rule_id]
    except KeyError:
        raise ConfigurationError(
            f"Definition for rule '{rule_id}' was not found",
            user_message=f"Unknown rule '{rule_id}'.",
            code=ErrorCode.UNKNOWN_RULE,
            context=ErrorContext(operation="get_rule", rule_id=rule_id),
        ) from None


__all__ = [
    "BUILTIN_RULES",
    "PROGRAM_EXIT",
    "Event",
    "Handler",
    "Listeners",
    "RuleContext",
    "RuleDocs",
    "RuleMeta",
    "RuleModule",
    "get_rule",
]
