"""max-lines: enforce a maximum number of lines per file.

With ``skipComments`` a line only stops counting when a comment is the only
thing on it. Whether a comment shares its first or last line with code is
decided by the nearest code token on either side (other comments never
anchor a line), so ``foo(); /* a`` ... ``b */ bar();`` keeps both edge lines
and drops only the lines strictly between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from kanon.constants import DEFAULT_MAX_LINES
from kanon.rules.base import PROGRAM_EXIT, Listeners, RuleContext, RuleDocs, RuleMeta, RuleModule
from kanon.source.nodes import Node
from kanon.source.source_code import SourceCode
from kanon.source.tokens import Token, is_token_on_same_line
from kanon.types.core import LineRange, Position

RULE_ID = "max-lines"

SCHEMA: list[dict[str, Any]] = [
    {
        "oneOf": [
            {
                "type": "integer",
                "minimum": 0,
            },
            {
                "type": "object",
                "properties": {
                    "max": {"type": "integer", "minimum": 0},
                    "skipComments": {"type": "boolean"},
                    "skipBlankLines": {"type": "boolean"},
                },
                "additionalProperties": False,
            },
        ]
    }
]


@dataclass(frozen=True)
class MaxLinesOptions:
    max: int = DEFAULT_MAX_LINES
    skip_comments: bool = False
    skip_blank_lines: bool = False


def resolve_options(option: Any = None) -> MaxLinesOptions:
    """Resolve the first configured option into MaxLinesOptions.

    An integer is the maximum; a mapping may set max, skipComments and
    skipBlankLines. Anything else means defaults.
    """
    if isinstance(option, bool):
        return MaxLinesOptions()
    if isinstance(option, int):
        return MaxLinesOptions(max=option)
    if isinstance(option, dict):
        limit = option.get("max")
        if isinstance(limit, bool) or not isinstance(limit, (int, float)):
            limit = DEFAULT_MAX_LINES
        return MaxLinesOptions(
            max=int(limit),
            skip_comments=bool(option.get("skipComments", False)),
            skip_blank_lines=bool(option.get("skipBlankLines", False)),
        )
    return MaxLinesOptions()


def code_free_lines(source_code: SourceCode, comment: Token) -> LineRange | None:
    """Lines of ``comment`` that hold no code, or None if there are none."""
    start = comment.start.line
    end = comment.end.line

    before = source_code.get_token_before(comment)
    if before is not None and is_token_on_same_line(before, comment):
        start += 1

    after = source_code.get_token_after(comment)
    if after is not None and is_token_on_same_line(comment, after):
        end -= 1

    if start <= end:
        return LineRange(start, end)
    return None


def count_lines(source_code: SourceCode, options: MaxLinesOptions) -> int:
    """Number of lines that count against the budget."""
    lines = source_code.get_lines()

    if options.skip_blank_lines:
        lines = [line for line in lines if not line.is_blank]

    if options.skip_comments:
        comment_lines: set[int] = set()
        for comment in source_code.get_all_comments():
            code_free = code_free_lines(source_code, comment)
            if code_free is not None:
                comment_lines.update(code_free.lines())
        lines = [line for line in lines if line.line_number not in comment_lines]
        logger.debug("{}: {} comment-only lines skipped", RULE_ID, len(comment_lines))

    return len(lines)


def create(context: RuleContext) -> Listeners:
    options = resolve_options(context.options[0] if context.options else None)

    def on_program_exit(node: Node) -> None:
        count = count_lines(context.get_source_code(), options)
        logger.debug("{}: {} lines counted, max {}", context.filename, count, options.max)
        if count > options.max:
            context.report(
                loc=Position(line=1, column=0),
                message=f"File must be at most {options.max} lines long",
            )

    return {PROGRAM_EXIT: on_program_exit}


rule = RuleModule(
    meta=RuleMeta(
        docs=RuleDocs(
            description="enforce a maximum number of lines per file",
            category="Stylistic Issues",
            recommended=False,
        ),
        schema=SCHEMA,
    ),
    create=create,
)
