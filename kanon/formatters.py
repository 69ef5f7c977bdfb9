"""Output formatting for lint results.

- ``text``: per-file blocks of ``line:column  severity  message  rule-id``
  followed by a problem summary (nothing at all for a clean run)
- ``json``: the serialized list of LintResult
"""

from __future__ import annotations

import json
from typing import Callable

from kanon.config import RuleSeverity
from kanon.linter import LintResult
from kanon.utils.serialization import serialize_to_primitives

_SEVERITY_LABELS = {
    RuleSeverity.WARN: "warning",
    RuleSeverity.ERROR: "error",
}


def _plural(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def format_text(results: list[LintResult]) -> str:
    lines: list[str] = []
    errors = warnings = 0

    for result in results:
        errors += result.error_count
        warnings += result.warning_count
        if not result.violations and not result.fatal_error:
            continue

        lines.append(result.file_path)
        if result.fatal_error:
            lines.append(f"  0:0  error  {result.fatal_error}")
        for v in result.violations:
            label = _SEVERITY_LABELS.get(RuleSeverity(v.severity), "error")
            lines.append(f"  {v.location}  {label}  {v.message}  {v.rule_id}")
        lines.append("")

    total = errors + warnings
    if total:
        lines.append(
            f"✖ {total} {_plural('problem', total)} "
            f"({errors} {_plural('error', errors)}, {warnings} {_plural('warning', warnings)})"
        )
    return "\n".join(lines)


def format_json(results: list[LintResult]) -> str:
    return json.dumps(serialize_to_primitives(results), indent=2)


FORMATTERS: dict[str, Callable[[list[LintResult]], str]] = {
    "text": format_text,
    "json": format_json,
}
