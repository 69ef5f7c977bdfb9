"""Shared constants and helpers for Kanon.

Centralizes rule defaults, the identifiers the rule-definition check looks
for, source extensions, ignore directories and timezone-aware datetime
helpers.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime.

    Usable directly as a ``default_factory`` in dataclass fields.
    """
    return datetime.now(timezone.utc)


# Line budget applied by max-lines when no "max" is configured
DEFAULT_MAX_LINES: int = 300

# module.exports = {...} marks the rule definition object
MODULE_EXPORT_OBJECT: str = "module"
MODULE_EXPORT_PROPERTY: str = "exports"

# context.report({... fix ...}) marks a rule as fixable
RULE_CONTEXT_OBJECT: str = "context"
RULE_REPORT_METHOD: str = "report"
FIX_PROPERTY: str = "fix"

# File suffixes picked up when a directory is linted
SOURCE_EXTENSIONS: frozenset[str] = frozenset({".js", ".cjs", ".mjs"})

# Maximum file size to lint (1 MB).
# Larger files are reported as errors instead of being parsed.
MAX_FILE_SIZE: int = 1_000_000

# Directories to skip during file traversal.
DEFAULT_IGNORE_DIRS: set[str] = {
    "node_modules",
    ".git",
    "__pycache__",
    ".venv",
    "venv",
    "dist",
    "build",
    "coverage",
    ".tox",
    ".svn",
}
