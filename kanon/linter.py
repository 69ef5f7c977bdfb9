"""Linter: runs configured rules over source units.

For each unit the linter:

1. validates every enabled rule's options against its schema,
2. calls each rule's ``create`` with a fresh RuleContext,
3. walks the expression tree once, dispatching every (node kind, phase)
   event to the handlers registered for it,
4. returns the collected violations sorted by position.

Rules never see each other's state; the only thing they share is the
read-only SourceCode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from loguru import logger

from kanon.config import RuleConfig, RuleSeverity, normalize_rules, validate_rule_options
from kanon.constants import DEFAULT_IGNORE_DIRS, MAX_FILE_SIZE, SOURCE_EXTENSIONS
from kanon.rules import BUILTIN_RULES, Event, Handler, RuleContext, RuleModule
from kanon.source.nodes import walk
from kanon.source.source_code import SourceCode
from kanon.source.tree_sitter_parser import JavaScriptParser
from kanon.types.core import Violation
from kanon.types.errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    KanonError,
    ParseError,
    ResourceError,
    RuleExecutionError,
)


@dataclass
class LintResult:
    """Outcome of linting one file."""

    file_path: str
    violations: list[Violation] = field(default_factory=list)
    fatal_error: str | None = None

    @property
    def error_count(self) -> int:
        count = sum(1 for v in self.violations if v.severity == RuleSeverity.ERROR)
        return count + (1 if self.fatal_error else 0)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == RuleSeverity.WARN)

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "violations": [v.to_dict() for v in self.violations],
            "fatal_error": self.fatal_error,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
        }


class Linter:
    """Runs rules over source units.

    Usage:
        linter = Linter()
        violations = linter.verify_text(text, {"max-lines": ["error", 100]})
    """

    def __init__(
        self,
        rules: Mapping[str, RuleModule] | None = None,
        parser: JavaScriptParser | None = None,
    ) -> None:
        self._rules: dict[str, RuleModule] = dict(BUILTIN_RULES if rules is None else rules)
        self._parser = parser or JavaScriptParser()

    @property
    def rules(self) -> dict[str, RuleModule]:
        return dict(self._rules)

    def define_rule(self, rule_id: str, module: RuleModule) -> None:
        self._rules[rule_id] = module

    # ================================================================
    # Single unit
    # ================================================================

    def _resolve(self, config: Mapping[str, Any]) -> list[tuple[str, RuleModule, RuleConfig]]:
        resolved = []
        for rule_id, rule_config in normalize_rules(config).items():
            if not rule_config.enabled:
                continue
            module = self._rules.get(rule_id)
            if module is None:
                raise ConfigurationError(
                    f"Definition for rule '{rule_id}' was not found",
                    user_message=f"Unknown rule '{rule_id}'.",
                    code=ErrorCode.UNKNOWN_RULE,
                    context=ErrorContext(operation="verify", rule_id=rule_id),
                )
            validate_rule_options(rule_id, module.meta, rule_config.options)
            resolved.append((rule_id, module, rule_config))
        return resolved

    def verify(
        self,
        source_code: SourceCode,
        config: Mapping[str, Any],
        filename: str = "<input>",
    ) -> list[Violation]:
        """Run the configured rules over a parsed unit.

        Raises:
            ConfigurationError: Unknown rule or invalid options.
            RuleExecutionError: A rule handler raised.
        """
        violations: list[Violation] = []
        dispatch: dict[Event, list[tuple[str, Handler]]] = {}

        for rule_id, module, rule_config in self._resolve(config):
            context = RuleContext(
                rule_id=rule_id,
                source_code=source_code,
                sink=violations.append,
                options=rule_config.options,
                severity=int(rule_config.severity),
                filename=filename,
            )
            listeners = self._guarded(rule_id, filename, module.create, context)
            for event, handler in listeners.items():
                dispatch.setdefault(event, []).append((rule_id, handler))

        for node, phase in walk(source_code.ast):
            for rule_id, handler in dispatch.get(Event(node.kind, phase), ()):
                self._guarded(rule_id, filename, handler, node)

        violations.sort(key=lambda v: (v.line, v.column))
        logger.debug("{}: {} violations from {} rules", filename, len(violations), len(dispatch))
        return violations

    @staticmethod
    def _guarded(rule_id: str, filename: str, fn: Any, arg: Any) -> Any:
        try:
            return fn(arg)
        except KanonError:
            raise
        except Exception as e:
            raise RuleExecutionError(
                f"Rule '{rule_id}' failed on {filename}: {e}",
                context=ErrorContext(operation="verify", file_path=filename, rule_id=rule_id),
                original_error=e,
            ) from e

    def verify_text(
        self,
        text: str,
        config: Mapping[str, Any],
        filename: str = "<input>",
    ) -> list[Violation]:
        """Parse ``text`` as JavaScript and verify it.

        Raises:
            ParseError: The text is not valid JavaScript.
        """
        source_code = self._parser.parse(text, filename)
        return self.verify(source_code, config, filename)

    # ================================================================
    # Files
    # ================================================================

    def lint_file(self, path: str | Path, config: Mapping[str, Any]) -> LintResult:
        """Lint one file; read and parse failures become a fatal result.

        Configuration problems still raise, since they affect every file.
        """
        file_path = Path(path)
        display = file_path.as_posix()
        try:
            text = read_source(file_path)
            violations = self.verify_text(text, config, display)
        except (ResourceError, ParseError) as e:
            logger.warning("Skipping {}: {}", display, e)
            return LintResult(file_path=display, fatal_error=e.user_message)
        return LintResult(file_path=display, violations=violations)

    def lint_files(self, paths: Iterable[str | Path], config: Mapping[str, Any]) -> list[LintResult]:
        rules = normalize_rules(config)
        return [self.lint_file(p, rules) for p in iter_source_files(paths)]


def read_source(path: Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        ResourceError: Missing, unreadable or larger than MAX_FILE_SIZE.
    """
    context = ErrorContext(operation="read_source", file_path=str(path))
    try:
        size = path.stat().st_size
        if size > MAX_FILE_SIZE:
            raise ResourceError(
                f"{path} is {size} bytes, limit is {MAX_FILE_SIZE}",
                user_message=f"File too large ({size} bytes).",
                code=ErrorCode.FILE_TOO_LARGE,
                context=context,
            )
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise ResourceError(
            f"File not found: {path}",
            user_message="File not found.",
            context=context,
            original_error=e,
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(
            f"Cannot read {path}: {e}",
            user_message="File could not be read.",
            code=ErrorCode.FILE_READ_FAILED,
            context=context,
            original_error=e,
        ) from e


def iter_source_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Expand paths to source files.

    Files are yielded as given; directories are walked for
    SOURCE_EXTENSIONS, skipping DEFAULT_IGNORE_DIRS.

    Raises:
        ResourceError: A path does not exist.
    """
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            yield path
        elif path.is_dir():
            for candidate in sorted(path.rglob("*")):
                relative_parts = candidate.relative_to(path).parts
                if any(part in DEFAULT_IGNORE_DIRS for part in relative_parts):
                    continue
                if candidate.is_file() and candidate.suffix in SOURCE_EXTENSIONS:
                    yield candidate
        else:
            raise ResourceError(
                f"No such file or directory: {path}",
                user_message=f"No files matching '{path}' were found.",
                code=ErrorCode.INVALID_PATH,
                context=ErrorContext(operation="iter_source_files", file_path=str(path)),
            )
