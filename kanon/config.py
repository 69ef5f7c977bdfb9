"""Rule configuration: severities, options and option validation.

A rule entry is either a bare severity or ``[severity, *options]``:

    {"rules": {"max-lines": ["error", {"max": 200, "skipComments": true}],
               "internal-no-invalid-meta": "warn"}}

Options are checked against the rule's JSON schema before the rule runs, so
rules can assume they get well-formed options.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Mapping

import jsonschema
from loguru import logger

from kanon.rules.base import RuleMeta
from kanon.types.errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    RecoveryAction,
)


class RuleSeverity(IntEnum):
    OFF = 0
    WARN = 1
    ERROR = 2


_SEVERITY_NAMES = {
    "off": RuleSeverity.OFF,
    "warn": RuleSeverity.WARN,
    "error": RuleSeverity.ERROR,
}


@dataclass(frozen=True)
class RuleConfig:
    """Resolved configuration for one rule."""

    severity: RuleSeverity
    options: tuple[Any, ...] = ()

    @property
    def enabled(self) -> bool:
        return self.severity is not RuleSeverity.OFF


def parse_severity(value: Any, rule_id: str | None = None) -> RuleSeverity:
    """Accept 0/1/2 or "off"/"warn"/"error" (case-insensitive)."""
    if isinstance(value, str) and value.lower() in _SEVERITY_NAMES:
        return _SEVERITY_NAMES[value.lower()]
    if isinstance(value, int) and not isinstance(value, bool) and value in (0, 1, 2):
        return RuleSeverity(value)
    raise ConfigurationError(
        f"Severity should be one of the following: 0 = off, 1 = warn, 2 = error (you passed {value!r})",
        user_message=f"Invalid severity {value!r}.",
        code=ErrorCode.CONFIG_VALIDATION_FAILED,
        context=ErrorContext(operation="parse_severity", rule_id=rule_id),
    )


def normalize_rule_config(value: Any, rule_id: str | None = None) -> RuleConfig:
    """Turn a raw rule entry into a RuleConfig."""
    if isinstance(value, RuleConfig):
        return value
    if isinstance(value, (list, tuple)):
        if not value:
            raise ConfigurationError(
                "Rule configuration list must start with a severity",
                code=ErrorCode.CONFIG_VALIDATION_FAILED,
                context=ErrorContext(operation="normalize_rule_config", rule_id=rule_id),
            )
        return RuleConfig(parse_severity(value[0], rule_id), tuple(value[1:]))
    return RuleConfig(parse_severity(value, rule_id))


def _options_schema(meta: RuleMeta) -> dict[str, Any]:
    if isinstance(meta.schema, list):
        schema: dict[str, Any] = {"type": "array", "minItems": 0, "maxItems": len(meta.schema)}
        if meta.schema:
            schema["items"] = meta.schema
        return schema
    return meta.schema


def validate_rule_options(rule_id: str, meta: RuleMeta, options: tuple[Any, ...]) -> None:
    """Validate ``options`` against the rule's schema.

    A list schema validates options positionally and allows no extra
    options; a dict schema validates the whole options list.

    Raises:
        ConfigurationError: Options don't satisfy the schema.
    """
    schema = _options_schema(meta)
    try:
        jsonschema.Draft7Validator(schema).validate(list(options))
    except jsonschema.ValidationError as e:
        raise ConfigurationError(
            f"Configuration for rule '{rule_id}' is invalid: {e.message}",
            user_message=f"Invalid options for rule '{rule_id}'.",
            code=ErrorCode.CONFIG_VALIDATION_FAILED,
            context=ErrorContext(
                operation="validate_rule_options",
                rule_id=rule_id,
                additional_info={"options": list(options)},
            ),
            original_error=e,
        ) from e


def normalize_rules(rules: Mapping[str, Any]) -> dict[str, RuleConfig]:
    return {rule_id: normalize_rule_config(value, rule_id) for rule_id, value in rules.items()}


def load_config(path: str | Path) -> dict[str, RuleConfig]:
    """Read a JSON config file and return its normalized ``rules`` table.

    Raises:
        ConfigurationError: The file is missing, unreadable or malformed.
    """
    config_path = Path(path)
    context = ErrorContext(operation="load_config", file_path=str(config_path))

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            code=ErrorCode.MISSING_CONFIG,
            context=context,
            recovery_actions=[RecoveryAction("Check the --config path")],
            original_error=e,
        ) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read config file {config_path}: {e}",
            context=context,
            original_error=e,
        ) from e

    if not isinstance(data, dict) or not isinstance(data.get("rules", {}), dict):
        raise ConfigurationError(
            f"Config file {config_path} must be an object with a 'rules' object",
            code=ErrorCode.CONFIG_VALIDATION_FAILED,
            context=context,
        )

    rules = normalize_rules(data.get("rules", {}))
    logger.debug("Loaded {} rule settings from {}", len(rules), config_path)
    return rules
