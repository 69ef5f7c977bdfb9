"""
Kanon type definitions.

This module exports the location types and the error hierarchy.
"""

# Core types
from .core import Line, LineRange, Position, SourceSpan, Violation

# Error types
from .errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    KanonError,
    ParseError,
    RecoveryAction,
    ResourceError,
    RuleExecutionError,
)

__all__ = [
    # Core types
    "Line",
    "LineRange",
    "Position",
    "SourceSpan",
    "Violation",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "KanonError",
    "ConfigurationError",
    "ParseError",
    "ResourceError",
    "RuleExecutionError",
]
