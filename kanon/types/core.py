"""
Core types for locating things in a source unit.

Lines are 1-based, columns are 0-based. These are the shapes shared by the
parser, the rules and the reporting layer.
"""

from __future__ import annotations

from dataclasses import dataclass

# U+FEFF: dropped from the start of a unit, whitespace everywhere else
BYTE_ORDER_MARK = "\ufeff"


@dataclass(frozen=True)
class LineRange:
    """Represents an inclusive range of lines in a source file."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ValueError("start must be positive")
        if self.end < self.start:
            raise ValueError("end must be >= start")

    @property
    def line_count(self) -> int:
        """Number of lines in this range."""
        return self.end - self.start + 1

    def contains(self, line: int) -> bool:
        """Check if a line number is within this range (inclusive)."""
        return self.start <= line <= self.end

    def lines(self) -> range:
        """Iterate the line numbers covered by this range."""
        return range(self.start, self.end + 1)


@dataclass(frozen=True, order=True)
class Position:
    """A point in the source: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceSpan:
    """Start/end positions plus the character offsets they correspond to."""

    start: Position
    end: Position
    range: tuple[int, int] = (0, 0)

    @classmethod
    def from_points(
        cls,
        start_line: int,
        start_column: int,
        end_line: int,
        end_column: int,
        range: tuple[int, int] = (0, 0),
    ) -> SourceSpan:
        return cls(
            start=Position(start_line, start_column),
            end=Position(end_line, end_column),
            range=range,
        )


@dataclass(frozen=True)
class Line:
    """One physical line of a source unit."""

    line_number: int
    text: str

    @property
    def is_blank(self) -> bool:
        return not self.text.replace(BYTE_ORDER_MARK, " ").strip()


@dataclass(frozen=True)
class Violation:
    """A single reported rule failure."""

    rule_id: str
    message: str
    line: int
    column: int
    severity: int = 2
    end_line: int | None = None
    end_column: int | None = None
    node_type: str | None = None

    @property
    def location(self) -> str:
        """Location string for display (column shown 1-based)."""
        return f"{self.line}:{self.column + 1}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "node_type": self.node_type,
        }
