"""Token and comment model plus position-sorted neighbour lookup.

Comments are lexically disjoint from code tokens, so the nearest code token
before (or after) a comment is found with a binary search over the code
tokens alone; no walking through intervening comments is needed.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable

from kanon.types.core import Position, SourceSpan


class TokenType(StrEnum):
    """Lexical token kinds (ESTree naming)."""

    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    PUNCTUATOR = "Punctuator"
    STRING = "String"
    NUMERIC = "Numeric"
    TEMPLATE = "Template"
    REGULAR_EXPRESSION = "RegularExpression"
    BOOLEAN = "Boolean"
    NULL = "Null"

    # Comments
    BLOCK = "Block"
    LINE = "Line"


COMMENT_TYPES: frozenset[TokenType] = frozenset({TokenType.BLOCK, TokenType.LINE})


@dataclass(frozen=True)
class Token:
    """A lexical unit (or comment) with its source span."""

    type: TokenType
    value: str
    span: SourceSpan

    @property
    def is_comment(self) -> bool:
        return self.type in COMMENT_TYPES

    @property
    def start(self) -> Position:
        return self.span.start

    @property
    def end(self) -> Position:
        return self.span.end


def is_comment_token(token: Token | None) -> bool:
    """True if token is a Block or Line comment."""
    return token is not None and token.is_comment


def is_token_on_same_line(left: Token, right: Token) -> bool:
    """True if ``left`` ends on the line where ``right`` starts."""
    return left.end.line == right.start.line


def _sort_key(token: Token) -> Position:
    return token.start


class TokenStore:
    """Ordered index over code tokens and comments.

    Offers the two lookups the rules need:

    - nearest neighbour of any kind (``token_or_comment_before/after``)
    - nearest code token, comments skipped (``token_before/after``)

    Both are binary searches over start positions.
    """

    def __init__(self, tokens: Iterable[Token], comments: Iterable[Token]) -> None:
        self._tokens = sorted(tokens, key=_sort_key)
        self._comments = sorted(comments, key=_sort_key)
        self._merged = sorted([*self._tokens, *self._comments], key=_sort_key)

        self._token_starts = [t.start for t in self._tokens]
        self._merged_starts = [t.start for t in self._merged]

    @property
    def tokens(self) -> list[Token]:
        return list(self._tokens)

    @property
    def comments(self) -> list[Token]:
        return list(self._comments)

    def __len__(self) -> int:
        return len(self._merged)

    # ----------------------------------------------------------------
    # Any-kind neighbours
    # ----------------------------------------------------------------

    def token_or_comment_before(self, item: Token) -> Token | None:
        """Nearest token or comment that starts before ``item``."""
        index = bisect_left(self._merged_starts, item.start)
        return self._merged[index - 1] if index > 0 else None

    def token_or_comment_after(self, item: Token) -> Token | None:
        """Nearest token or comment that starts after ``item`` starts."""
        index = bisect_right(self._merged_starts, item.start)
        return self._merged[index] if index < len(self._merged) else None

    # ----------------------------------------------------------------
    # Code-token neighbours
    # ----------------------------------------------------------------

    def token_before(self, item: Token) -> Token | None:
        """Nearest non-comment token that starts before ``item``."""
        index = bisect_left(self._token_starts, item.start)
        return self._tokens[index - 1] if index > 0 else None

    def token_after(self, item: Token) -> Token | None:
        """Nearest non-comment token that starts at or after ``item``'s end."""
        index = bisect_left(self._token_starts, item.end)
        return self._tokens[index] if index < len(self._tokens) else None
