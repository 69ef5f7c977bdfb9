"""SourceCode: everything the rules may read about one source unit."""

from __future__ import annotations

import re
from typing import Iterable

from kanon.source.nodes import Program
from kanon.source.tokens import Token, TokenStore
from kanon.types.core import Line

# Line terminators recognised by ECMAScript
LINE_BREAK_PATTERN = re.compile(r"\r\n|[\r\n\u2028\u2029]")


def split_lines(text: str) -> list[str]:
    """Split text into physical lines.

    Text ending with a line break yields a trailing empty line.
    """
    return LINE_BREAK_PATTERN.split(text)


class SourceCode:
    """Parsed view of a source unit: raw lines, tokens, comments and tree.

    Built once per unit by a parser (or directly in tests) and never
    mutated afterwards.
    """

    def __init__(
        self,
        text: str,
        ast: Program,
        tokens: Iterable[Token] = (),
        comments: Iterable[Token] = (),
        lines: list[str] | None = None,
    ) -> None:
        self.text = text
        self.ast = ast
        self.lines: list[str] = lines if lines is not None else split_lines(text)
        self._store = TokenStore(tokens, comments)

    @property
    def tokens(self) -> list[Token]:
        return self._store.tokens

    @property
    def comments(self) -> list[Token]:
        return self._store.comments

    def get_lines(self) -> list[Line]:
        """Numbered lines, 1-based."""
        return [Line(i, text) for i, text in enumerate(self.lines, start=1)]

    def get_all_comments(self) -> list[Token]:
        return self._store.comments

    def get_token_or_comment_before(self, item: Token) -> Token | None:
        return self._store.token_or_comment_before(item)

    def get_token_or_comment_after(self, item: Token) -> Token | None:
        return self._store.token_or_comment_after(item)

    def get_token_before(self, item: Token) -> Token | None:
        """Nearest code token before ``item``, skipping comments."""
        return self._store.token_before(item)

    def get_token_after(self, item: Token) -> Token | None:
        """Nearest code token after ``item``, skipping comments."""
        return self._store.token_after(item)
