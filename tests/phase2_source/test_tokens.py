"""
Phase 2 Tests: Tokens and TokenStore

Tests for neighbour lookup over code tokens and comments:
- Nearest token or comment on either side
- Nearest code token with comments skipped
- Same-line checks
"""

from kanon.source import TokenStore, TokenType, is_comment_token, is_token_on_same_line
from tests.builders import block, line_comment, tok


class TestTokenPredicates:
    def test_is_comment_token(self):
        assert is_comment_token(block(1, 0, 1, 5)) is True
        assert is_comment_token(line_comment(1, 0, 4)) is True
        assert is_comment_token(tok(1, 0)) is False
        assert is_comment_token(None) is False

    def test_same_line_uses_left_end_and_right_start(self):
        comment = block(2, 4, 5, 2)
        assert is_token_on_same_line(tok(2, 0, end_column=3), comment) is True
        assert is_token_on_same_line(comment, tok(5, 3)) is True
        assert is_token_on_same_line(tok(1, 0), comment) is False
        assert is_token_on_same_line(comment, tok(6, 0)) is False


class TestTokenStore:
    """Neighbour lookups over a small mixed stream.

    Layout (line:column):
        1:0  a
        1:2  /* first */   (comment, ends 1:13)
        2:0  // second     (comment)
        3:0  b
    """

    def _store(self):
        self.a = tok(1, 0, value="a")
        self.first = block(1, 2, 1, 13, value=" first ")
        self.second = line_comment(2, 0, 9, value=" second")
        self.b = tok(3, 0, value="b")
        return TokenStore([self.b, self.a], [self.second, self.first])

    def test_sorted_views(self):
        store = self._store()
        assert store.tokens == [self.a, self.b]
        assert store.comments == [self.first, self.second]
        assert len(store) == 4

    def test_token_or_comment_neighbours(self):
        store = self._store()
        assert store.token_or_comment_before(self.second) is self.first
        assert store.token_or_comment_after(self.first) is self.second
        assert store.token_or_comment_before(self.a) is None
        assert store.token_or_comment_after(self.b) is None

    def test_code_token_neighbours_skip_comments(self):
        store = self._store()
        assert store.token_before(self.second) is self.a
        assert store.token_after(self.first) is self.b
        assert store.token_before(self.first) is self.a
        assert store.token_after(self.second) is self.b

    def test_no_code_tokens(self):
        comment = block(1, 0, 3, 2)
        store = TokenStore([], [comment])
        assert store.token_before(comment) is None
        assert store.token_after(comment) is None

    def test_comment_types(self):
        assert block(1, 0, 1, 4).type is TokenType.BLOCK
        assert line_comment(1, 0).type is TokenType.LINE
