"""
Phase 3 Tests: max-lines

Runs the rule through Linter.verify on hand-built SourceCode so comment and
token positions are exact and no parser is involved.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kanon.linter import Linter
from kanon.rules.max_lines import (
    MaxLinesOptions,
    code_free_lines,
    count_lines,
    resolve_options,
)
from kanon.source import SourceCode
from kanon.types import ConfigurationError, LineRange
from tests.builders import block, line_comment, lines_text, program, source, tok

MESSAGE = "File must be at most {} lines long"


def run(code, *options, severity="error"):
    return Linter().verify(code, {"max-lines": [severity, *options]})


class TestLimit:
    """Plain line counting against the maximum."""

    def test_at_limit_passes(self):
        assert run(source(lines_text(5)), 5) == []

    def test_one_under_limit_fails(self):
        violations = run(source(lines_text(5)), 4)
        assert len(violations) == 1
        violation = violations[0]
        assert violation.message == MESSAGE.format(4)
        assert violation.rule_id == "max-lines"
        assert (violation.line, violation.column) == (1, 0)
        assert violation.node_type is None

    def test_object_form(self):
        assert run(source(lines_text(3)), {"max": 2})[0].message == MESSAGE.format(2)

    def test_default_is_300(self):
        assert run(source(lines_text(300))) == []
        assert run(source(lines_text(301)))[0].message == MESSAGE.format(300)

    def test_trailing_newline_counts_as_a_line(self):
        assert run(source("a\nb\n"), 2)[0].message == MESSAGE.format(2)

    def test_zero_max_flags_even_empty_text(self):
        assert len(run(source(""), 0)) == 1

    def test_unit_without_lines_never_violates(self):
        code = SourceCode("", program(), lines=[])
        assert run(code, 0) == []

    def test_integer_and_object_forms_agree(self):
        assert resolve_options(12).max == resolve_options({"max": 12}).max

    def test_severity_is_carried(self):
        assert run(source(lines_text(2)), 1, severity="warn")[0].severity == 1

    def test_reported_once_per_unit(self):
        assert len(run(source(lines_text(50)), 1)) == 1


class TestSkipBlankLines:
    def test_whitespace_only_lines_are_skipped(self):
        code = source("a\n\n   \n\t\nb")
        assert run(code, {"max": 2, "skipBlankLines": True}) == []
        assert len(run(code, {"max": 2})) == 1

    def test_count(self):
        code = source("a\n\n b \n")
        assert count_lines(code, MaxLinesOptions(skip_blank_lines=True)) == 2


class TestSkipComments:
    """Comment-only lines stop counting; lines shared with code still count."""

    def test_block_comment_between_code_on_edge_lines(self):
        # 12 lines; code on lines 1-5, a comment from 5 to 10, code on 10-12
        text = lines_text(12)
        tokens = [tok(n, 0) for n in (1, 2, 3, 4)] + [tok(5, 0, end_column=3)]
        comment = block(5, 4, 10, 2)
        tokens += [tok(10, 3), tok(11, 0), tok(12, 0)]
        code = source(text, tokens=tokens, comments=[comment])

        assert code_free_lines(code, comment) == LineRange(6, 9)
        assert count_lines(code, MaxLinesOptions(skip_comments=True)) == 8
        assert run(code, {"max": 8, "skipComments": True}) == []
        assert run(code, {"max": 7, "skipComments": True})[0].message == MESSAGE.format(7)

    def test_lone_comment_line_is_skipped(self):
        code = source(
            "a\n// note\nb",
            tokens=[tok(1, 0), tok(3, 0)],
            comments=[line_comment(2, 0, 7)],
        )
        assert count_lines(code, MaxLinesOptions(skip_comments=True)) == 2

    def test_trailing_comment_keeps_its_line(self):
        comment = line_comment(1, 3, 10)
        code = source("a; // note", tokens=[tok(1, 0), tok(1, 1, value=";")], comments=[comment])
        assert code_free_lines(code, comment) is None
        assert count_lines(code, MaxLinesOptions(skip_comments=True)) == 1

    def test_comment_followed_by_code_keeps_its_line(self):
        comment = block(1, 0, 1, 7)
        code = source("/* a */ b", tokens=[tok(1, 8)], comments=[comment])
        assert code_free_lines(code, comment) is None

    def test_neighbouring_comments_do_not_anchor_lines(self):
        # /* a */ /* b */ alone on one line, with code on the lines around them
        first = block(2, 0, 2, 7)
        second = block(2, 8, 2, 15)
        code = source(
            "x\n/* a */ /* b */\ny",
            tokens=[tok(1, 0), tok(3, 0)],
            comments=[first, second],
        )
        assert code_free_lines(code, first) == LineRange(2, 2)
        assert code_free_lines(code, second) == LineRange(2, 2)
        assert count_lines(code, MaxLinesOptions(skip_comments=True)) == 2

    def test_file_of_only_comments(self):
        comment = block(1, 0, 3, 2)
        code = source("/*\n*\n*/", comments=[comment])
        assert count_lines(code, MaxLinesOptions(skip_comments=True)) == 0

    def test_overlapping_ranges_are_counted_once(self):
        code = source(
            "// a\n// b\nc",
            tokens=[tok(3, 0)],
            comments=[line_comment(1, 0, 4), line_comment(2, 0, 4)],
        )
        assert count_lines(code, MaxLinesOptions(skip_comments=True)) == 1

    def test_both_skips_combined(self):
        code = source(
            "a\n\n// c\n\nb",
            tokens=[tok(1, 0), tok(5, 0)],
            comments=[line_comment(3, 0, 4)],
        )
        options = MaxLinesOptions(skip_comments=True, skip_blank_lines=True)
        assert count_lines(code, options) == 2

    def test_comments_ignored_without_option(self):
        code = source("// a\n// b", comments=[line_comment(1, 0, 4), line_comment(2, 0, 4)])
        assert count_lines(code, MaxLinesOptions()) == 2


class TestResolveOptions:
    @pytest.mark.parametrize(
        ("option", "expected"),
        [
            (None, MaxLinesOptions()),
            (10, MaxLinesOptions(max=10)),
            (0, MaxLinesOptions(max=0)),
            ({}, MaxLinesOptions()),
            ({"max": 5}, MaxLinesOptions(max=5)),
            ({"skipComments": True}, MaxLinesOptions(skip_comments=True)),
            ({"max": 7, "skipBlankLines": True}, MaxLinesOptions(max=7, skip_blank_lines=True)),
            ({"max": "many"}, MaxLinesOptions()),
        ],
    )
    def test_forms(self, option, expected):
        assert resolve_options(option) == expected


class TestOptionSchema:
    @pytest.mark.parametrize("options", [[-1], ["10"], [{"max": 1, "extra": True}], [1, 2]])
    def test_invalid_options_are_rejected(self, options):
        with pytest.raises(ConfigurationError):
            run(source("a"), *options)


@given(st.lists(st.text(alphabet="ab /*", max_size=8), min_size=1, max_size=40))
@settings(max_examples=100)
def test_unskipped_count_equals_physical_lines(lines):
    code = source("\n".join(lines))
    assert count_lines(code, MaxLinesOptions()) == len(lines)
    assert count_lines(code, MaxLinesOptions(skip_comments=True)) == len(lines)
