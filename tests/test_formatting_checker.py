"""
Tests for the formatting checker
================================
"""

import pytest

from base_checker import IssueCategory, IssueSeverity, IssueLocation
from compose_context import BlockKind, BodyModelBuilder, build_snapshot
from formatting_checker import FormattingChecker


@pytest.fixture
def checker() -> FormattingChecker:
    return FormattingChecker()


def rule_ids(issues):
    return [issue.rule_id for issue in issues]


class TestRawTextRules:

    def test_mixed_tabs_and_spaces(self, checker):
        issues = checker.analyze("\tone\n  two")
        assert rule_ids(issues) == ['FM001']
        assert issues[0].severity == IssueSeverity.MEDIUM

    def test_tabs_only(self, checker):
        assert checker.analyze("\tone\n\ttwo") == []

    def test_four_blank_lines(self, checker):
        issues = checker.analyze("a\n\n\n\n\nb")
        assert rule_ids(issues) == ['FM002']
        assert issues[0].severity == IssueSeverity.LOW

    def test_three_blank_lines_allowed(self, checker):
        assert checker.analyze("a\n\n\n\nb") == []

    def test_mixed_list_markers_in_text(self, checker):
        assert rule_ids(checker.analyze("- apples\n1. pears")) == ['FM003']

    def test_trailing_whitespace(self, checker):
        text = "first\nsecond  \nthird\t"
        issues = checker.analyze(text)
        assert rule_ids(issues) == ['FM004']
        issue = issues[0]
        assert issue.evidence == "second  "
        assert text[issue.offset:issue.offset + issue.length] == "second  "

    def test_whitespace_only_line_ignored(self, checker):
        assert checker.analyze("first\n   \nsecond") == []

    def test_clean_body(self, checker):
        assert checker.analyze("Hi team,\n\nAll good.\n\nThanks") == []


class TestBlockRules:

    def test_mixed_lists_from_html(self, checker):
        blocks = BodyModelBuilder().from_html("<ul><li>a</li></ul><ol><li>b</li></ol>")
        issues = checker.analyze("a\nb", blocks)
        assert rule_ids(issues) == ['FM003']

    def test_indent_spread(self, checker):
        text = "top\n    deep"
        blocks = BodyModelBuilder().from_text(text)
        assert rule_ids(checker.analyze(text, blocks)) == ['FM005']

    def test_single_nesting_level_allowed(self, checker):
        blocks = BodyModelBuilder().from_html("<ul><li>a<ul><li>b</li></ul></li></ul>")
        assert checker.analyze("a\nb", blocks) == []


class TestSnapshotBodies:

    def test_boundary_blanks_not_counted(self, checker):
        snapshot = build_snapshot(body_text="\n\nHello\n\n\nWorld\n\n")
        assert [b.kind for b in snapshot.body_blocks] == [
            BlockKind.PARAGRAPH, BlockKind.BLANK, BlockKind.PARAGRAPH,
        ]
        assert checker.check(snapshot) == []

    def test_gap_detected_from_raw_text(self, checker):
        snapshot = build_snapshot(body_text="Hello\n\n\n\n\nWorld")
        assert sum(b.is_blank for b in snapshot.body_blocks) == 1
        assert rule_ids(checker.check(snapshot)) == ['FM002']

    def test_all_issues_located_at_body(self, checker):
        snapshot = build_snapshot(subject="Hi", body_text="\tone\n  two  \n\n\n\n\n- a\n1. b")
        issues = checker.check(snapshot)
        assert rule_ids(issues) == ['FM001', 'FM002', 'FM003', 'FM004']
        assert all(i.location == IssueLocation.BODY for i in issues)
        assert all(i.category == IssueCategory.FORMATTING for i in issues)
