"""
Tests for the context checker
=============================
"""

import pytest

from base_checker import IssueCategory, IssueSeverity, IssueLocation
from compose_context import build_snapshot
from context_checker import ContextChecker, recipient_severity
from pause_settings import PauseSettings


@pytest.fixture
def checker() -> ContextChecker:
    return ContextChecker()


def rule_ids(issues):
    return [issue.rule_id for issue in issues]


class TestRecipients:

    @pytest.mark.parametrize("count, expected", [
        (8, IssueSeverity.HIGH),
        (7, IssueSeverity.HIGH),
        (5, IssueSeverity.MEDIUM),
        (4, IssueSeverity.MEDIUM),
        (2, IssueSeverity.LOW),
        (1, None),
        (0, None),
    ])
    def test_recipient_severity(self, count, expected):
        assert recipient_severity(count) == expected

    def test_recipient_issue(self, checker):
        issues = checker.analyze(build_snapshot(recipient_count=5, body_text="Hello"))
        assert rule_ids(issues) == ['CX001']
        assert issues[0].severity == IssueSeverity.MEDIUM
        assert issues[0].category == IssueCategory.CONTEXT
        assert "5 recipients" in issues[0].message

    def test_single_recipient_is_quiet(self, checker):
        assert checker.analyze(build_snapshot(recipient_count=1, body_text="Hello")) == []


class TestAttachments:

    def test_attachment_present(self, checker):
        snapshot = build_snapshot(has_attachment=True, body_text="Report attached.")
        issues = checker.analyze(snapshot)
        assert rule_ids(issues) == ['CX002']
        assert issues[0].severity == IssueSeverity.MEDIUM
        assert "final version" in issues[0].message

    def test_missing_attachment(self, checker):
        snapshot = build_snapshot(
            recipient_count=1,
            subject="Re: contract",
            body_text="Please find attached the signed contract.",
        )
        issues = checker.analyze(snapshot)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.rule_id == 'CX003'
        assert issue.severity == IssueSeverity.HIGH
        assert issue.location == IssueLocation.BODY
        assert issue.evidence == "Please find"
        assert (issue.offset, issue.length) == (0, 11)

    def test_subject_mention_wins(self, checker):
        snapshot = build_snapshot(subject="Report attached", body_text="See attached.")
        issue = checker.analyze(snapshot)[0]
        assert issue.location == IssueLocation.SUBJECT
        assert issue.evidence == "attached"

    @pytest.mark.parametrize("body", [
        "The enclosed figures are final.",
        "See the attachments below.",
        "Please find the notes below.",
    ])
    def test_reference_variants(self, checker, body):
        assert rule_ids(checker.analyze(build_snapshot(body_text=body))) == ['CX003']

    @pytest.mark.parametrize("body", [
        "Could you attach the file?",
        "I am attaching the notes.",
        "Remember to attach your timesheet.",
    ])
    def test_intent_to_attach_is_not_a_reference(self, checker, body):
        assert checker.analyze(build_snapshot(body_text=body)) == []

    def test_no_reference(self, checker):
        assert checker.analyze(build_snapshot(body_text="Thanks for the call.")) == []


class TestKeywords:

    def test_keyword_found_once(self, checker):
        snapshot = build_snapshot(subject="Confidential", body_text="This is CONFIDENTIAL and private")
        issues = checker.analyze(snapshot, ["confidential", "private"])
        assert rule_ids(issues) == ['CX004']
        assert issues[0].severity == IssueSeverity.LOW
        assert issues[0].location == IssueLocation.SUBJECT

    def test_whole_words_only(self, checker):
        snapshot = build_snapshot(body_text="Speak privately later")
        assert checker.analyze(snapshot, ["private"]) == []

    def test_no_keywords_configured(self, checker):
        assert checker.analyze(build_snapshot(body_text="urgent")) == []

    def test_tone_signal_keywords_left_to_tone_pass(self, checker):
        snapshot = build_snapshot(body_text="This is urgent, reply asap. It is also confidential.")
        issues = checker.check(snapshot, PauseSettings())
        assert rule_ids(issues) == ['CX004']
        assert issues[0].evidence == "confidential"

    def test_tone_signal_keywords_alone(self, checker):
        snapshot = build_snapshot(body_text="This is urgent")
        assert checker.check(snapshot, PauseSettings()) == []

    def test_check_uses_settings_keywords(self, checker):
        snapshot = build_snapshot(body_text="Budget numbers inside")
        issues = checker.check(snapshot, PauseSettings(keywords=["budget"]))
        assert rule_ids(issues) == ['CX004']
        assert issues[0].evidence == "budget"
